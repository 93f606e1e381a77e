"""Exceptions for the pipeline module."""


class PipelineError(Exception):
    """A compliance run could not complete."""
