"""Custom exceptions for the ClickUp client."""


class ClickUpError(Exception):
    """Base exception for ClickUp client errors."""


class SourceUnavailable(ClickUpError):
    """A ClickUp API call could not complete (network, auth or rate limit)."""
