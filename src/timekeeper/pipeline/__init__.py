"""Pipeline - A single compliance run from ClickUp to Slack."""

from timekeeper.pipeline.exceptions import PipelineError
from timekeeper.pipeline.models import RunResult
from timekeeper.pipeline.pipeline import CompliancePipeline, run_check

__all__ = [
    "CompliancePipeline",
    "PipelineError",
    "RunResult",
    "run_check",
]
