"""Compliance - Classifies tasks missing time tracking or status updates."""

from timekeeper.compliance.filter import ComplianceFilter
from timekeeper.compliance.models import ComplianceIssue, ComplianceReport, IssueKind

__all__ = [
    "ComplianceFilter",
    "ComplianceIssue",
    "ComplianceReport",
    "IssueKind",
]
