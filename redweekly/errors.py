from __future__ import annotations


class ReportError(RuntimeError):
    """Base class for failures that abort report generation."""


class SourceUnavailable(ReportError):
    """Raised when the time-entry or issue upstream fails or returns unusable data."""


class IssueNotFound(ReportError):
    def __init__(self, issue_id: int, message: str | None = None):
        super().__init__(message or f"issue not found: {issue_id}")
        self.issue_id = issue_id


class InvalidWindow(ReportError, ValueError):
    """Raised when a caller-supplied reporting window cannot be used."""
