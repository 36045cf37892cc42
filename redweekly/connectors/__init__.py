from __future__ import annotations

from redweekly.connectors.base import IssueResolver, TimeEntrySource
from redweekly.connectors.redmine import RedmineClient, RedmineIssueResolver, RedmineTimeEntrySource

__all__ = [
    "IssueResolver",
    "RedmineClient",
    "RedmineIssueResolver",
    "RedmineTimeEntrySource",
    "TimeEntrySource",
]
