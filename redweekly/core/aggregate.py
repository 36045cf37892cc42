from __future__ import annotations

from collections.abc import Iterable, Mapping

from redweekly.core.types import AggregatedIssue, IssueMeta, RawTimeEntry
from redweekly.errors import IssueNotFound


def merge_entry(issue: AggregatedIssue, entry: RawTimeEntry) -> AggregatedIssue:
    """Return a copy of ``issue`` with ``entry``'s hours and comment folded in."""
    comments = [*issue.comments, entry.comment] if entry.comment else issue.comments
    return issue.model_copy(
        update={"total_hours": issue.total_hours + entry.hours, "comments": comments}
    )


def aggregate(
    raw_entries: Iterable[RawTimeEntry],
    issue_map: Mapping[int, IssueMeta],
) -> list[AggregatedIssue]:
    merged: dict[int, AggregatedIssue] = {}
    for entry in raw_entries:
        meta = issue_map.get(entry.issue_id)
        if meta is None:
            raise IssueNotFound(entry.issue_id, f"time entry references unresolved issue {entry.issue_id}")
        current = merged.get(entry.issue_id) or AggregatedIssue.from_meta(meta)
        merged[entry.issue_id] = merge_entry(current, entry)

    # Intermediate order only; render_report regroups and sorts by issue id.
    return sorted(merged.values(), key=lambda issue: (issue.category, issue.total_hours))


def total_hours(issues: Iterable[AggregatedIssue]) -> float:
    return sum(issue.total_hours for issue in issues)
