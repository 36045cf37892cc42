"""HTML rendering for aggregated weekly issues."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from redweekly.core.numerals import to_chinese_numeral
from redweekly.core.types import AggregatedIssue, CategoryGroup


def group_by_category(issues: Iterable[AggregatedIssue]) -> list[CategoryGroup]:
    """Group issues by category in first-seen order, sorting each group by issue id."""
    by_category: dict[str, list[AggregatedIssue]] = {}
    for issue in issues:
        by_category.setdefault(issue.category, []).append(issue)

    return [
        CategoryGroup(category=category, issues=sorted(members, key=lambda issue: issue.issue_id))
        for category, members in by_category.items()
    ]


def render_report(issues: Iterable[AggregatedIssue]) -> str:
    lines: list[str] = []
    for group in group_by_category(issues):
        lines.append(f"<h4>{escape(group.category)}</h4>")
        lines.append("<ul>")
        for position, issue in enumerate(group.issues, start=1):
            lines.extend(_render_issue(position, issue))
        lines.append("</ul>")

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def _render_issue(position: int, issue: AggregatedIssue) -> list[str]:
    heading = (
        f"<h5>{to_chinese_numeral(position)}. {escape(issue.subject)} "
        f"(issue: {issue.issue_id}, {format_hours(issue.total_hours)}h)</h5>"
    )
    comments = [comment for comment in issue.comments if comment]
    if not comments:
        return [f"<li>{heading}</li>"]

    lines = [f"<li>{heading}", "<ul>"]
    for index, comment in enumerate(comments, start=1):
        lines.append(f"<li>{index}. {escape(comment)}</li>")
    lines.extend(["</ul>", "</li>"])
    return lines


def format_hours(hours: float) -> str:
    return f"{round(hours, 2):g}"
