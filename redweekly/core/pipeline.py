"""End-to-end weekly report generation.

window -> time entries -> issue metadata -> aggregation -> HTML -> optional summary.
Primary data is all-or-nothing: SourceUnavailable and IssueNotFound propagate.
The summary is best effort and any LLMError only drops the paragraph.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from html import escape

from pydantic import BaseModel, Field

from redweekly.connectors.base import IssueResolver, TimeEntrySource
from redweekly.core.aggregate import aggregate, total_hours
from redweekly.core.config import DEFAULT_EMPTY_MESSAGE
from redweekly.core.render import render_report
from redweekly.core.types import AggregatedIssue, DateWindow
from redweekly.core.window import current_week
from redweekly.llm.errors import LLMError
from redweekly.llm.summary import SummaryAnnotator

logger = logging.getLogger(__name__)


class ReportResult(BaseModel):
    window: DateWindow
    text: str
    issues: list[AggregatedIssue] = Field(default_factory=list)
    summary: str | None = None

    @property
    def empty(self) -> bool:
        return not self.issues


class WeeklyReportService:
    def __init__(
        self,
        *,
        source: TimeEntrySource,
        resolver_factory: Callable[[], IssueResolver],
        annotator: SummaryAnnotator | None = None,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
    ) -> None:
        self.source = source
        self.resolver_factory = resolver_factory
        self.annotator = annotator
        self.empty_message = empty_message

    def generate(
        self,
        *,
        user_id: str = "me",
        window: DateWindow | None = None,
        now: date | datetime | None = None,
    ) -> ReportResult:
        if window is None:
            window = current_week(now or datetime.now().astimezone())
        resolved_window = window

        entries = self.source.fetch(resolved_window, user_id)
        # Fresh resolver per report so the issue cache never outlives a request.
        issue_map = self.resolver_factory().resolve(entry.issue_id for entry in entries)
        issues = aggregate(entries, issue_map)
        html = render_report(issues)

        if not html:
            logger.info("no time entries between %s and %s", resolved_window.from_date, resolved_window.to_date)
            return ReportResult(window=resolved_window, text=self.empty_message)

        logger.info(
            "rendered %d issues (%.2fh) for %s..%s",
            len(issues),
            total_hours(issues),
            resolved_window.from_date,
            resolved_window.to_date,
        )
        summary = self._summarize(html)
        if summary:
            html += f"<p>{escape(summary)}</p>"
        return ReportResult(window=resolved_window, text=html, issues=issues, summary=summary)

    def _summarize(self, html: str) -> str | None:
        if self.annotator is None:
            return None
        try:
            return self.annotator.summarize(html)
        except LLMError as exc:
            logger.warning("summary unavailable, returning report without it: %s", exc)
            return None
