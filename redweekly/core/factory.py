"""Factory functions for building redweekly runtime components.

Shared by the CLI and the web app so both wire the same collaborators.
"""

from __future__ import annotations

from redweekly.connectors.redmine import RedmineClient, RedmineIssueResolver, RedmineTimeEntrySource
from redweekly.core.config import LLMConfig, RedweeklyConfig
from redweekly.core.pipeline import WeeklyReportService
from redweekly.llm import OpenAIChatProvider, SummaryAnnotator


def build_annotator(config: LLMConfig) -> SummaryAnnotator | None:
    """Return a summary annotator, or None when the model is not configured."""
    if not config.configured:
        return None
    provider = OpenAIChatProvider(
        endpoint=config.endpoint,
        api_key=config.api_key,
        model_name=config.model,
        timeout_seconds=config.timeout_seconds,
    )
    return SummaryAnnotator(
        provider,
        max_retries=config.max_retries,
        retry_backoff_seconds=config.retry_backoff_seconds,
    )


def build_report_service(
    config: RedweeklyConfig,
    *,
    api_key: str,
    with_summary: bool = True,
) -> WeeklyReportService:
    client = RedmineClient(
        config.redmine.base_url,
        api_key,
        timeout_seconds=config.redmine.timeout_seconds,
    )
    return WeeklyReportService(
        source=RedmineTimeEntrySource(client, page_limit=config.redmine.page_limit),
        resolver_factory=lambda: RedmineIssueResolver(client),
        annotator=build_annotator(config.llm) if with_summary else None,
        empty_message=config.report.empty_message,
    )
