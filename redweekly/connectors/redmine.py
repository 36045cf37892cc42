from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from redweekly.connectors.base import IssueResolver, TimeEntrySource
from redweekly.core.types import DateWindow, IssueMeta, RawTimeEntry
from redweekly.errors import IssueNotFound, SourceUnavailable

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Redmine-API-Key"


class RedmineClient:
    def __init__(self, base_url: str, api_key: str, *, timeout_seconds: float = 20.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """GET a Redmine JSON resource; returns None when it does not exist (404)."""
        if not self.base_url:
            raise SourceUnavailable("Redmine base URL not configured. Set REDMINE_BASE or redmine.base_url.")
        if not self.api_key:
            raise SourceUnavailable("Redmine API key not provided")

        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.get(url, params=params, headers={API_KEY_HEADER: self.api_key})
        except httpx.HTTPError as exc:
            raise SourceUnavailable(f"Redmine request failed: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.status_code in {401, 403}:
            raise SourceUnavailable(f"Redmine authentication failed ({response.status_code}): check the API key")
        if response.status_code >= 400:
            raise SourceUnavailable(f"Redmine API error: {response.status_code} {response.text}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceUnavailable(f"Redmine response from {path} was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise SourceUnavailable(f"Redmine response from {path} must be a JSON object")
        return payload


class RedmineTimeEntrySource(TimeEntrySource):
    def __init__(self, client: RedmineClient, *, page_limit: int = 100) -> None:
        self.client = client
        self.page_limit = page_limit

    def fetch(self, window: DateWindow, user_id: str = "me") -> list[RawTimeEntry]:
        entries: list[RawTimeEntry] = []
        seen_ids: set[int] = set()
        offset = 0
        while True:
            params = {
                **window.as_query(),
                "user_id": user_id,
                "limit": self.page_limit,
                "offset": offset,
            }
            payload = self.client.get_json("/time_entries.json", params)
            if payload is None:
                raise SourceUnavailable("Redmine time entries endpoint not found")

            page = payload.get("time_entries")
            if not isinstance(page, list):
                raise SourceUnavailable("unexpected Redmine time entries response shape")
            for item in page:
                entry_id = item.get("id") if isinstance(item, dict) else None
                if entry_id is not None:
                    if entry_id in seen_ids:
                        raise SourceUnavailable(
                            f"Redmine returned time entry {entry_id} twice (offset {offset} ignored?)"
                        )
                    seen_ids.add(entry_id)
                entries.append(_parse_entry(item))

            offset += len(page)
            total = payload.get("total_count")
            if not page or not isinstance(total, int) or offset >= total:
                break

        logger.info(
            "fetched %d time entries for user %s (%s..%s)",
            len(entries),
            user_id,
            window.from_date,
            window.to_date,
        )
        return entries


class RedmineIssueResolver(IssueResolver):
    def __init__(self, client: RedmineClient) -> None:
        self.client = client

    def resolve(self, issue_ids: Iterable[int]) -> dict[int, IssueMeta]:
        resolved: dict[int, IssueMeta] = {}
        for issue_id in issue_ids:
            if issue_id in resolved:
                continue
            resolved[issue_id] = self._fetch_issue(issue_id)
        logger.debug("resolved %d distinct issues", len(resolved))
        return resolved

    def _fetch_issue(self, issue_id: int) -> IssueMeta:
        payload = self.client.get_json(f"/issues/{issue_id}.json")
        issue = payload.get("issue") if payload is not None else None
        if not isinstance(issue, dict):
            raise IssueNotFound(issue_id)

        tracker = issue.get("tracker")
        subject = issue.get("subject")
        if not isinstance(subject, str) or not isinstance(tracker, dict) or not isinstance(tracker.get("name"), str):
            raise SourceUnavailable(f"unexpected Redmine issue response shape for issue {issue_id}")
        return IssueMeta(issue_id=issue_id, subject=subject, category=tracker["name"])


def _parse_entry(item: Any) -> RawTimeEntry:
    if not isinstance(item, dict):
        raise SourceUnavailable("Redmine time entry must be an object")

    issue = item.get("issue")
    if not isinstance(issue, dict) or not isinstance(issue.get("id"), int):
        raise SourceUnavailable(f"time entry {item.get('id')} is not linked to an issue")

    hours = item.get("hours")
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        raise SourceUnavailable(f"time entry {item.get('id')} has no numeric hours")

    comment = item.get("comments")
    return RawTimeEntry(
        issue_id=issue["id"],
        hours=float(hours),
        comment=comment if isinstance(comment, str) else None,
    )
