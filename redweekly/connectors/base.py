from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from redweekly.core.types import DateWindow, IssueMeta, RawTimeEntry


class TimeEntrySource(ABC):
    @abstractmethod
    def fetch(self, window: DateWindow, user_id: str) -> list[RawTimeEntry]:
        """Return every time entry logged by ``user_id`` inside ``window``.

        Raises SourceUnavailable when the upstream call fails or the payload is malformed.
        """
        raise NotImplementedError


class IssueResolver(ABC):
    @abstractmethod
    def resolve(self, issue_ids: Iterable[int]) -> dict[int, IssueMeta]:
        """Return metadata for every id, fetching each distinct id at most once.

        Raises IssueNotFound for ids the upstream does not know.
        """
        raise NotImplementedError
