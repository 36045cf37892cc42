from __future__ import annotations

import pytest

from redweekly.core.types import IssueMeta, RawTimeEntry


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("REDMINE_BASE", "AI_ENDPOINT", "AI_API_KEY", "AI_API_MODEL", "REDWEEKLY_LOG_LEVEL", "REDMINE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture()
def sample_entries() -> list[RawTimeEntry]:
    return [
        RawTimeEntry(issue_id=1, hours=2, comment="fixed bug"),
        RawTimeEntry(issue_id=1, hours=1, comment=""),
        RawTimeEntry(issue_id=2, hours=3, comment="wrote docs"),
    ]


@pytest.fixture()
def sample_issues() -> dict[int, IssueMeta]:
    return {
        1: IssueMeta(issue_id=1, subject="Crash on save", category="Bug"),
        2: IssueMeta(issue_id=2, subject="Docs pass", category="Feature"),
    }
