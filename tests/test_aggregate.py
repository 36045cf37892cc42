from __future__ import annotations

import pytest

from redweekly.core.aggregate import aggregate, merge_entry, total_hours
from redweekly.core.types import AggregatedIssue, IssueMeta, RawTimeEntry
from redweekly.errors import IssueNotFound


def test_merges_entries_per_issue(sample_entries, sample_issues) -> None:
    issues = {issue.issue_id: issue for issue in aggregate(sample_entries, sample_issues)}

    assert set(issues) == {1, 2}
    assert issues[1].total_hours == 3
    assert issues[1].comments == ["fixed bug"]
    assert issues[1].subject == "Crash on save"
    assert issues[2].total_hours == 3
    assert issues[2].comments == ["wrote docs"]
    assert issues[2].category == "Feature"


def test_hours_are_conserved(sample_issues) -> None:
    entries = [
        RawTimeEntry(issue_id=2, hours=0.25),
        RawTimeEntry(issue_id=1, hours=1.5, comment="a"),
        RawTimeEntry(issue_id=2, hours=4.0, comment="b"),
        RawTimeEntry(issue_id=1, hours=0.75),
    ]
    issues = aggregate(entries, sample_issues)
    assert total_hours(issues) == pytest.approx(sum(entry.hours for entry in entries))


def test_issue_without_comments_has_empty_list(sample_issues) -> None:
    entries = [RawTimeEntry(issue_id=1, hours=1), RawTimeEntry(issue_id=1, hours=2, comment="")]
    (issue,) = aggregate(entries, sample_issues)
    assert issue.comments == []
    assert issue.total_hours == 3


def test_comments_keep_encounter_order(sample_issues) -> None:
    entries = [
        RawTimeEntry(issue_id=1, hours=1, comment="zeta"),
        RawTimeEntry(issue_id=2, hours=1, comment="other"),
        RawTimeEntry(issue_id=1, hours=1, comment="alpha"),
        RawTimeEntry(issue_id=1, hours=1, comment="mid"),
    ]
    issues = {issue.issue_id: issue for issue in aggregate(entries, sample_issues)}
    assert issues[1].comments == ["zeta", "alpha", "mid"]


def test_reaggregation_is_idempotent(sample_entries, sample_issues) -> None:
    assert aggregate(sample_entries, sample_issues) == aggregate(sample_entries, sample_issues)


def test_orders_by_category_then_hours() -> None:
    issue_map = {
        1: IssueMeta(issue_id=1, subject="a", category="Support"),
        2: IssueMeta(issue_id=2, subject="b", category="Bug"),
        3: IssueMeta(issue_id=3, subject="c", category="Bug"),
    }
    entries = [
        RawTimeEntry(issue_id=1, hours=1),
        RawTimeEntry(issue_id=2, hours=5),
        RawTimeEntry(issue_id=3, hours=2),
    ]
    assert [issue.issue_id for issue in aggregate(entries, issue_map)] == [3, 2, 1]


def test_unresolved_issue_fails_whole_aggregation(sample_issues) -> None:
    entries = [RawTimeEntry(issue_id=1, hours=1), RawTimeEntry(issue_id=99, hours=1)]
    with pytest.raises(IssueNotFound) as excinfo:
        aggregate(entries, sample_issues)
    assert excinfo.value.issue_id == 99


def test_merge_entry_leaves_input_untouched(sample_issues) -> None:
    empty = AggregatedIssue.from_meta(sample_issues[1])
    first = merge_entry(empty, RawTimeEntry(issue_id=1, hours=2, comment="x"))
    second = merge_entry(first, RawTimeEntry(issue_id=1, hours=1, comment="y"))

    assert empty.total_hours == 0
    assert empty.comments == []
    assert first.total_hours == 2
    assert first.comments == ["x"]
    assert second.total_hours == 3
    assert second.comments == ["x", "y"]


def test_many_entries_aggregate_per_issue(sample_issues) -> None:
    entries = [RawTimeEntry(issue_id=1 + i % 2, hours=0.5, comment=f"c{i}") for i in range(2000)]

    issues = {issue.issue_id: issue for issue in aggregate(entries, sample_issues)}

    assert issues[1].total_hours == 500
    assert len(issues[2].comments) == 1000
    assert issues[2].comments[:2] == ["c1", "c3"]


def test_empty_input_aggregates_to_nothing(sample_issues) -> None:
    assert aggregate([], sample_issues) == []
