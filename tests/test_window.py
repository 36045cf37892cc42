from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from redweekly.core.types import DateWindow
from redweekly.core.window import current_week, resolve_window
from redweekly.errors import InvalidWindow


@pytest.mark.parametrize(
    "today",
    [date(2024, 6, 9), date(2024, 6, 12), date(2024, 6, 15)],
)
def test_current_week_spans_sunday_to_saturday(today: date) -> None:
    window = current_week(today)
    assert window.from_date == date(2024, 6, 9)
    assert window.to_date == date(2024, 6, 15)
    assert window.from_date.weekday() == 6
    assert window.to_date.weekday() == 5


def test_current_week_accepts_datetime_and_crosses_month() -> None:
    window = current_week(datetime(2024, 7, 2, 23, 30, tzinfo=timezone.utc))
    assert window.as_query() == {"from": "2024-06-30", "to": "2024-07-06"}


def test_resolve_window_defaults_to_current_week() -> None:
    assert resolve_window(now=date(2024, 6, 12)) == current_week(date(2024, 6, 12))


def test_resolve_window_passes_explicit_bounds_through() -> None:
    window = resolve_window("2024-01-01", date(2024, 1, 31), now=date(2024, 6, 12))
    assert window.from_date == date(2024, 1, 1)
    assert window.to_date == date(2024, 1, 31)


def test_resolve_window_allows_single_day() -> None:
    window = resolve_window("2024-03-05", "2024-03-05", now=date(2024, 6, 12))
    assert window.from_date == window.to_date


def test_resolve_window_requires_both_bounds() -> None:
    with pytest.raises(InvalidWindow, match="both"):
        resolve_window("2024-01-01", None, now=date(2024, 6, 12))


def test_resolve_window_rejects_reversed_range() -> None:
    with pytest.raises(InvalidWindow, match="after"):
        resolve_window("2024-02-01", "2024-01-01", now=date(2024, 6, 12))


def test_resolve_window_rejects_bad_date() -> None:
    with pytest.raises(InvalidWindow, match="YYYY-MM-DD"):
        resolve_window("last week", "2024-01-01", now=date(2024, 6, 12))


def test_date_window_validates_order_and_accepts_wire_names() -> None:
    window = DateWindow.model_validate({"from": "2024-06-02", "to": "2024-06-08"})
    assert window.from_date == date(2024, 6, 2)

    with pytest.raises(ValidationError):
        DateWindow(from_date=date(2024, 6, 8), to_date=date(2024, 6, 2))
