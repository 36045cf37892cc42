"""Reporting window resolution.

The default window is the Sunday-to-Saturday week containing ``now``. ``now``
is always passed in so callers decide which clock (and which timezone) counts.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from pydantic import ValidationError

from redweekly.core.types import DateWindow
from redweekly.errors import InvalidWindow


def current_week(now: date | datetime) -> DateWindow:
    today = now.date() if isinstance(now, datetime) else now
    # date.weekday() counts from Monday; shift so Sunday is day 0.
    days_since_sunday = (today.weekday() + 1) % 7
    sunday = today - timedelta(days=days_since_sunday)
    return DateWindow(from_date=sunday, to_date=sunday + timedelta(days=6))


def resolve_window(
    from_date: date | str | None = None,
    to_date: date | str | None = None,
    *,
    now: date | datetime,
) -> DateWindow:
    if from_date is None and to_date is None:
        return current_week(now)
    if from_date is None or to_date is None:
        raise InvalidWindow("both 'from' and 'to' must be given, or neither")

    start = _parse_date(from_date, field="from")
    end = _parse_date(to_date, field="to")
    try:
        return DateWindow(from_date=start, to_date=end)
    except ValidationError as exc:
        raise InvalidWindow(
            f"invalid window: '{start.isoformat()}' is after '{end.isoformat()}'"
        ) from exc


def _parse_date(value: date | str, *, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidWindow(f"'{field}' must be a YYYY-MM-DD date, got {value!r}") from exc
