"""Reference set and candidate pool selection for a (year, month) query."""

import calendar
from datetime import date, timedelta
from typing import Iterable

from continuity import Event

# Days searched before and after the target month
WINDOW_DAYS = 15


def search_window(year: int, month: int) -> tuple[date, date]:
    """Return the inclusive candidate window for a target month.

    The window spans WINDOW_DAYS before the first and after the last day of
    the month. In January the lower bound stays at the month start, so the
    search never looks back into the previous year.

    Args:
        year: Target (current) year.
        month: Target month, 1-12.

    Returns:
        Tuple (start, end), both inclusive.
    """
    month_start = date(year, month, 1)
    month_end = date(year, month, calendar.monthrange(year, month)[1])
    if month == 1:
        start = month_start
    else:
        start = month_start - timedelta(days=WINDOW_DAYS)
    return start, month_end + timedelta(days=WINDOW_DAYS)


def build_pool(events: Iterable[Event], target_year: int, target_month: int) -> list[Event]:
    """Collect the current-year candidates for a target month.

    Only events of ``target_year`` inside the search window qualify, so a
    December window is cut at 31 December. The pool is sorted by date; the
    sort is stable, so events on the same day keep their source order.
    The matcher breaks distance ties by this order.

    Args:
        events: All events from the store snapshot.
        target_year: Current year.
        target_month: Target month, 1-12.

    Returns:
        Candidate events, ascending by date.
    """
    start, end = search_window(target_year, target_month)
    candidates = [
        e for e in events
        if e.date.year == target_year and start <= e.date <= end
    ]
    return sorted(candidates, key=lambda e: e.date)


def reference_events(events: Iterable[Event], target_year: int, target_month: int) -> list[Event]:
    """Collect last year's events of the target month, in source order."""
    return [
        e for e in events
        if e.date.year == target_year - 1 and e.date.month == target_month
    ]
