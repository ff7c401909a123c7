from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, NamedTuple, Optional

from defect_dashboard.utils.exceptions import InvalidInputError

DATE_FORMAT = "%Y-%m-%d"


class DayWindow(NamedTuple):
    """One calendar day as the half-open range ``[start, end)``."""

    day: date
    start: str
    end: str


def _local_date(reference: Optional[datetime]) -> date:
    if reference is None:
        return datetime.now().date()
    if reference.tzinfo is not None:
        # wall-clock date in the process zone, never the UTC date
        reference = reference.astimezone()
    return reference.date()


def trailing_days(n: int, reference: Optional[datetime] = None) -> List[DayWindow]:
    """Return the ``n`` calendar days ending on the reference day, oldest first.

    Args:
        n: Number of days in the window, at least 1.
        reference: Instant inside the newest day. Naive values are read as
            local time, aware values are converted to the local zone.
            Defaults to now.

    Returns:
        Day windows with ``YYYY-MM-DD`` boundaries; each window's end equals
        the next window's start.
    """
    if n < 1:
        raise InvalidInputError(f"Day window must cover at least one day, got {n}")
    newest = _local_date(reference)
    windows = []
    for offset in range(n - 1, -1, -1):
        day = newest - timedelta(days=offset)
        windows.append(
            DayWindow(
                day=day,
                start=day.strftime(DATE_FORMAT),
                end=(day + timedelta(days=1)).strftime(DATE_FORMAT),
            )
        )
    return windows


def local_midnight_iso(day: date) -> str:
    """ISO timestamp of local midnight starting ``day``, with its UTC offset."""
    return datetime.combine(day, time.min).astimezone().isoformat()
