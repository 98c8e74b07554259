"""Date-seeded selection of the day's poem and essay indices."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

DEFAULT_ESSAY_MULTIPLIER = 7


def calendar_day(moment: date | datetime, tz: tzinfo) -> date:
    """Return the calendar day of ``moment`` in the reference zone ``tz``.

    Aware datetimes are converted first; naive datetimes are taken to be in
    ``tz`` already.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(tz)
        return moment.date()
    return moment


def daily_seed(moment: date | datetime, tz: tzinfo) -> int:
    """Encode the calendar day as ``YYYYMMDD``."""
    day = calendar_day(moment, tz)
    return day.year * 10000 + day.month * 100 + day.day


def select_indices(
    seed: int,
    poem_pool_size: int,
    essay_pool_size: int,
    *,
    multiplier: int = DEFAULT_ESSAY_MULTIPLIER,
) -> tuple[int, int]:
    """Map a seed onto one poem index and one essay index.

    An empty poem pool yields index 0, which callers treat as "use the
    fallback poem". The essay pool must not be empty.
    """
    if essay_pool_size <= 0:
        raise ValueError("essay pool must contain at least one entry")
    poem_index = seed % max(poem_pool_size, 1)
    essay_index = (seed * multiplier) % essay_pool_size
    return poem_index, essay_index
