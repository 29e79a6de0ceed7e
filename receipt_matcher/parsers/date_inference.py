"""
Year inference for month-day receipt dates.

Receipt filenames often carry only a month and day ("12-28"). The year is
chosen from the previous, current and next year around "today", taking the
candidate closest to today. Ties go to the past, since a receipt is usually
uploaded after the purchase.

Examples (today = 2026-01-05):
  - "12-28" -> 2025-12-28 (8 days back beats 357 days ahead)
  - "1-10"  -> 2026-01-10
"""

from datetime import date


def infer_year(month: int, day: int, today: date) -> date | None:
    """
    Resolve a (month, day) pair to the calendar date closest to today.

    Args:
        month: Month number (1-12)
        day: Day of month
        today: Reference date

    Returns:
        The resolved date, or None if the month/day is not a valid date in
        any of the three candidate years.
    """
    candidates = []
    for year in (today.year - 1, today.year, today.year + 1):
        try:
            candidates.append(date(year, month, day))
        except ValueError:
            # Feb 29 outside a leap year, or out-of-range month/day
            continue

    if not candidates:
        return None

    # Sort key: distance first, then prefer the past (negative offset)
    return min(
        candidates,
        key=lambda d: (abs((d - today).days), (d - today).days),
    )
