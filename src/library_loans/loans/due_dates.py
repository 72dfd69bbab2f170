"""
Business-day due date arithmetic.

Only weekends are skipped; there is no holiday calendar.
"""

from datetime import date, timedelta
from typing import TypeVar

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6

# Calendar days consumed by one business-day step, keyed by weekday.
_STEP_DAYS = {FRIDAY: 3, SATURDAY: 2, SUNDAY: 1}

D = TypeVar("D", bound=date)


def is_business_day(day: date) -> bool:
    return day.weekday() < SATURDAY


def compute_due_date(start: D, business_day_offset: int) -> D:
    """Advance `start` by `business_day_offset` business days.

    Works on `date` and `datetime` alike; a datetime keeps its time of day
    because every step is a whole number of days. The result is always a
    weekday, even for an offset of zero on a weekend start.
    """
    if business_day_offset < 0:
        raise ValueError(f"business_day_offset must be >= 0, got {business_day_offset}")

    due = start
    for _ in range(business_day_offset):
        due += timedelta(days=_STEP_DAYS.get(due.weekday(), 1))

    while not is_business_day(due):
        due += timedelta(days=1)
    return due
