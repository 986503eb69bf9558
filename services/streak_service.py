"""Workout streak calculation."""

from datetime import date, timedelta
from typing import Any, Iterable, Optional

from schemas.stats import StreakState
from utils.helpers import start_of_month, start_of_week, to_local_date
from utils.logger import setup_logger

logger = setup_logger(__name__)

ONE_DAY = timedelta(days=1)


def normalize_dates(values: Iterable[Any], tz: Optional[str] = None) -> list[date]:
    """Reduce completion timestamps to local calendar days.

    Values that cannot be interpreted as a date are dropped.
    """
    days = []
    dropped = 0
    for value in values:
        day = to_local_date(value, tz)
        if day is None:
            dropped += 1
            continue
        days.append(day)
    if dropped:
        logger.warning("Ignored %d completion value(s) that are not dates", dropped)
    return days


def compute_streak(completion_dates: Iterable[Any], today: date, tz: Optional[str] = None) -> StreakState:
    """Compute current and longest streaks of consecutive workout days.

    Several workouts on the same day count once. The current streak is only
    alive when the most recent workout was today or yesterday.

    Args:
        completion_dates: Dates, datetimes or ISO strings of completed sessions
        today: The member's local calendar day
        tz: Zone used to localize aware datetimes

    Returns:
        StreakState with ``longest >= current``
    """
    unique_days = sorted(set(normalize_dates(completion_dates, tz)), reverse=True)
    if not unique_days:
        return StreakState(current=0, longest=0)

    current = 0
    if unique_days[0] in (today, today - ONE_DAY):
        current = 1
        expected = unique_days[0]
        for day in unique_days[1:]:
            expected -= ONE_DAY
            if day != expected:
                break
            current += 1

    longest = 0
    run = 1
    for previous, day in zip(unique_days, unique_days[1:]):
        if previous - day == ONE_DAY:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    return StreakState(current=current, longest=max(longest, current))


def count_in_period(completion_dates: Iterable[Any], today: date, tz: Optional[str] = None) -> tuple[int, int]:
    """Count sessions in the current week (from Sunday) and month.

    Sessions are counted individually, so two workouts on one day count twice.

    Returns:
        Tuple of (this_week, this_month)
    """
    week_start = start_of_week(today)
    month_start = start_of_month(today)
    this_week = 0
    this_month = 0
    for day in normalize_dates(completion_dates, tz):
        if day >= week_start:
            this_week += 1
        if day >= month_start:
            this_month += 1
    return this_week, this_month
