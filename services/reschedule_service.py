"""Batch strategies for putting missed workouts back on the schedule."""

import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from config.settings import settings
from models.schemas.enums import RescheduleStrategy, ScheduledWorkoutStatus
from models.schemas.scheduled_workout import ScheduledWorkout
from schemas.schedule import RescheduleAssignment
from services import schedule_service
from services.errors import InvalidInputError, NoPreferredDaysError
from utils.helpers import weekday_index
from utils.logger import setup_logger

logger = setup_logger(__name__)

ONE_DAY = timedelta(days=1)


def _next_open_day(start: date, preferred: set[int], occupied: set[date]) -> date:
    """First day on or after ``start`` on a preferred weekday that is free."""
    day = start
    while weekday_index(day) not in preferred or day in occupied:
        day += ONE_DAY
    return day


def _weekday_set(preferred_days: Iterable[int]) -> set[int]:
    days = {int(d) for d in preferred_days}
    invalid = sorted(d for d in days if not 0 <= d <= 6)
    if invalid:
        raise InvalidInputError(f"Weekdays must lie in 0..6, got {invalid}")
    return days


def _occupied_dates(schedule: Iterable[ScheduledWorkout]) -> set[date]:
    return {w.scheduled_date for w in schedule if w.status == ScheduledWorkoutStatus.SCHEDULED}


def next_available(
    missed: list[ScheduledWorkout],
    preferred: set[int],
    today: date,
    occupied: set[date],
) -> list[date]:
    """Give each missed workout the next free preferred day from today."""
    taken = set(occupied)
    dates = []
    cursor = today
    for _ in missed:
        cursor = _next_open_day(cursor, preferred, taken)
        taken.add(cursor)
        dates.append(cursor)
    return dates


def end_of_schedule(
    missed: list[ScheduledWorkout],
    preferred: set[int],
    today: date,
    occupied: set[date],
) -> list[date]:
    """Append missed workouts after the last scheduled workout, in order."""
    start = today
    if occupied:
        start = max(today, max(occupied) + ONE_DAY)
    return next_available(missed, preferred, start, occupied)


def spread_evenly(
    missed: list[ScheduledWorkout],
    preferred: set[int],
    today: date,
    occupied: set[date],
    weeks: Optional[int] = None,
) -> list[date]:
    """Distribute missed workouts over the coming weeks.

    Weeks are rolling seven-day windows starting today. Each week receives
    workouts in round-robin turn, so week totals differ by at most one
    unless a week runs out of free preferred days.
    """
    count = len(missed)
    horizon = max(weeks or settings.spread_weeks, math.ceil(count / len(preferred)))

    def week_slots(index: int) -> list[date]:
        first = today + timedelta(weeks=index)
        days = (first + timedelta(days=offset) for offset in range(7))
        return [d for d in days if weekday_index(d) in preferred and d not in occupied]

    slots = [week_slots(index) for index in range(horizon)]
    while sum(len(s) for s in slots) < count:
        slots.append(week_slots(len(slots)))

    quotas = [0] * len(slots)
    week = 0
    for _ in range(count):
        while quotas[week] >= len(slots[week]):
            week = (week + 1) % len(slots)
        quotas[week] += 1
        week = (week + 1) % len(slots)

    chosen = [day for week_days, quota in zip(slots, quotas) for day in week_days[:quota]]
    return sorted(chosen)


STRATEGIES = {
    RescheduleStrategy.NEXT_AVAILABLE: next_available,
    RescheduleStrategy.END_OF_SCHEDULE: end_of_schedule,
    RescheduleStrategy.SPREAD_EVENLY: spread_evenly,
}


def auto_reschedule(
    missed: Iterable[ScheduledWorkout],
    preferred_days: Iterable[int],
    strategy: RescheduleStrategy,
    today: date,
    schedule: Iterable[ScheduledWorkout] = (),
    weeks: Optional[int] = None,
) -> list[RescheduleAssignment]:
    """Choose new dates for missed workouts with one batch strategy.

    Args:
        missed: Workouts to move; rows not in ``missed`` status are ignored
        preferred_days: Weekdays (Sunday = 0) the user trains on
        strategy: Which batch strategy to apply
        today: The user's local calendar day
        schedule: The user's other workouts; scheduled ones occupy their day
        weeks: Minimum horizon for ``spread_evenly``

    Returns:
        One assignment per missed workout, in original schedule order

    Raises:
        NoPreferredDaysError: If there are missed workouts but no preferred days
    """
    missed = list(missed)
    candidates = [w for w in missed if w.status == ScheduledWorkoutStatus.MISSED]
    if len(candidates) < len(missed):
        logger.warning("Ignoring %d workout(s) that are not missed", len(missed) - len(candidates))
    if not candidates:
        return []

    preferred = _weekday_set(preferred_days)
    if not preferred:
        raise NoPreferredDaysError(len(candidates))

    candidates.sort(key=lambda w: w.scheduled_date)
    occupied = _occupied_dates(schedule)

    if strategy == RescheduleStrategy.SPREAD_EVENLY:
        dates = spread_evenly(candidates, preferred, today, occupied, weeks)
    else:
        dates = STRATEGIES[strategy](candidates, preferred, today, occupied)

    logger.info("Strategy %s assigned %d missed workout(s)", strategy.value, len(dates))
    return [
        RescheduleAssignment(workout_id=workout.id, new_date=new_date)
        for workout, new_date in zip(candidates, dates)
    ]


def apply_assignments(
    rows: Iterable[ScheduledWorkout],
    assignments: Iterable[RescheduleAssignment],
    reason: Optional[str] = None,
) -> list[ScheduledWorkout]:
    """Return the rescheduled copies of the rows named in ``assignments``."""
    by_id = {row.id: row for row in rows}
    return [
        schedule_service.reschedule(by_id[a.workout_id], a.new_date, reason or settings.reschedule_reason)
        for a in assignments
        if a.workout_id in by_id
    ]


def skip_all(
    missed: Iterable[ScheduledWorkout],
    now: datetime,
    reason: Optional[str] = None,
) -> list[ScheduledWorkout]:
    """Skip every missed workout with one shared reason."""
    return [
        schedule_service.skip(w, now, reason or settings.batch_skip_reason)
        for w in missed
        if w.status == ScheduledWorkoutStatus.MISSED
    ]


def suggest_dates(preferred_days: Iterable[int], count: int, from_date: date) -> list[date]:
    """Next ``count`` preferred days after ``from_date`` for quick picks."""
    preferred = _weekday_set(preferred_days)
    if not preferred or count <= 0:
        return []
    suggestions = []
    day = from_date
    while len(suggestions) < count:
        day += ONE_DAY
        if weekday_index(day) in preferred:
            suggestions.append(day)
    return suggestions
