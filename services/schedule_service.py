"""Scheduled workout state machine and missed-workout detection.

Status flow::

    scheduled -> completed            (terminal)
    scheduled -> missed               (date passed, detected on read)
    missed    -> scheduled            (reschedule, count incremented)
    scheduled|missed -> skipped       (terminal)

Every function here is pure and returns new records; persisting the result
is left to ``services.schedule_store``.
"""

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Optional

from models.schemas.enums import ScheduledWorkoutStatus
from models.schemas.scheduled_workout import ScheduledWorkout
from schemas.schedule import ScheduleStats, StatusTransition
from services.errors import InvalidTransitionError
from utils.logger import setup_logger

logger = setup_logger(__name__)

OPEN_STATUSES = (ScheduledWorkoutStatus.SCHEDULED, ScheduledWorkoutStatus.MISSED)


def _require_open(workout: ScheduledWorkout, action: str) -> None:
    if workout.status not in OPEN_STATUSES:
        raise InvalidTransitionError(workout.id, workout.status.value, action)


def mark_missed(workout: ScheduledWorkout) -> ScheduledWorkout:
    if workout.status != ScheduledWorkoutStatus.SCHEDULED:
        raise InvalidTransitionError(workout.id, workout.status.value, "mark missed")
    return workout.model_copy(update={"status": ScheduledWorkoutStatus.MISSED})


def reschedule(workout: ScheduledWorkout, new_date: date, reason: Optional[str] = None) -> ScheduledWorkout:
    """Move a workout to ``new_date`` and put it back on the schedule.

    The new date is not checked against today; callers validate it.
    """
    _require_open(workout, "reschedule")
    return workout.model_copy(update={
        "scheduled_date": new_date,
        "status": ScheduledWorkoutStatus.SCHEDULED,
        "original_date": workout.original_date or workout.scheduled_date,
        "rescheduled_from": workout.scheduled_date,
        "rescheduled_reason": reason,
        "rescheduled_count": workout.rescheduled_count + 1,
    })


def skip(workout: ScheduledWorkout, now: datetime, reason: Optional[str] = None) -> ScheduledWorkout:
    _require_open(workout, "skip")
    return workout.model_copy(update={
        "status": ScheduledWorkoutStatus.SKIPPED,
        "skipped_at": now,
        "skipped_reason": reason,
    })


def complete(
    workout: ScheduledWorkout,
    now: datetime,
    workout_session_id: Optional[str] = None,
) -> ScheduledWorkout:
    _require_open(workout, "complete")
    return workout.model_copy(update={
        "status": ScheduledWorkoutStatus.COMPLETED,
        "completed_at": now,
        "workout_session_id": workout_session_id,
    })


def compute_missed_transitions(rows: Iterable[ScheduledWorkout], today: date) -> list[StatusTransition]:
    """Find still-scheduled workouts whose day has passed.

    Args:
        rows: Scheduled workouts as fetched from storage
        today: The user's local calendar day

    Returns:
        One ``scheduled -> missed`` transition per overdue row
    """
    return [
        StatusTransition(
            workout_id=row.id,
            from_status=ScheduledWorkoutStatus.SCHEDULED,
            to_status=ScheduledWorkoutStatus.MISSED,
            scheduled_date=row.scheduled_date,
        )
        for row in rows
        if row.status == ScheduledWorkoutStatus.SCHEDULED and row.scheduled_date < today
    ]


def apply_missed_transitions(
    rows: Iterable[ScheduledWorkout],
    transitions: Iterable[StatusTransition],
) -> list[ScheduledWorkout]:
    """Return ``rows`` with the given transitions applied in memory."""
    missed_ids = {t.workout_id for t in transitions}
    return [
        mark_missed(row) if row.id in missed_ids and row.status == ScheduledWorkoutStatus.SCHEDULED else row
        for row in rows
    ]


def detect_missed(rows: Iterable[ScheduledWorkout], today: date) -> list[ScheduledWorkout]:
    """Mark overdue workouts as missed. Applying it twice changes nothing."""
    rows = list(rows)
    return apply_missed_transitions(rows, compute_missed_transitions(rows, today))


def summarize(rows: Iterable[ScheduledWorkout]) -> ScheduleStats:
    rows = list(rows)
    counts = defaultdict(int)
    for row in rows:
        counts[row.status] += 1
    return ScheduleStats(
        total=len(rows),
        scheduled=counts[ScheduledWorkoutStatus.SCHEDULED],
        completed=counts[ScheduledWorkoutStatus.COMPLETED],
        missed=counts[ScheduledWorkoutStatus.MISSED],
        skipped=counts[ScheduledWorkoutStatus.SKIPPED],
    )


def group_by_date(rows: Iterable[ScheduledWorkout]) -> dict[str, list[ScheduledWorkout]]:
    """Group workouts under their ISO date for calendar views."""
    grouped: dict[str, list[ScheduledWorkout]] = {}
    for row in rows:
        grouped.setdefault(row.scheduled_date.isoformat(), []).append(row)
    return grouped
