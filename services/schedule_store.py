"""MongoDB persistence for scheduled workouts and schedule preferences.

Writes are made one row at a time without a transaction. When a batch
fails partway the earlier rows stay written; callers re-fetch and retry.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from models.database import (
    get_schedule_preferences_collection,
    get_scheduled_workouts_collection,
)
from models.schemas.enums import ScheduledWorkoutStatus
from models.schemas.schedule_preferences import SchedulePreferences
from models.schemas.scheduled_workout import ScheduledWorkout
from schemas.schedule import StatusTransition
from utils.helpers import to_storage_datetime
from utils.logger import setup_logger

logger = setup_logger(__name__)

DATE_FIELDS = ("scheduled_date", "original_date", "rescheduled_from")


def workout_to_document(workout: ScheduledWorkout) -> Dict[str, Any]:
    """Serialize a workout; calendar days are stored as midnight datetimes."""
    document = workout.model_dump(mode="python")
    for field in DATE_FIELDS:
        if isinstance(document.get(field), date):
            document[field] = to_storage_datetime(document[field])
    document["status"] = workout.status.value
    return document


def workout_from_document(document: Dict[str, Any]) -> ScheduledWorkout:
    document = {k: v for k, v in document.items() if k != "_id"}
    for field in DATE_FIELDS:
        if isinstance(document.get(field), datetime):
            document[field] = document[field].date()
    return ScheduledWorkout(**document)


async def fetch_workouts(
    user_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    statuses: Optional[Iterable[ScheduledWorkoutStatus]] = None,
) -> List[ScheduledWorkout]:
    """Fetch a user's scheduled workouts ordered by date.

    Args:
        user_id: User identifier
        start: First day to include
        end: Last day to include
        statuses: Restrict to these statuses
    """
    query: Dict[str, Any] = {"user_id": user_id}
    date_filter = {}
    if start:
        date_filter["$gte"] = to_storage_datetime(start)
    if end:
        date_filter["$lte"] = to_storage_datetime(end)
    if date_filter:
        query["scheduled_date"] = date_filter
    if statuses is not None:
        query["status"] = {"$in": [s.value for s in statuses]}

    cursor = get_scheduled_workouts_collection().find(query).sort("scheduled_date", 1)
    documents = await cursor.to_list(length=None)
    return [workout_from_document(d) for d in documents]


async def get_workout(workout_id: str) -> Optional[ScheduledWorkout]:
    document = await get_scheduled_workouts_collection().find_one({"id": workout_id})
    return workout_from_document(document) if document else None


async def insert_workout(workout: ScheduledWorkout) -> ScheduledWorkout:
    await get_scheduled_workouts_collection().insert_one(workout_to_document(workout))
    logger.info("Scheduled workout %s for user %s on %s", workout.id, workout.user_id, workout.scheduled_date)
    return workout


async def save_workout(workout: ScheduledWorkout) -> ScheduledWorkout:
    """Replace the stored copy of a workout."""
    await get_scheduled_workouts_collection().replace_one(
        {"id": workout.id}, workout_to_document(workout), upsert=True
    )
    return workout


async def save_workouts(workouts: Iterable[ScheduledWorkout]) -> int:
    """Save workouts one by one and return how many were written."""
    saved = 0
    for workout in workouts:
        await save_workout(workout)
        saved += 1
    return saved


async def apply_transitions(user_id: str, transitions: Iterable[StatusTransition]) -> int:
    """Persist status transitions computed from a read.

    Each update only matches while the row still has the expected status, so
    two concurrent reads flipping the same row are harmless.

    Returns:
        Number of rows actually changed
    """
    collection = get_scheduled_workouts_collection()
    modified = 0
    for transition in transitions:
        result = await collection.update_one(
            {
                "id": transition.workout_id,
                "user_id": user_id,
                "status": transition.from_status.value,
            },
            {"$set": {"status": transition.to_status.value}},
        )
        modified += result.modified_count
    if modified:
        logger.info("Applied %d status transition(s) for user %s", modified, user_id)
    return modified


async def get_preferences(user_id: str) -> SchedulePreferences:
    """Stored preferences for a user, or the defaults when none exist."""
    document = await get_schedule_preferences_collection().find_one({"user_id": user_id})
    if not document:
        return SchedulePreferences(user_id=user_id)
    document.pop("_id", None)
    return SchedulePreferences(**document)


async def save_preferences(preferences: SchedulePreferences) -> SchedulePreferences:
    await get_schedule_preferences_collection().update_one(
        {"user_id": preferences.user_id},
        {"$set": preferences.model_dump(mode="json")},
        upsert=True,
    )
    logger.info("Saved schedule preferences for user %s", preferences.user_id)
    return preferences
