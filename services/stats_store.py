"""MongoDB queries behind the member stats endpoint."""

from typing import Any, Dict, List

from models.database import (
    get_goals_collection,
    get_personal_records_collection,
    get_workout_sessions_collection,
)
from models.schemas.enums import SessionStatus
from models.schemas.workout_session import WorkoutSession
from utils.logger import setup_logger

logger = setup_logger(__name__)


def _serialize(document: Dict[str, Any]) -> Dict[str, Any]:
    document["id"] = str(document.pop("_id"))
    return document


async def fetch_completed_sessions(member_id: str, limit: int = 0) -> List[Dict[str, Any]]:
    """Completed sessions for a member, most recent first.

    Args:
        member_id: Circle member identifier
        limit: Maximum number of sessions, 0 for all

    Returns:
        Session documents with ``id``, ``date``, ``rating`` and ``sets``
    """
    cursor = get_workout_sessions_collection().find(
        {"member_id": member_id, "status": SessionStatus.COMPLETED.value},
        {"date": 1, "rating": 1, "sets": 1, "scheduled_workout_id": 1},
    ).sort("date", -1)
    if limit:
        cursor = cursor.limit(limit)
    sessions = await cursor.to_list(length=None)
    return [_serialize(s) for s in sessions]


async def total_volume(member_id: str) -> float:
    """Sum of weight x reps across every set of completed sessions."""
    pipeline = [
        {"$match": {"member_id": member_id, "status": SessionStatus.COMPLETED.value}},
        {"$unwind": "$sets"},
        {"$group": {
            "_id": None,
            "total_volume": {"$sum": {"$multiply": [
                {"$ifNull": ["$sets.weight", 0]},
                {"$ifNull": ["$sets.reps", 0]},
            ]}},
        }},
    ]
    result = await get_workout_sessions_collection().aggregate(pipeline).to_list(length=1)
    return float(result[0]["total_volume"]) if result else 0.0


async def count_personal_records(member_id: str) -> int:
    return await get_personal_records_collection().count_documents({"member_id": member_id})


async def count_completed_goals(member_id: str) -> int:
    return await get_goals_collection().count_documents(
        {"member_id": member_id, "status": "completed"}
    )


async def insert_session(session: WorkoutSession) -> str:
    """Store a workout session and return its id."""
    result = await get_workout_sessions_collection().insert_one(session.model_dump(mode="python"))
    logger.info("Logged %s session for member %s", session.status.value, session.member_id)
    return str(result.inserted_id)
