"""Workout session routes."""

from fastapi import APIRouter, HTTPException, Query

from models.schemas.workout_session import WorkoutSession
from schemas.workout import LogSessionRequest, LogSessionResponse
from services import schedule_service, schedule_store, stats_store
from services.errors import InvalidInputError
from utils.helpers import local_now, to_utc
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/workouts", tags=["workouts"])


@router.post("/sessions", response_model=LogSessionResponse)
async def log_session(payload: LogSessionRequest):
    """
    Log a completed workout session.
    When the session fulfils a scheduled workout, that workout is marked completed.
    """
    try:
        completed = None
        if payload.scheduled_workout_id:
            scheduled = await schedule_store.get_workout(payload.scheduled_workout_id)
            if not scheduled or (payload.user_id and scheduled.user_id != payload.user_id):
                raise HTTPException(
                    status_code=404,
                    detail=f"Scheduled workout '{payload.scheduled_workout_id}' not found"
                )
            # Validate the transition before anything is written
            completed = schedule_service.complete(scheduled, local_now(payload.tz))

        session = WorkoutSession(
            member_id=payload.member_id,
            date=to_utc(payload.date, payload.tz),
            rating=payload.rating,
            sets=payload.sets,
            scheduled_workout_id=payload.scheduled_workout_id,
        )
        session_id = await stats_store.insert_session(session)

        if completed is not None:
            await schedule_store.save_workout(
                completed.model_copy(update={"workout_session_id": session_id})
            )

        return LogSessionResponse(
            id=session_id,
            member_id=session.member_id,
            volume=session.volume,
            scheduled_workout_completed=completed is not None,
        )

    except HTTPException:
        raise
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error logging workout session: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to log workout session"
        )


@router.get("/history/{member_id}")
async def get_workout_history(
    member_id: str,
    limit: int = Query(20, ge=1, le=200, description="Maximum number of sessions"),
):
    """Return the member's most recent completed sessions."""
    try:
        sessions = await stats_store.fetch_completed_sessions(member_id, limit=limit)
        return {
            "found": bool(sessions),
            "count": len(sessions),
            "data": sessions,
        }
    except Exception as e:
        logger.error(f"Error fetching workout history: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch workout history"
        )
