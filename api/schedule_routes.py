"""Schedule routes: calendar fetch, missed workouts and preferences."""

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from config.settings import settings
from models.schemas.enums import ScheduleAction, ScheduledWorkoutStatus
from models.schemas.schedule_preferences import SchedulePreferences
from models.schemas.scheduled_workout import ScheduledWorkout
from schemas.schedule import (
    AutoRescheduleRequest,
    AutoRescheduleResponse,
    CreateScheduledWorkoutRequest,
    DateRange,
    PreferencesUpdateRequest,
    ScheduleActionRequest,
    ScheduleResponse,
    SkipAllRequest,
    SkipAllResponse,
    SuggestedDatesResponse,
)
from services import reschedule_service, schedule_service, schedule_store
from services.errors import InvalidInputError
from utils.helpers import local_now, local_today, start_of_week
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])

CALENDAR_STATUSES = (ScheduledWorkoutStatus.SCHEDULED, ScheduledWorkoutStatus.MISSED)


async def repair_missed(user_id: str, today: date) -> int:
    """Flip the user's overdue scheduled workouts to missed.

    Runs on the read path, so fetching a schedule may write to storage.
    """
    overdue = await schedule_store.fetch_workouts(
        user_id,
        end=today - timedelta(days=1),
        statuses=[ScheduledWorkoutStatus.SCHEDULED],
    )
    transitions = schedule_service.compute_missed_transitions(overdue, today)
    if not transitions:
        return 0
    return await schedule_store.apply_transitions(user_id, transitions)


@router.get("/workouts", response_model=ScheduleResponse)
async def get_scheduled_workouts(
    user_id: str = Query(..., description="User identifier"),
    start_date: Optional[date] = Query(None, description="First day, defaults to start of this week"),
    end_date: Optional[date] = Query(None, description="Last day, defaults to two weeks later"),
    status: Optional[ScheduledWorkoutStatus] = Query(None, description="Only this status"),
    include_completed: bool = Query(False, description="Include completed and skipped workouts"),
    tz: Optional[str] = Query(None, description="IANA timezone of the user"),
):
    """
    Get a user's scheduled workouts in a date range for the calendar view.
    Overdue workouts are marked missed before the schedule is returned.
    """
    try:
        today = local_today(tz)
        start = start_date or start_of_week(today)
        end = end_date or start + timedelta(days=13)
        if end < start:
            raise InvalidInputError("end_date must not be before start_date")

        await repair_missed(user_id, today)

        if status:
            statuses = [status]
        elif include_completed:
            statuses = None
        else:
            statuses = list(CALENDAR_STATUSES)

        workouts = await schedule_store.fetch_workouts(user_id, start, end, statuses)
        # Rows read before a concurrent repair are fixed up in memory
        workouts = schedule_service.detect_missed(workouts, today)
        stats = schedule_service.summarize(workouts)

        return ScheduleResponse(
            workouts=workouts,
            workouts_by_date=schedule_service.group_by_date(workouts),
            stats=stats,
            date_range=DateRange(start=start, end=end),
            has_missed_workouts=stats.missed > 0,
        )

    except HTTPException:
        raise
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching scheduled workouts: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch workouts"
        )


@router.post("/workouts", response_model=ScheduledWorkout)
async def create_scheduled_workout(payload: CreateScheduledWorkoutRequest):
    """Put a single workout on a user's schedule."""
    try:
        workout = ScheduledWorkout(**payload.model_dump())
        return await schedule_store.insert_workout(workout)
    except Exception as e:
        logger.error(f"Error creating scheduled workout: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to create scheduled workout"
        )


@router.put("/workouts/{workout_id}", response_model=ScheduledWorkout)
async def update_scheduled_workout(workout_id: str, payload: ScheduleActionRequest):
    """
    Reschedule, skip or complete one scheduled workout.
    Completed and skipped workouts cannot be changed any more.
    """
    try:
        workout = await schedule_store.get_workout(workout_id)
        if not workout:
            raise HTTPException(
                status_code=404,
                detail=f"Scheduled workout '{workout_id}' not found"
            )

        if payload.action == ScheduleAction.RESCHEDULE:
            if payload.new_date is None:
                raise InvalidInputError("new_date is required to reschedule a workout")
            updated = schedule_service.reschedule(workout, payload.new_date, payload.reschedule_reason)
        elif payload.action == ScheduleAction.SKIP:
            updated = schedule_service.skip(workout, local_now(), payload.skip_reason)
        else:
            updated = schedule_service.complete(workout, local_now(), payload.workout_session_id)

        logger.info(f"Workout {workout_id}: {payload.action.value} ({workout.status.value} -> {updated.status.value})")
        return await schedule_store.save_workout(updated)

    except HTTPException:
        raise
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating scheduled workout: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to update scheduled workout"
        )


@router.post("/auto-reschedule", response_model=AutoRescheduleResponse)
async def auto_reschedule_missed(payload: AutoRescheduleRequest):
    """
    Reschedule all of a user's missed workouts with one batch strategy.
    Rows are saved one at a time; after a failure, re-fetch and retry.
    """
    try:
        today = local_today(payload.tz)
        await repair_missed(payload.user_id, today)

        preferences = await schedule_store.get_preferences(payload.user_id)
        missed = await schedule_store.fetch_workouts(
            payload.user_id, statuses=[ScheduledWorkoutStatus.MISSED]
        )
        upcoming = await schedule_store.fetch_workouts(
            payload.user_id, start=today, statuses=[ScheduledWorkoutStatus.SCHEDULED]
        )

        assignments = reschedule_service.auto_reschedule(
            missed,
            preferences.preferred_days,
            payload.strategy,
            today,
            schedule=upcoming,
            weeks=payload.weeks,
        )
        if not assignments:
            return AutoRescheduleResponse(
                strategy=payload.strategy,
                assignments=[],
                rescheduled=0,
                nothing_to_do=True,
                message="No missed workouts to reschedule",
            )

        updated = reschedule_service.apply_assignments(missed, assignments)
        saved = await schedule_store.save_workouts(updated)

        return AutoRescheduleResponse(
            strategy=payload.strategy,
            assignments=assignments,
            rescheduled=saved,
            nothing_to_do=False,
            message=f"Rescheduled {saved} missed workout(s)",
        )

    except HTTPException:
        raise
    except InvalidInputError as e:
        logger.warning(f"Auto-reschedule rejected for user {payload.user_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error auto-rescheduling: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to auto-reschedule"
        )


@router.post("/skip-all", response_model=SkipAllResponse)
async def skip_all_missed(payload: SkipAllRequest):
    """Skip every missed workout of a user with one shared reason."""
    try:
        today = local_today(payload.tz)
        await repair_missed(payload.user_id, today)

        missed = await schedule_store.fetch_workouts(
            payload.user_id, statuses=[ScheduledWorkoutStatus.MISSED]
        )
        skipped = reschedule_service.skip_all(missed, local_now(payload.tz), payload.reason)
        await schedule_store.save_workouts(skipped)

        return SkipAllResponse(skipped=len(skipped), workout_ids=[w.id for w in skipped])

    except Exception as e:
        logger.error(f"Error skipping missed workouts: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to skip missed workouts"
        )


@router.get("/suggested-dates", response_model=SuggestedDatesResponse)
async def get_suggested_dates(
    user_id: str = Query(..., description="User identifier"),
    count: int = Query(settings.suggested_date_count, ge=1, le=14, description="Number of dates"),
    tz: Optional[str] = Query(None, description="IANA timezone of the user"),
):
    """Next preferred training days after today, for quick rescheduling."""
    try:
        preferences = await schedule_store.get_preferences(user_id)
        dates = reschedule_service.suggest_dates(preferences.preferred_days, count, local_today(tz))
        return SuggestedDatesResponse(preferred_days=preferences.preferred_days, dates=dates)
    except Exception as e:
        logger.error(f"Error suggesting dates: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to suggest dates"
        )


@router.get("/preferences", response_model=SchedulePreferences)
async def get_schedule_preferences(
    user_id: str = Query(..., description="User identifier"),
):
    """Get schedule preferences, falling back to defaults."""
    try:
        return await schedule_store.get_preferences(user_id)
    except Exception as e:
        logger.error(f"Error fetching schedule preferences: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch schedule preferences"
        )


@router.put("/preferences", response_model=SchedulePreferences)
async def update_schedule_preferences(payload: PreferencesUpdateRequest):
    """Update only the preference fields present in the request."""
    try:
        current = await schedule_store.get_preferences(payload.user_id)
        updates = payload.model_dump(exclude_unset=True, exclude={"user_id"})
        preferences = SchedulePreferences(**{**current.model_dump(), **updates})
        return await schedule_store.save_preferences(preferences)

    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    except Exception as e:
        logger.error(f"Error updating schedule preferences: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to update schedule preferences"
        )
