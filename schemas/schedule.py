"""Request and response schemas for the schedule API."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.enums import (
    RescheduleStrategy,
    ScheduleAction,
    ScheduledWorkoutStatus,
    TimeSlot,
)
from models.schemas.scheduled_workout import ScheduledWorkout


class StatusTransition(BaseModel):
    """A pending status change for one scheduled workout."""
    model_config = ConfigDict(frozen=True)

    workout_id: str
    from_status: ScheduledWorkoutStatus
    to_status: ScheduledWorkoutStatus
    scheduled_date: date


class RescheduleAssignment(BaseModel):
    """New date chosen for a missed workout by a batch strategy."""
    model_config = ConfigDict(frozen=True)

    workout_id: str
    new_date: date


class ScheduleStats(BaseModel):
    total: int = 0
    scheduled: int = 0
    completed: int = 0
    missed: int = 0
    skipped: int = 0


class DateRange(BaseModel):
    start: date
    end: date


class ScheduleResponse(BaseModel):
    """Response for the schedule fetch endpoint."""
    workouts: list[ScheduledWorkout]
    workouts_by_date: dict[str, list[ScheduledWorkout]]
    stats: ScheduleStats
    date_range: DateRange
    has_missed_workouts: bool


class CreateScheduledWorkoutRequest(BaseModel):
    user_id: str = Field(..., description="User identifier")
    name: Optional[str] = Field(None, description="Workout name")
    scheduled_date: date
    scheduled_time: Optional[str] = None
    notes: Optional[str] = None


class ScheduleActionRequest(BaseModel):
    """Body for updating a single scheduled workout."""
    action: ScheduleAction
    new_date: Optional[date] = Field(None, description="Required for reschedule")
    reschedule_reason: Optional[str] = None
    skip_reason: Optional[str] = None
    workout_session_id: Optional[str] = None


class AutoRescheduleRequest(BaseModel):
    user_id: str = Field(..., description="User identifier")
    strategy: RescheduleStrategy = RescheduleStrategy.NEXT_AVAILABLE
    weeks: Optional[int] = Field(None, ge=1, le=52, description="Horizon for spread_evenly")
    tz: Optional[str] = Field(None, description="IANA timezone of the user")


class AutoRescheduleResponse(BaseModel):
    strategy: RescheduleStrategy
    assignments: list[RescheduleAssignment]
    rescheduled: int
    nothing_to_do: bool
    message: str


class SkipAllRequest(BaseModel):
    user_id: str = Field(..., description="User identifier")
    reason: Optional[str] = None
    tz: Optional[str] = Field(None, description="IANA timezone of the user")


class SkipAllResponse(BaseModel):
    skipped: int
    workout_ids: list[str]


class SuggestedDatesResponse(BaseModel):
    preferred_days: list[int]
    dates: list[date]


class PreferencesUpdateRequest(BaseModel):
    """Partial update of schedule preferences."""
    user_id: str = Field(..., description="User identifier")
    preferred_days: Optional[list[int]] = None
    preferred_time_slot: Optional[TimeSlot] = None
    reminder_time: Optional[str] = None
    auto_reschedule: Optional[bool] = None
    reschedule_window_days: Optional[int] = Field(None, ge=0)
    min_rest_days: Optional[int] = Field(None, ge=0, le=6)
    max_consecutive_workout_days: Optional[int] = Field(None, ge=1, le=7)
