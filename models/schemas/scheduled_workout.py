"""Scheduled workouts collection schema."""

from datetime import date, datetime
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.enums import ScheduledWorkoutStatus


class ScheduledWorkout(BaseModel):
    """Scheduled workouts collection model.

    Records are immutable; status changes go through the transition
    functions in ``services.schedule_service`` which return new copies.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = Field(..., description="User identifier")
    name: Optional[str] = Field(None, description="Workout name")
    scheduled_date: date = Field(..., description="Day the workout is planned for")
    scheduled_time: Optional[str] = Field(None, description="Planned time of day (HH:MM)")
    status: ScheduledWorkoutStatus = Field(ScheduledWorkoutStatus.SCHEDULED)
    original_date: Optional[date] = Field(None, description="First date before any reschedule")
    rescheduled_count: int = Field(0, ge=0)
    rescheduled_from: Optional[date] = None
    rescheduled_reason: Optional[str] = None
    skipped_at: Optional[datetime] = None
    skipped_reason: Optional[str] = None
    completed_at: Optional[datetime] = None
    workout_session_id: Optional[str] = None
    notes: Optional[str] = None
