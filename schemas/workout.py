"""Workout session request schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.schemas.workout_session import ExerciseSet


class LogSessionRequest(BaseModel):
    """Body for logging a completed workout session."""
    member_id: str = Field(..., description="Circle member identifier")
    user_id: Optional[str] = Field(None, description="Owner of the scheduled workout, if any")
    date: datetime = Field(..., description="When the session took place")
    rating: Optional[int] = Field(None, ge=1, le=5)
    sets: list[ExerciseSet] = Field(default_factory=list)
    scheduled_workout_id: Optional[str] = Field(None, description="Scheduled workout this session fulfils")
    tz: Optional[str] = Field(None, description="IANA timezone a date without offset is local to")


class LogSessionResponse(BaseModel):
    id: str
    member_id: str
    volume: float
    scheduled_workout_completed: bool
