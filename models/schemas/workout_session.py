"""Workout sessions collection schema."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.schemas.enums import SessionStatus


class ExerciseSet(BaseModel):
    """Nested model for one set performed in a session."""
    exercise: Optional[str] = Field(None, description="Exercise name")
    weight: float = Field(0.0, ge=0, description="Weight lifted")
    reps: int = Field(0, ge=0, description="Repetitions performed")


class WorkoutSession(BaseModel):
    """Workout sessions collection model."""
    member_id: str = Field(..., description="Circle member identifier")
    date: datetime = Field(..., description="Session date")
    status: SessionStatus = Field(SessionStatus.COMPLETED, description="Session status")
    rating: Optional[int] = Field(None, ge=1, le=5, description="Member's rating of the session")
    sets: list[ExerciseSet] = Field(default_factory=list, description="Sets performed")
    scheduled_workout_id: Optional[str] = Field(None, description="Scheduled workout this session fulfils")

    @property
    def volume(self) -> float:
        """Sum of weight x reps across all sets."""
        return sum(s.weight * s.reps for s in self.sets)
