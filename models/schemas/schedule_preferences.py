"""Schedule preferences collection schema."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config.settings import settings
from models.schemas.enums import TimeSlot


class SchedulePreferences(BaseModel):
    """Per-user schedule preferences."""
    user_id: str = Field(..., description="User identifier")
    preferred_days: list[int] = Field(
        default_factory=lambda: list(settings.default_preferred_days),
        description="Days of week to train on, Sunday = 0",
    )
    preferred_time_slot: Optional[TimeSlot] = None
    reminder_time: Optional[str] = Field(None, description="Reminder time (HH:MM)")
    auto_reschedule: bool = True
    reschedule_window_days: int = Field(2, ge=0)
    min_rest_days: int = Field(1, ge=0, le=6)
    max_consecutive_workout_days: int = Field(3, ge=1, le=7)

    @field_validator("preferred_days")
    @classmethod
    def normalize_days(cls, days: list[int]) -> list[int]:
        invalid = [d for d in days if not 0 <= d <= 6]
        if invalid:
            raise ValueError(f"preferred_days must lie in 0..6, got {invalid}")
        return sorted(set(days))
