"""Member stats and achievement schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.schemas.enums import AchievementIcon


class StreakState(BaseModel):
    """Current and longest run of consecutive workout days."""
    model_config = ConfigDict(frozen=True)

    current: int = Field(0, ge=0)
    longest: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_longest(self) -> "StreakState":
        if self.longest < self.current:
            raise ValueError("longest streak cannot be shorter than current streak")
        return self


class Achievement(BaseModel):
    """A badge that is either earned or pending."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    icon: AchievementIcon
    earned_at: Optional[datetime] = None
    progress: Optional[int] = None
    target: Optional[int] = None

    @property
    def earned(self) -> bool:
        return self.earned_at is not None


class AchievementStats(BaseModel):
    """Counters the achievement ladders are evaluated against."""
    total_workouts: int = Field(0, ge=0)
    streak_longest: int = Field(0, ge=0)
    streak_current: int = Field(0, ge=0)
    this_week: int = Field(0, ge=0)
    this_month: int = Field(0, ge=0)
    total_volume: float = Field(0.0, ge=0)
    pr_count: int = Field(0, ge=0)
    completed_goals: int = Field(0, ge=0)


class StreakSummary(BaseModel):
    current: int
    longest: int
    last_workout_date: Optional[date] = None


class WorkoutSummary(BaseModel):
    total: int
    this_week: int
    this_month: int
    avg_rating: float


class VolumeSummary(BaseModel):
    total: float
    formatted: str


class RecordsSummary(BaseModel):
    personal_records: int
    completed_goals: int


class MemberStatsResponse(BaseModel):
    """Response for the member stats endpoint."""
    member_id: str
    streak: StreakSummary
    workouts: WorkoutSummary
    volume: VolumeSummary
    records: RecordsSummary
    achievements: list[Achievement]
