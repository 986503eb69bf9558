"""Collection schemas organized by collection type."""

from models.schemas.enums import (
    AchievementIcon,
    RescheduleStrategy,
    ScheduleAction,
    ScheduledWorkoutStatus,
    SessionStatus,
    TimeSlot,
    Weekday,
)
from models.schemas.workout_session import ExerciseSet, WorkoutSession
from models.schemas.scheduled_workout import ScheduledWorkout
from models.schemas.schedule_preferences import SchedulePreferences

__all__ = [
    "AchievementIcon",
    "RescheduleStrategy",
    "ScheduleAction",
    "ScheduledWorkoutStatus",
    "SessionStatus",
    "TimeSlot",
    "Weekday",
    "ExerciseSet",
    "WorkoutSession",
    "ScheduledWorkout",
    "SchedulePreferences",
]
