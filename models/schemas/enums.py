"""Enums for collection fields."""

from enum import Enum, IntEnum


class Weekday(IntEnum):
    """Day of week as stored in preferred_days (Sunday = 0)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class SessionStatus(str, Enum):
    """Workout session status enum."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class ScheduledWorkoutStatus(str, Enum):
    """Scheduled workout status enum."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    MISSED = "missed"
    SKIPPED = "skipped"
    RESCHEDULED = "rescheduled"


class TimeSlot(str, Enum):
    """Preferred workout time slot enum."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    LATE_NIGHT = "late_night"


class RescheduleStrategy(str, Enum):
    """Batch strategy for missed workouts."""
    NEXT_AVAILABLE = "next_available"
    END_OF_SCHEDULE = "end_of_schedule"
    SPREAD_EVENLY = "spread_evenly"


class ScheduleAction(str, Enum):
    """Action applied to a single scheduled workout."""
    RESCHEDULE = "reschedule"
    SKIP = "skip"
    COMPLETE = "complete"


class AchievementIcon(str, Enum):
    """Badge icon enum."""
    TROPHY = "trophy"
    FLAME = "flame"
    WEIGHT = "weight"
    MEDAL = "medal"
    TARGET = "target"
    CALENDAR = "calendar"
