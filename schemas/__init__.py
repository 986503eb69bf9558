"""API request/response schemas."""

from schemas.stats import (
    Achievement,
    AchievementStats,
    MemberStatsResponse,
    StreakState,
)
from schemas.schedule import (
    AutoRescheduleRequest,
    AutoRescheduleResponse,
    RescheduleAssignment,
    ScheduleActionRequest,
    ScheduleResponse,
    ScheduleStats,
    StatusTransition,
)
from schemas.workout import LogSessionRequest, LogSessionResponse

__all__ = [
    "Achievement",
    "AchievementStats",
    "MemberStatsResponse",
    "StreakState",
    "AutoRescheduleRequest",
    "AutoRescheduleResponse",
    "RescheduleAssignment",
    "ScheduleActionRequest",
    "ScheduleResponse",
    "ScheduleStats",
    "StatusTransition",
    "LogSessionRequest",
    "LogSessionResponse",
]
