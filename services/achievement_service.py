"""Achievement badges derived from a member's workout stats.

Badges come in ladders of ascending thresholds for one metric. Every
threshold already reached is reported as earned; the first threshold not
yet reached is reported as pending with the member's progress, and the rest
of that ladder is left out. One-shot badges are only reported once earned.
"""

from datetime import datetime
from typing import NamedTuple, Optional

from models.schemas.enums import AchievementIcon
from schemas.stats import Achievement, AchievementStats


class Milestone(NamedTuple):
    threshold: int
    title: str
    description: str


WORKOUT_MILESTONES = [
    Milestone(1, "First Steps", "Complete your first workout"),
    Milestone(10, "Getting Started", "Complete 10 workouts"),
    Milestone(25, "Dedicated", "Complete 25 workouts"),
    Milestone(50, "Half Century", "Complete 50 workouts"),
    Milestone(100, "Century Club", "Complete 100 workouts"),
    Milestone(250, "Iron Will", "Complete 250 workouts"),
    Milestone(500, "Legend", "Complete 500 workouts"),
]

STREAK_MILESTONES = [
    Milestone(3, "Three-peat", "3 day workout streak"),
    Milestone(7, "Week Warrior", "7 day workout streak"),
    Milestone(14, "Two Week Terror", "14 day workout streak"),
    Milestone(30, "Month of Iron", "30 day workout streak"),
    Milestone(60, "Unstoppable", "60 day workout streak"),
    Milestone(100, "Centurion", "100 day workout streak"),
]

VOLUME_MILESTONES = [
    Milestone(10_000, "Ten Thousand", "Lift 10,000 lbs total"),
    Milestone(100_000, "Hundred K", "Lift 100,000 lbs total"),
    Milestone(500_000, "Half Ton Club", "Lift 500,000 lbs total"),
    Milestone(1_000_000, "Million Pounder", "Lift 1,000,000 lbs total"),
]


def walk_ladder(
    prefix: str,
    icon: AchievementIcon,
    milestones: list[Milestone],
    value: float,
    now: datetime,
    progress: Optional[float] = None,
) -> list[Achievement]:
    """Evaluate one ladder; at most one pending entry is returned.

    Tiers are earned against ``value``; the pending entry reports
    ``progress`` when given, otherwise ``value``.
    """
    achievements = []
    for milestone in milestones:
        badge_id = f"{prefix}-{milestone.threshold}"
        if value >= milestone.threshold:
            achievements.append(Achievement(
                id=badge_id,
                title=milestone.title,
                description=milestone.description,
                icon=icon,
                earned_at=now,
            ))
        else:
            achievements.append(Achievement(
                id=badge_id,
                title=milestone.title,
                description=milestone.description,
                icon=icon,
                progress=round(value if progress is None else progress),
                target=milestone.threshold,
            ))
            break
    return achievements


def one_shot_achievements(stats: AchievementStats, now: datetime) -> list[Achievement]:
    """Single badges for records, goals and weekly consistency."""
    candidates = [
        (stats.pr_count >= 1, "first-pr", "Record Breaker", "Set your first personal record", AchievementIcon.MEDAL),
        (stats.pr_count >= 10, "pr-10", "PR Hunter", "Set 10 personal records", AchievementIcon.MEDAL),
        (stats.completed_goals >= 1, "first-goal", "Goal Getter", "Complete your first goal", AchievementIcon.TARGET),
        (stats.completed_goals >= 5, "goals-5", "Achiever", "Complete 5 goals", AchievementIcon.TARGET),
        (stats.this_week >= 5, "weekly-5", "Week Champion", "Complete 5 workouts in a week", AchievementIcon.CALENDAR),
    ]
    return [
        Achievement(id=badge_id, title=title, description=description, icon=icon, earned_at=now)
        for earned, badge_id, title, description, icon in candidates
        if earned
    ]


def build_achievements(stats: AchievementStats, now: datetime) -> list[Achievement]:
    """Build the full badge list for a member.

    Earn dates are not tracked historically, so earned badges carry ``now``.

    Args:
        stats: Aggregated member counters
        now: Evaluation time stamped on earned badges

    Returns:
        Workout, streak and volume ladders followed by earned one-shots
    """
    achievements = []
    achievements += walk_ladder("workouts", AchievementIcon.TROPHY, WORKOUT_MILESTONES, stats.total_workouts, now)
    achievements += walk_ladder(
        "streak", AchievementIcon.FLAME, STREAK_MILESTONES, stats.streak_longest, now,
        progress=stats.streak_current,
    )
    achievements += walk_ladder("volume", AchievementIcon.WEIGHT, VOLUME_MILESTONES, stats.total_volume, now)
    achievements += one_shot_achievements(stats, now)
    return achievements


def format_volume(volume: float) -> str:
    """Human readable total volume, e.g. ``12.5K lbs``."""
    if volume >= 1_000_000:
        return f"{volume / 1_000_000:.1f}M lbs"
    if volume >= 1_000:
        return f"{volume / 1_000:.1f}K lbs"
    return f"{round(volume):,} lbs"
