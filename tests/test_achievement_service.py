"""Tests for achievement ladders."""

from collections import Counter
from datetime import datetime, timezone

import pytest

from models.schemas.enums import AchievementIcon
from schemas.stats import AchievementStats
from services.achievement_service import build_achievements, format_volume

NOW = datetime(2024, 1, 7, 12, 0, tzinfo=timezone.utc)


def ladder(achievements, prefix):
    return [a for a in achievements if a.id.startswith(f"{prefix}-")]


def pending(achievements):
    return [a for a in achievements if not a.earned]


class TestBuildAchievements:
    """Tests for ladder evaluation."""

    def test_new_member_gets_first_tier_of_each_ladder(self):
        achievements = build_achievements(AchievementStats(), NOW)
        assert [a.id for a in achievements] == ["workouts-1", "streak-3", "volume-10000"]
        for achievement in achievements:
            assert achievement.earned_at is None
            assert achievement.progress == 0

    def test_passed_tiers_are_earned_and_next_is_pending(self):
        achievements = build_achievements(AchievementStats(total_workouts=30), NOW)
        workouts = ladder(achievements, "workouts")
        assert [a.id for a in workouts] == ["workouts-1", "workouts-10", "workouts-25", "workouts-50"]
        assert all(a.earned_at == NOW for a in workouts[:3])
        assert workouts[3].progress == 30
        assert workouts[3].target == 50
        assert workouts[3].earned_at is None

    def test_exact_threshold_is_earned(self):
        achievements = build_achievements(AchievementStats(total_workouts=10), NOW)
        assert ladder(achievements, "workouts")[1].earned

    def test_streak_ladder_earned_by_longest_progress_from_current(self):
        """A broken streak keeps its tiers but restarts the pending count."""
        stats = AchievementStats(streak_longest=8, streak_current=1)
        streak = ladder(build_achievements(stats, NOW), "streak")
        assert [a.id for a in streak] == ["streak-3", "streak-7", "streak-14"]
        assert streak[0].earned and streak[1].earned
        assert streak[-1].progress == 1
        assert streak[-1].target == 14
        assert streak[0].icon == AchievementIcon.FLAME

    def test_volume_progress_is_rounded(self):
        stats = AchievementStats(total_volume=12345.6)
        volume = ladder(build_achievements(stats, NOW), "volume")
        assert volume[0].earned
        assert volume[1].progress == 12346
        assert volume[1].target == 100_000

    def test_completed_ladder_has_no_pending_entry(self):
        stats = AchievementStats(total_workouts=600, streak_longest=120, total_volume=2_000_000)
        achievements = build_achievements(stats, NOW)
        assert pending(achievements) == []
        assert len(ladder(achievements, "workouts")) == 7
        assert len(ladder(achievements, "streak")) == 6
        assert len(ladder(achievements, "volume")) == 4

    @pytest.mark.parametrize("total", [0, 1, 9, 10, 249, 499, 500, 1000])
    def test_at_most_one_pending_per_ladder(self, total):
        stats = AchievementStats(total_workouts=total, streak_longest=total // 5, total_volume=total * 1000)
        counts = Counter(a.id.split("-")[0] for a in pending(build_achievements(stats, NOW)))
        assert all(count <= 1 for count in counts.values())

    def test_one_shots_only_when_earned(self):
        achievements = build_achievements(AchievementStats(pr_count=3, completed_goals=5, this_week=4), NOW)
        ids = {a.id for a in achievements}
        assert {"first-pr", "first-goal", "goals-5"} <= ids
        assert "pr-10" not in ids
        assert "weekly-5" not in ids

    def test_week_champion(self):
        achievements = build_achievements(AchievementStats(total_workouts=5, this_week=5), NOW)
        champion = next(a for a in achievements if a.id == "weekly-5")
        assert champion.icon == AchievementIcon.CALENDAR
        assert champion.earned_at == NOW

    def test_earned_entries_have_no_progress(self):
        for achievement in build_achievements(AchievementStats(total_workouts=50, pr_count=10), NOW):
            if achievement.earned:
                assert achievement.progress is None and achievement.target is None


class TestFormatVolume:
    """Tests for volume display strings."""

    @pytest.mark.parametrize("volume, expected", [
        (0, "0 lbs"),
        (950, "950 lbs"),
        (12_500, "12.5K lbs"),
        (1_340_000, "1.3M lbs"),
    ])
    def test_format(self, volume, expected):
        assert format_volume(volume) == expected
