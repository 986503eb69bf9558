"""Member stats routes: streaks, totals and achievements."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from schemas.stats import (
    AchievementStats,
    MemberStatsResponse,
    RecordsSummary,
    StreakSummary,
    VolumeSummary,
    WorkoutSummary,
)
from services import stats_store
from services.achievement_service import build_achievements, format_volume
from services.streak_service import compute_streak, count_in_period
from utils.helpers import local_now, to_local_date
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/members", tags=["stats"])


@router.get("/{member_id}/stats", response_model=MemberStatsResponse)
async def get_member_stats(
    member_id: str,
    tz: Optional[str] = Query(None, description="IANA timezone of the member"),
):
    """
    Get streaks, workout totals, lifted volume and achievements for a member.
    Everything is recomputed from the full completion history on each call.
    """
    try:
        sessions = await stats_store.fetch_completed_sessions(member_id)
        volume = await stats_store.total_volume(member_id)
        pr_count = await stats_store.count_personal_records(member_id)
        completed_goals = await stats_store.count_completed_goals(member_id)

        now = local_now(tz)
        today = now.date()
        dates = [s.get("date") for s in sessions]

        streak = compute_streak(dates, today, tz)
        this_week, this_month = count_in_period(dates, today, tz)

        ratings = [s["rating"] for s in sessions if s.get("rating")]
        avg_rating = round(sum(ratings) / len(ratings), 1) if ratings else 0.0

        achievements = build_achievements(
            AchievementStats(
                total_workouts=len(sessions),
                streak_longest=streak.longest,
                streak_current=streak.current,
                this_week=this_week,
                this_month=this_month,
                total_volume=volume,
                pr_count=pr_count,
                completed_goals=completed_goals,
            ),
            now,
        )

        return MemberStatsResponse(
            member_id=member_id,
            streak=StreakSummary(
                current=streak.current,
                longest=streak.longest,
                last_workout_date=to_local_date(sessions[0].get("date"), tz) if sessions else None,
            ),
            workouts=WorkoutSummary(
                total=len(sessions),
                this_week=this_week,
                this_month=this_month,
                avg_rating=avg_rating,
            ),
            volume=VolumeSummary(total=volume, formatted=format_volume(volume)),
            records=RecordsSummary(personal_records=pr_count, completed_goals=completed_goals),
            achievements=achievements,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching member stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch member stats"
        )
