"""Shared fixtures for service and route tests.

Route tests swap the Mongo-backed store functions for in-memory fakes, so
no database is needed. The app lifespan is never started.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from models.schemas.enums import ScheduledWorkoutStatus
from models.schemas.schedule_preferences import SchedulePreferences
from models.schemas.scheduled_workout import ScheduledWorkout

# Tuesday
TODAY = date(2024, 1, 2)
NOW = datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)


def make_workout(
    workout_id: str,
    scheduled_date: date,
    status: ScheduledWorkoutStatus = ScheduledWorkoutStatus.SCHEDULED,
    user_id: str = "user-1",
    **kwargs,
) -> ScheduledWorkout:
    return ScheduledWorkout(
        id=workout_id,
        user_id=user_id,
        name=f"Workout {workout_id}",
        scheduled_date=scheduled_date,
        status=status,
        **kwargs,
    )


class FakeScheduleStore:
    """In-memory stand-in for services.schedule_store."""

    def __init__(self):
        self.rows: dict[str, ScheduledWorkout] = {}
        self.preferences: dict[str, SchedulePreferences] = {}
        self.applied_transitions = []

    def add(self, *workouts: ScheduledWorkout) -> None:
        for workout in workouts:
            self.rows[workout.id] = workout

    async def fetch_workouts(self, user_id, start=None, end=None, statuses=None):
        rows = [
            w for w in self.rows.values()
            if w.user_id == user_id
            and (start is None or w.scheduled_date >= start)
            and (end is None or w.scheduled_date <= end)
            and (statuses is None or w.status in list(statuses))
        ]
        return sorted(rows, key=lambda w: w.scheduled_date)

    async def get_workout(self, workout_id):
        return self.rows.get(workout_id)

    async def insert_workout(self, workout):
        self.rows[workout.id] = workout
        return workout

    async def save_workout(self, workout):
        self.rows[workout.id] = workout
        return workout

    async def save_workouts(self, workouts):
        saved = 0
        for workout in workouts:
            await self.save_workout(workout)
            saved += 1
        return saved

    async def apply_transitions(self, user_id, transitions):
        modified = 0
        for transition in transitions:
            row = self.rows.get(transition.workout_id)
            if row and row.user_id == user_id and row.status == transition.from_status:
                self.rows[row.id] = row.model_copy(update={"status": transition.to_status})
                self.applied_transitions.append(transition)
                modified += 1
        return modified

    async def get_preferences(self, user_id):
        return self.preferences.get(user_id) or SchedulePreferences(user_id=user_id)

    async def save_preferences(self, preferences):
        self.preferences[preferences.user_id] = preferences
        return preferences


class FakeStatsStore:
    """In-memory stand-in for services.stats_store."""

    def __init__(self):
        self.sessions: list[dict] = []
        self.volume = 0.0
        self.pr_count = 0
        self.completed_goals = 0
        self.inserted = []

    async def fetch_completed_sessions(self, member_id, limit=0):
        sessions = sorted(
            (s for s in self.sessions if s["member_id"] == member_id),
            key=lambda s: s["date"],
            reverse=True,
        )
        return sessions[:limit] if limit else sessions

    async def total_volume(self, member_id):
        return self.volume

    async def count_personal_records(self, member_id):
        return self.pr_count

    async def count_completed_goals(self, member_id):
        return self.completed_goals

    async def insert_session(self, session):
        self.inserted.append(session)
        return f"session-{len(self.inserted)}"


def _freeze_clock(monkeypatch, module) -> None:
    def fake_today(tz: Optional[str] = None) -> date:
        return TODAY

    def fake_now(tz: Optional[str] = None) -> datetime:
        return NOW

    if hasattr(module, "local_today"):
        monkeypatch.setattr(module, "local_today", fake_today)
    monkeypatch.setattr(module, "local_now", fake_now)


@pytest.fixture
def schedule_store(monkeypatch):
    from services import schedule_store as store_module

    fake = FakeScheduleStore()
    for name in (
        "fetch_workouts", "get_workout", "insert_workout", "save_workout",
        "save_workouts", "apply_transitions", "get_preferences", "save_preferences",
    ):
        monkeypatch.setattr(store_module, name, getattr(fake, name))
    return fake


@pytest.fixture
def stats_store(monkeypatch):
    from services import stats_store as store_module

    fake = FakeStatsStore()
    for name in (
        "fetch_completed_sessions", "total_volume", "count_personal_records",
        "count_completed_goals", "insert_session",
    ):
        monkeypatch.setattr(store_module, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(monkeypatch):
    from api import main, schedule_routes, stats_routes, workout_router

    for module in (schedule_routes, stats_routes, workout_router):
        _freeze_clock(monkeypatch, module)
    return TestClient(main.app)


def days_ago(n: int) -> datetime:
    return datetime.combine(TODAY - timedelta(days=n), datetime.min.time(), tzinfo=timezone.utc) + timedelta(hours=12)
