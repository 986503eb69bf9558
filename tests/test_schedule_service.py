"""Tests for the scheduled workout state machine and missed detection."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import make_workout
from models.schemas.enums import ScheduledWorkoutStatus as Status
from services import schedule_service
from services.errors import InvalidTransitionError

TODAY = date(2024, 1, 10)
NOW = datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc)


class TestTransitions:
    """Tests for individual status changes."""

    def test_reschedule_missed_workout(self):
        workout = make_workout("w1", date(2024, 1, 8), Status.MISSED)
        moved = schedule_service.reschedule(workout, date(2024, 1, 12), "Travel")

        assert moved.status == Status.SCHEDULED
        assert moved.scheduled_date == date(2024, 1, 12)
        assert moved.original_date == date(2024, 1, 8)
        assert moved.rescheduled_from == date(2024, 1, 8)
        assert moved.rescheduled_reason == "Travel"
        assert moved.rescheduled_count == 1
        # The original record is untouched
        assert workout.status == Status.MISSED
        assert workout.rescheduled_count == 0

    def test_second_reschedule_keeps_original_date(self):
        workout = make_workout("w1", date(2024, 1, 8), Status.MISSED)
        once = schedule_service.reschedule(workout, date(2024, 1, 12))
        twice = schedule_service.reschedule(once, date(2024, 1, 15))
        assert twice.original_date == date(2024, 1, 8)
        assert twice.rescheduled_from == date(2024, 1, 12)
        assert twice.rescheduled_count == 2

    def test_skip_records_reason(self):
        workout = make_workout("w1", date(2024, 1, 8), Status.MISSED)
        skipped = schedule_service.skip(workout, NOW, "I was sick")
        assert skipped.status == Status.SKIPPED
        assert skipped.skipped_reason == "I was sick"
        assert skipped.skipped_at == NOW

    def test_complete(self):
        workout = make_workout("w1", TODAY)
        done = schedule_service.complete(workout, NOW, "session-9")
        assert done.status == Status.COMPLETED
        assert done.completed_at == NOW
        assert done.workout_session_id == "session-9"

    @pytest.mark.parametrize("status", [Status.COMPLETED, Status.SKIPPED])
    def test_terminal_statuses_cannot_change(self, status):
        workout = make_workout("w1", date(2024, 1, 8), status)
        with pytest.raises(InvalidTransitionError):
            schedule_service.reschedule(workout, TODAY)
        with pytest.raises(InvalidTransitionError):
            schedule_service.skip(workout, NOW)
        with pytest.raises(InvalidTransitionError):
            schedule_service.complete(workout, NOW)

    def test_only_scheduled_can_be_marked_missed(self):
        with pytest.raises(InvalidTransitionError):
            schedule_service.mark_missed(make_workout("w1", date(2024, 1, 8), Status.SKIPPED))

    def test_records_are_immutable(self):
        workout = make_workout("w1", TODAY)
        with pytest.raises(ValidationError):
            workout.status = Status.MISSED


class TestMissedDetection:
    """Tests for the two-phase missed detection."""

    def rows(self):
        return [
            make_workout("past", date(2024, 1, 8)),
            make_workout("yesterday", date(2024, 1, 9)),
            make_workout("today", TODAY),
            make_workout("future", date(2024, 1, 12)),
            make_workout("done", date(2024, 1, 8), Status.COMPLETED),
            make_workout("skipped", date(2024, 1, 7), Status.SKIPPED),
        ]

    def test_transitions_for_overdue_scheduled_rows(self):
        transitions = schedule_service.compute_missed_transitions(self.rows(), TODAY)
        assert [t.workout_id for t in transitions] == ["past", "yesterday"]
        assert all(t.from_status == Status.SCHEDULED and t.to_status == Status.MISSED for t in transitions)

    def test_detect_missed_updates_statuses(self):
        statuses = {w.id: w.status for w in schedule_service.detect_missed(self.rows(), TODAY)}
        assert statuses == {
            "past": Status.MISSED,
            "yesterday": Status.MISSED,
            "today": Status.SCHEDULED,
            "future": Status.SCHEDULED,
            "done": Status.COMPLETED,
            "skipped": Status.SKIPPED,
        }

    def test_detect_missed_is_idempotent(self):
        once = schedule_service.detect_missed(self.rows(), TODAY)
        twice = schedule_service.detect_missed(once, TODAY)
        assert once == twice
        assert schedule_service.compute_missed_transitions(once, TODAY) == []

    def test_summary_and_grouping(self):
        rows = schedule_service.detect_missed(self.rows(), TODAY)
        stats = schedule_service.summarize(rows)
        assert (stats.total, stats.scheduled, stats.missed, stats.completed, stats.skipped) == (6, 2, 2, 1, 1)

        grouped = schedule_service.group_by_date(rows)
        assert [w.id for w in grouped["2024-01-08"]] == ["past", "done"]
