"""
Unit tests for the wake service.

The service is wired against an in-memory key-value store and fixed
collaborators; the scheduler is ticked by hand.
"""

import datetime

import pytest
from fastapi import HTTPException

from app.db.repositories.kv_store import InMemoryKeyValueStore
from app.db.repositories.state import StateRepository
from app.schemas.alarm import AlarmCreate, AlarmUpdate, Difficulty
from app.schemas.trigger import ResolutionOutcome, TriggerState
from app.services.wake_service import WakeService
from fakes import (
    FakeClock,
    FixedChallengeProvider,
    FixedDifficultyAdvisor,
    FixedRewardAdvisor,
    RecordingAudio,
)


@pytest.fixture
def repository():
    return StateRepository(InMemoryKeyValueStore())


@pytest.fixture
def make_service(repository, clock):
    def _make(**overrides) -> WakeService:
        kwargs = {
            "challenge_provider": FixedChallengeProvider(),
            "reward_advisor": FixedRewardAdvisor(),
            "difficulty_advisor": FixedDifficultyAdvisor(),
            "audio": RecordingAudio(),
            "clock": clock,
        }
        kwargs.update(overrides)
        service = WakeService(repository, **kwargs)
        service.load()
        return service

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


def _monday_alarm(**overrides) -> AlarmCreate:
    data = {"time": "07:00", "days": [1], "label": "Morning Routine"}
    data.update(overrides)
    return AlarmCreate(**data)


class TestAlarmCrud:
    def test_create_assigns_id_and_persists(self, service, repository):
        alarm = service.create_alarm(_monday_alarm())
        assert alarm.id
        assert repository.load_alarms() == [alarm]

    def test_ids_unique(self, service):
        ids = {service.create_alarm(_monday_alarm()).id for _ in range(20)}
        assert len(ids) == 20

    def test_get_missing_is_404(self, service):
        with pytest.raises(HTTPException) as exc_info:
            service.get_alarm("missing")
        assert exc_info.value.status_code == 404

    def test_update_keeps_id(self, service):
        alarm = service.create_alarm(_monday_alarm())
        updated = service.update_alarm(alarm.id, AlarmUpdate(label="Gym", time="06:30"))
        assert updated.id == alarm.id
        assert updated.label == "Gym"
        assert updated.time == "06:30"
        assert updated.days == [1]

    def test_update_missing_is_404(self, service):
        with pytest.raises(HTTPException) as exc_info:
            service.update_alarm("missing", AlarmUpdate(label="x"))
        assert exc_info.value.status_code == 404

    def test_toggle(self, service, repository):
        alarm = service.create_alarm(_monday_alarm())
        assert service.toggle_alarm(alarm.id).is_active is False
        assert repository.load_alarms()[0].is_active is False
        assert service.toggle_alarm(alarm.id).is_active is True

    def test_duplicate(self, service):
        alarm = service.create_alarm(_monday_alarm())
        copy = service.duplicate_alarm(alarm.id)
        assert copy.id != alarm.id
        assert copy.label == "Copy of Morning Routine"
        assert copy.is_active is False
        assert [a.id for a in service.list_alarms()] == [alarm.id, copy.id]

    def test_delete(self, service, repository):
        alarm = service.create_alarm(_monday_alarm())
        service.delete_alarm(alarm.id)
        assert service.list_alarms() == []
        assert repository.load_alarms() == []
        with pytest.raises(HTTPException):
            service.delete_alarm(alarm.id)

    def test_load_restores_state(self, service, make_service):
        alarm = service.create_alarm(_monday_alarm())
        assert make_service().list_alarms() == [alarm]


class TestTriggerFlow:
    def test_nothing_ringing(self, service):
        assert service.current_trigger().state == TriggerState.IDLE
        for call in (service.challenge, service.resolve_snooze, lambda: service.resolve_dismiss(True)):
            with pytest.raises(HTTPException) as exc_info:
                call()
            assert exc_info.value.status_code == 409

    def test_ring_answer_and_stats(self, service, clock, repository):
        alarm = service.create_alarm(_monday_alarm())
        service.scheduler.tick()
        assert service.current_trigger().trigger.alarm.id == alarm.id

        challenge = service.challenge()
        clock.advance(seconds=8)
        result = service.answer(challenge.answer)

        assert result.outcome == ResolutionOutcome.DISMISSED
        assert result.event.time_taken_seconds == 8
        assert service.current_trigger().state == TriggerState.IDLE
        assert service.get_stats().streak == 1
        assert service.get_alarm(alarm.id).difficulty == Difficulty.HARD

        persisted = repository.load_stats()
        assert persisted.total_points == 20
        assert repository.load_alarms()[0].difficulty == Difficulty.HARD

        summary = service.get_summary()
        assert summary.total_wake_ups == 1
        assert summary.best_time_seconds == 8
        assert summary.level == "Novice"

    def test_wrong_answer(self, service):
        service.create_alarm(_monday_alarm())
        service.scheduler.tick()
        service.challenge()
        assert service.answer("0").outcome == ResolutionOutcome.RETRY
        assert service.current_trigger().state == TriggerState.RINGING

    def test_snooze_disabled_is_409(self, service):
        service.create_alarm(_monday_alarm(snooze_enabled=False))
        service.scheduler.tick()
        with pytest.raises(HTTPException) as exc_info:
            service.resolve_snooze()
        assert exc_info.value.status_code == 409
        assert service.current_trigger().state == TriggerState.RINGING

    def test_deactivating_cancels_pending_snooze(self, make_service, clock):
        service = make_service(snooze_rearm=True)
        alarm = service.create_alarm(_monday_alarm())
        service.scheduler.tick()
        result = service.resolve_snooze()
        assert service.controller.pending_snoozes() == {alarm.id: result.snoozed_until}

        service.toggle_alarm(alarm.id)
        assert service.controller.pending_snoozes() == {}

    def test_edit_while_ringing_keeps_trigger_snapshot(self, service):
        alarm = service.create_alarm(_monday_alarm())
        service.scheduler.tick()
        service.update_alarm(alarm.id, AlarmUpdate(label="Renamed"))
        assert service.current_trigger().trigger.alarm.label == "Morning Routine"

    def test_stop_silences(self, make_service):
        audio = RecordingAudio()
        service = make_service(audio=audio)
        service.create_alarm(_monday_alarm())
        service.scheduler.tick()
        service.stop()
        assert audio.calls[-1] == ("stop",)
        assert service.current_trigger().state == TriggerState.IDLE
