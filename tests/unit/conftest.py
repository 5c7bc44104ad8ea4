"""Shared fixtures for the engine, service and API tests."""

import pytest

from app.engine.stats import StatsAggregator
from app.engine.store import AlarmStore
from app.engine.trigger import TriggerController
from fakes import (
    FakeClock,
    FixedChallengeProvider,
    FixedDifficultyAdvisor,
    FixedRewardAdvisor,
    RecordingAudio,
    make_alarm,
)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return AlarmStore([make_alarm()])


@pytest.fixture
def aggregator():
    return StatsAggregator()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def make_controller(store, aggregator, audio, clock):
    """Factory building a controller with fixed collaborators by default."""

    def _make(**overrides) -> TriggerController:
        kwargs = {
            "store": store,
            "aggregator": aggregator,
            "challenge_provider": FixedChallengeProvider(),
            "reward_advisor": FixedRewardAdvisor(),
            "difficulty_advisor": FixedDifficultyAdvisor(),
            "audio": audio,
            "clock": clock,
        }
        kwargs.update(overrides)
        return TriggerController(**kwargs)

    return _make
