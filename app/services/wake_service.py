"""
Wake service.

Single logical owner of the engine state: the alarm store, the user stats
and the trigger controller share one re-entrant lock, so a scheduler tick
never observes a half-applied edit and a dismissal never races a new
tick's match.  Every mutation writes the whole affected snapshot back to
persistence.
"""

import datetime
import threading
from typing import Callable, Optional

from fastapi import HTTPException, status
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import SnoozeNotAllowedError
from app.core.logging_handler import setup_logger
from app.db.init_db import init_db
from app.db.repositories.kv_store import SQLKeyValueStore
from app.db.repositories.state import StateRepository
from app.db.session import engine as default_engine
from app.engine.advisors import (
    ArithmeticChallengeProvider,
    ChallengeProvider,
    DifficultyAdvisor,
    HeuristicDifficultyAdvisor,
    HeuristicRewardAdvisor,
    RewardAdvisor,
)
from app.engine.audio import AudioOutput, LoggingAudioOutput
from app.engine.scheduler import SchedulerLoop
from app.engine.stats import StatsAggregator
from app.engine.store import AlarmStore
from app.engine.trigger import TriggerController
from app.schemas.alarm import Alarm, AlarmCreate, AlarmUpdate
from app.schemas.stats import StatsSummary, UserStats
from app.schemas.trigger import Challenge, ResolutionResult, TriggerResponse

logger = setup_logger(__name__)


class WakeService:
    """Service for alarm CRUD, trigger resolution and stats."""

    def __init__(
        self,
        repository: StateRepository,
        challenge_provider: Optional[ChallengeProvider] = None,
        reward_advisor: Optional[RewardAdvisor] = None,
        difficulty_advisor: Optional[DifficultyAdvisor] = None,
        audio: Optional[AudioOutput] = None,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
        tick_seconds: float = settings.TICK_SECONDS,
        history_window: int = settings.HISTORY_WINDOW,
        fallback_points: int = settings.FALLBACK_REWARD_POINTS,
        snooze_rearm: bool = settings.SNOOZE_REARM_ENABLED,
    ):
        """
        Initialize the service and wire the engine components.

        Args:
            repository: Persistence for the ``alarms`` and ``stats`` snapshots
            challenge_provider: Challenge collaborator (arithmetic by default)
            reward_advisor: Reward collaborator (heuristic by default)
            difficulty_advisor: Difficulty collaborator (heuristic by default)
            audio: Sound output (logging only by default)
            clock: Wall-clock source
        """
        self.repository = repository
        self.lock = threading.RLock()
        self.store = AlarmStore()
        self.aggregator = StatsAggregator()
        self.controller = TriggerController(
            store=self.store,
            aggregator=self.aggregator,
            challenge_provider=challenge_provider or ArithmeticChallengeProvider(),
            reward_advisor=reward_advisor or HeuristicRewardAdvisor(),
            difficulty_advisor=difficulty_advisor or HeuristicDifficultyAdvisor(),
            audio=audio or LoggingAudioOutput(),
            lock=self.lock,
            clock=clock,
            persist_alarms=self._save_alarms,
            persist_stats=self._save_stats,
            history_window=history_window,
            fallback_points=fallback_points,
            snooze_rearm=snooze_rearm,
        )
        self.scheduler = SchedulerLoop(self.store, self.controller, period_seconds=tick_seconds, clock=clock)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Hydrate alarms and stats from persistence."""
        with self.lock:
            self.store.replace_all(self.repository.load_alarms())
            self.aggregator.load(self.repository.load_stats())
        logger.info("Loaded %d alarms", len(self.store))

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()
        self.controller.shutdown()

    # ------------------------------------------------------------------
    # Alarms
    # ------------------------------------------------------------------

    def list_alarms(self) -> list[Alarm]:
        with self.lock:
            return self.store.list()

    def get_alarm(self, alarm_id: str) -> Alarm:
        with self.lock:
            return self._get_or_404(alarm_id)

    def create_alarm(self, data: AlarmCreate) -> Alarm:
        with self.lock:
            alarm = self.store.add(data)
            self._save_alarms()
        logger.info("Alarm %s created for %s", alarm.id, alarm.time)
        return alarm

    def update_alarm(self, alarm_id: str, data: AlarmUpdate) -> Alarm:
        with self.lock:
            self._get_or_404(alarm_id)
            try:
                alarm = self.store.update(alarm_id, data.to_patch())
            except ValidationError as e:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
            self._save_alarms()
            return alarm

    def toggle_alarm(self, alarm_id: str) -> Alarm:
        with self.lock:
            alarm = self.store.toggle_active(alarm_id)
            if alarm is None:
                raise self._not_found(alarm_id)
            if not alarm.is_active:
                self.controller.cancel_snooze(alarm_id)
            self._save_alarms()
            return alarm

    def duplicate_alarm(self, alarm_id: str) -> Alarm:
        with self.lock:
            alarm = self.store.duplicate(alarm_id)
            if alarm is None:
                raise self._not_found(alarm_id)
            self._save_alarms()
            return alarm

    def delete_alarm(self, alarm_id: str) -> None:
        with self.lock:
            if not self.store.remove(alarm_id):
                raise self._not_found(alarm_id)
            self.controller.cancel_snooze(alarm_id)
            self._save_alarms()

    # ------------------------------------------------------------------
    # Trigger
    # ------------------------------------------------------------------

    def current_trigger(self) -> TriggerResponse:
        with self.lock:
            return TriggerResponse(state=self.controller.state, trigger=self.controller.current())

    def challenge(self) -> Challenge:
        challenge = self.controller.challenge()
        if challenge is None:
            raise self._nothing_ringing()
        return challenge

    def answer(self, option: str) -> ResolutionResult:
        return self._resolved(self.controller.answer(option))

    def resolve_dismiss(self, success: bool) -> ResolutionResult:
        return self._resolved(self.controller.resolve_dismiss(success))

    def resolve_snooze(self) -> ResolutionResult:
        try:
            result = self.controller.resolve_snooze()
        except SnoozeNotAllowedError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        return self._resolved(result)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def get_stats(self) -> UserStats:
        with self.lock:
            return self.aggregator.stats

    def get_summary(self) -> StatsSummary:
        with self.lock:
            return self.aggregator.summary()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save_alarms(self) -> None:
        self.repository.save_alarms(self.store.list())

    def _save_stats(self) -> None:
        self.repository.save_stats(self.aggregator.stats)

    def _get_or_404(self, alarm_id: str) -> Alarm:
        alarm = self.store.get(alarm_id)
        if alarm is None:
            raise self._not_found(alarm_id)
        return alarm

    def _resolved(self, result: Optional[ResolutionResult]) -> ResolutionResult:
        if result is None:
            raise self._nothing_ringing()
        return result

    @staticmethod
    def _not_found(alarm_id: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alarm {alarm_id} not found")

    @staticmethod
    def _nothing_ringing() -> HTTPException:
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No alarm is ringing")


def build_wake_service() -> WakeService:
    """Service backed by the configured database."""
    init_db(default_engine)
    return WakeService(StateRepository(SQLKeyValueStore(default_engine)))
