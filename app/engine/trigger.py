"""
Trigger controller — the single-active-trigger state machine.

States::

    IDLE ──start──▶ RINGING ──dismiss(success) / snooze──▶ RESOLVING ──▶ IDLE
                      ▲  │
                      └──┘ dismiss(failure): wrong answer, retry

At most one :class:`ActiveTrigger` exists system-wide.  A match reported
while a trigger is ringing or being resolved is ignored: no second trigger,
no double stats write.  An alarm fires at most once per minute, so a
dismissal does not re-ring it on the next tick of the same minute.

Outcome processing after a successful dismissal:

    1. stop the sound, compute ``time_taken_seconds = now - started_at``
    2. reward advisor → points / badge            (fallback on failure)
    3. append WakeUpEvent + apply reward          (persist stats)
    4. difficulty advisor on the last 5 events    (unchanged on failure)
    5. write the new difficulty to the alarm      (persist alarms)
    6. clear the trigger → IDLE

Advisor calls (steps 2 and 4) may be slow.  They run outside the lock while
the controller sits in ``RESOLVING``, so scheduler ticks are no-ops and
user edits are not blocked.  Steps 3 and 5 are applied and persisted
independently: an interrupted resolution leaves consistent state.

Collaborator failures never abort the lifecycle; every path ends in
``IDLE``.
"""

from __future__ import annotations

import datetime
import threading
from typing import Callable, Optional

from app.core.exceptions import SnoozeNotAllowedError
from app.core.logging_handler import setup_logger
from app.engine.advisors import (
    FALLBACK_CHALLENGE,
    ChallengeProvider,
    DifficultyAdvisor,
    RewardAdvisor,
    fallback_reward,
)
from app.engine.audio import AudioOutput
from app.engine.feedback import HISTORY_WINDOW, apply_difficulty, recompute_difficulty
from app.engine.stats import StatsAggregator
from app.engine.store import AlarmStore
from app.schemas.advisor import Reward
from app.schemas.alarm import Alarm
from app.schemas.stats import UserStats, WakeUpEvent
from app.schemas.trigger import (
    ActiveTrigger,
    Challenge,
    ResolutionOutcome,
    ResolutionResult,
    TriggerState,
)

logger = setup_logger(__name__)

CHALLENGE_UNAVAILABLE = "Challenge provider unavailable, using the default challenge."
REWARD_UNAVAILABLE = "Reward advisor unavailable, default reward applied."
DIFFICULTY_UNAVAILABLE = "Difficulty advisor unavailable, difficulty unchanged."


class TriggerController:
    """Owns the active trigger and drives its lifecycle."""

    def __init__(
        self,
        store: AlarmStore,
        aggregator: StatsAggregator,
        challenge_provider: ChallengeProvider,
        reward_advisor: RewardAdvisor,
        difficulty_advisor: DifficultyAdvisor,
        audio: AudioOutput,
        lock: Optional[threading.RLock] = None,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
        persist_alarms: Optional[Callable[[], None]] = None,
        persist_stats: Optional[Callable[[], None]] = None,
        history_window: int = HISTORY_WINDOW,
        fallback_points: int = 10,
        snooze_rearm: bool = False,
    ):
        self.store = store
        self.aggregator = aggregator
        self.challenge_provider = challenge_provider
        self.reward_advisor = reward_advisor
        self.difficulty_advisor = difficulty_advisor
        self.audio = audio
        self.lock = lock or threading.RLock()
        self.clock = clock
        self.history_window = history_window
        self.fallback_points = fallback_points
        self.snooze_rearm = snooze_rearm

        self._persist_alarms = persist_alarms
        self._persist_stats = persist_stats

        self._state = TriggerState.IDLE
        self._trigger: Optional[ActiveTrigger] = None
        # alarm id -> when the snoozed alarm rings again
        self._snoozes: dict[str, datetime.datetime] = {}
        # alarm id -> minute of its last start
        self._last_fired: dict[str, datetime.datetime] = {}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> TriggerState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state == TriggerState.IDLE

    def current(self) -> Optional[ActiveTrigger]:
        """A copy of the active trigger, or ``None``."""
        with self.lock:
            return self._trigger.model_copy(deep=True) if self._trigger else None

    def pending_snoozes(self) -> dict[str, datetime.datetime]:
        with self.lock:
            return dict(self._snoozes)

    # ------------------------------------------------------------------
    # IDLE → RINGING
    # ------------------------------------------------------------------

    def start(self, alarm: Alarm, now: Optional[datetime.datetime] = None) -> Optional[ActiveTrigger]:
        """Start ringing *alarm*.

        Ignored unless the controller is idle, and ignored if *alarm* already
        started during the minute of *now* (one firing per alarm per minute).
        """
        now = now or self.clock()
        minute = now.replace(second=0, microsecond=0)
        with self.lock:
            if self._state != TriggerState.IDLE:
                logger.debug("Match for alarm %s ignored: state is %s", alarm.id, self._state.value)
                return None
            if self._last_fired.get(alarm.id) == minute:
                logger.debug("Alarm %s already fired at %s", alarm.id, minute.strftime("%H:%M"))
                return None

            self._last_fired[alarm.id] = minute
            self._trigger = ActiveTrigger(alarm=alarm, started_at=now)
            self._state = TriggerState.RINGING
            self._snoozes.pop(alarm.id, None)
            logger.info("Alarm %s (%r) ringing at %s", alarm.id, alarm.label, now.isoformat())
            self._play(alarm)
            return self._trigger.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Challenge
    # ------------------------------------------------------------------

    def challenge(self) -> Optional[Challenge]:
        """The active trigger's challenge, generated on first request.

        Falls back to :data:`FALLBACK_CHALLENGE` when the provider fails so
        that dismissal is never blocked.
        """
        with self.lock:
            trigger = self._trigger
            if self._state != TriggerState.RINGING or trigger is None:
                return None
            if trigger.challenge is not None:
                return trigger.challenge
            difficulty = trigger.alarm.difficulty

        error = None
        try:
            challenge = self.challenge_provider.generate_challenge(difficulty)
        except Exception:
            logger.warning("Challenge generation failed; using fallback", exc_info=True)
            challenge, error = FALLBACK_CHALLENGE, CHALLENGE_UNAVAILABLE

        with self.lock:
            if self._trigger is not trigger:
                # Resolved (or replaced) while the challenge was generated.
                return None
            if trigger.challenge is None:
                trigger.challenge = challenge
                trigger.challenge_error = error
            return trigger.challenge

    def answer(self, option: str, now: Optional[datetime.datetime] = None) -> Optional[ResolutionResult]:
        """Check *option* against the challenge and resolve accordingly."""
        challenge = self.challenge()
        if challenge is None:
            return None
        return self.resolve_dismiss(option == challenge.answer, now)

    # ------------------------------------------------------------------
    # RINGING → RESOLVING → IDLE
    # ------------------------------------------------------------------

    def resolve_dismiss(self, success: bool, now: Optional[datetime.datetime] = None) -> Optional[ResolutionResult]:
        """Resolve the ringing trigger.

        A failed attempt keeps the trigger ringing (the user may retry or
        snooze) and records nothing.  A success runs the full outcome
        pipeline.  Returns ``None`` when nothing is ringing.
        """
        now = now or self.clock()
        with self.lock:
            trigger = self._trigger
            if self._state != TriggerState.RINGING or trigger is None:
                logger.debug("Dismiss ignored: state is %s", self._state.value)
                return None

            if not success:
                trigger.failed_attempts += 1
                logger.info("Wrong answer for alarm %s (attempt %d)", trigger.alarm.id, trigger.failed_attempts)
                return ResolutionResult(outcome=ResolutionOutcome.RETRY, alarm_id=trigger.alarm.id)

            self._state = TriggerState.RESOLVING
            self._stop()
            time_taken = max(0, round((now - trigger.started_at).total_seconds()))
            stats_before = self.aggregator.stats

        alarm_id = trigger.alarm.id
        notices: list[str] = []
        try:
            reward = self._evaluate_reward(stats_before, time_taken, notices)
            event = WakeUpEvent(date=now, time_taken_seconds=time_taken, success=True)

            with self.lock:
                self.aggregator.record(event, reward)
                history = self.aggregator.recent_history(self.history_window)
                self._notify(self._persist_stats, "stats")

            difficulty = recompute_difficulty(alarm_id, history, self.difficulty_advisor, self.history_window)
            if difficulty is None:
                notices.append(DIFFICULTY_UNAVAILABLE)
            else:
                with self.lock:
                    if apply_difficulty(self.store, alarm_id, difficulty) is None:
                        logger.info("Alarm %s deleted while resolving; difficulty not applied", alarm_id)
                        difficulty = None
                    else:
                        self._notify(self._persist_alarms, "alarms")

            logger.info("Alarm %s dismissed in %ds: +%d points", alarm_id, time_taken, reward.points)
            return ResolutionResult(
                outcome=ResolutionOutcome.DISMISSED,
                alarm_id=alarm_id,
                event=event,
                reward=reward,
                difficulty=difficulty,
                notices=notices,
            )
        finally:
            self._clear()

    def resolve_snooze(self, now: Optional[datetime.datetime] = None) -> Optional[ResolutionResult]:
        """Snooze the ringing trigger: no history is recorded.

        Raises:
            SnoozeNotAllowedError: If the alarm has snooze disabled.
        """
        now = now or self.clock()
        with self.lock:
            trigger = self._trigger
            if self._state != TriggerState.RINGING or trigger is None:
                logger.debug("Snooze ignored: state is %s", self._state.value)
                return None

            alarm = trigger.alarm
            if not alarm.snooze_enabled:
                raise SnoozeNotAllowedError(f"Snooze is disabled for alarm {alarm.id}")

            self._state = TriggerState.RESOLVING
            self._stop()

            snoozed_until = None
            if self.snooze_rearm:
                snoozed_until = now + datetime.timedelta(minutes=alarm.snooze_duration_minutes)
                self._snoozes[alarm.id] = snoozed_until

            logger.info("Alarm %s snoozed for %d minutes", alarm.id, alarm.snooze_duration_minutes)
            self._clear()
            return ResolutionResult(
                outcome=ResolutionOutcome.SNOOZED,
                alarm_id=alarm.id,
                snoozed_until=snoozed_until,
            )

    # ------------------------------------------------------------------
    # Snooze re-arm
    # ------------------------------------------------------------------

    def pop_due_snooze(self, now: datetime.datetime) -> Optional[str]:
        """Remove and return the earliest snoozed alarm id due at *now*."""
        with self.lock:
            due = [(at, alarm_id) for alarm_id, at in self._snoozes.items() if at <= now]
            if not due:
                return None
            _, alarm_id = min(due)
            del self._snoozes[alarm_id]
            return alarm_id

    def cancel_snooze(self, alarm_id: str) -> None:
        with self.lock:
            self._snoozes.pop(alarm_id, None)

    def shutdown(self) -> None:
        """Silence and drop any active trigger (process exit)."""
        with self.lock:
            if self._trigger is not None:
                self._stop()
            self._clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _evaluate_reward(self, stats: UserStats, time_taken: int, notices: list[str]) -> Reward:
        try:
            return Reward.model_validate(self.reward_advisor.evaluate_reward(stats, time_taken))
        except Exception:
            logger.warning("Reward advisor failed; applying fallback reward", exc_info=True)
            notices.append(REWARD_UNAVAILABLE)
            return fallback_reward(self.fallback_points)

    def _clear(self) -> None:
        with self.lock:
            self._trigger = None
            self._state = TriggerState.IDLE

    def _play(self, alarm: Alarm) -> None:
        try:
            self.audio.play(alarm.sound, alarm.volume, loop=True)
        except Exception:
            logger.warning("Audio play failed for alarm %s", alarm.id, exc_info=True)

    def _stop(self) -> None:
        try:
            self.audio.stop()
        except Exception:
            logger.warning("Audio stop failed", exc_info=True)

    @staticmethod
    def _notify(hook: Optional[Callable[[], None]], what: str) -> None:
        if hook is None:
            return
        try:
            hook()
        except Exception:
            logger.error("Persisting %s failed; in-memory state kept", what, exc_info=True)
