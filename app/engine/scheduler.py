"""
Scheduler loop — the periodic driver of the engine.

Every tick reads the wall clock and, while the trigger controller is idle,
scans the alarms in store order and starts the first match that has not
already fired during the current minute.  Only one
trigger can start per tick; a second alarm matching the same minute is
skipped and re-evaluated on later ticks.  If the first trigger is still
ringing when that minute is over, the second alarm misses its fire.

The loop runs on a daemon thread paced by a :class:`threading.Event`, so
:meth:`SchedulerLoop.stop` both cancels the wait and joins the thread.
"""

from __future__ import annotations

import datetime
import threading
from typing import Callable, Optional

from app.core.logging_handler import setup_logger
from app.engine.matcher import matches
from app.engine.store import AlarmStore
from app.engine.trigger import TriggerController
from app.schemas.trigger import ActiveTrigger

logger = setup_logger(__name__)


class SchedulerLoop:
    """Cancellable fixed-period ticker feeding the trigger controller."""

    def __init__(
        self,
        store: AlarmStore,
        controller: TriggerController,
        period_seconds: float = 1.0,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ):
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive")
        self.store = store
        self.controller = controller
        self.period_seconds = period_seconds
        self.clock = clock

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: Optional[datetime.datetime] = None) -> Optional[ActiveTrigger]:
        """Run one evaluation pass.

        Returns:
            The trigger started by this tick, or ``None``.
        """
        now = now or self.clock()
        with self.controller.lock:
            if not self.controller.is_idle:
                return None

            snoozed_id = self.controller.pop_due_snooze(now)
            if snoozed_id is not None:
                alarm = self.store.get(snoozed_id)
                if alarm is not None and alarm.is_active:
                    trigger = self.controller.start(alarm, now)
                    if trigger is not None:
                        return trigger

            for alarm in self.store.list():
                if matches(alarm, now):
                    # None if this alarm already fired this minute
                    trigger = self.controller.start(alarm, now)
                    if trigger is not None:
                        return trigger
        return None

    # ------------------------------------------------------------------
    # Thread lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="wake-scheduler", daemon=True)
        self._thread.start()
        logger.info("Scheduler started (tick every %.1fs)", self.period_seconds)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("Scheduler stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("Scheduler tick failed")
            self._stop_event.wait(self.period_seconds)
