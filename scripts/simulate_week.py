"""What would WakeWise do over a week of mornings?

Drives the engine with a simulated clock and in-memory persistence: one
weekday alarm at 07:00, a scripted reaction time per morning, heuristic
rewards and difficulty feedback.  Prints the daily outcome and the final
dashboard summary.

Usage:
    python scripts/simulate_week.py
"""

import datetime
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.db.repositories.kv_store import InMemoryKeyValueStore
from app.db.repositories.state import StateRepository
from app.engine.advisors import ArithmeticChallengeProvider
from app.schemas.alarm import DAYS_OF_WEEK, AlarmCreate
from app.services.wake_service import WakeService

MONDAY = datetime.datetime(2026, 10, 19, 7, 0, 0)

# (reaction seconds, wrong answers before the right one, snooze first?)
MORNINGS = [
    (42, 1, False),
    (25, 0, True),
    (12, 0, False),
    (8, 0, False),
    (4, 2, False),
    (6, 0, False),
    (9, 0, False),
]


class SimClock:
    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now


def main() -> None:
    clock = SimClock(MONDAY)
    service = WakeService(
        StateRepository(InMemoryKeyValueStore()),
        challenge_provider=ArithmeticChallengeProvider(random.Random(2026)),
        clock=clock,
        snooze_rearm=True,
    )
    service.load()
    alarm = service.create_alarm(AlarmCreate(time="07:00", days=list(range(7)), label="Every day"))

    print("=" * 60)
    print(f"  WakeWise week simulation from {MONDAY:%A %d %B %Y}")
    print("=" * 60)

    for day, (seconds, wrong, snooze_first) in enumerate(MORNINGS):
        clock.now = MONDAY + datetime.timedelta(days=day)
        weekday = DAYS_OF_WEEK[(clock.now.weekday() + 1) % 7]
        difficulty = service.get_alarm(alarm.id).difficulty.value

        if service.scheduler.tick() is None:
            print(f"  {weekday}: no alarm")
            continue

        if snooze_first:
            snoozed = service.resolve_snooze()
            print(f"  {weekday}: snoozed until {snoozed.snoozed_until:%H:%M}")
            clock.now = snoozed.snoozed_until
            service.scheduler.tick()

        challenge = service.challenge()
        for _ in range(wrong):
            wrong_option = next(o for o in challenge.options if o != challenge.answer)
            service.answer(wrong_option)

        clock.now += datetime.timedelta(seconds=seconds)
        result = service.answer(challenge.answer)

        badge = f"  [{result.reward.badge}]" if result.reward.badge else ""
        new_difficulty = result.difficulty.value if result.difficulty else difficulty
        print(
            f"  {weekday}: {challenge.question:<22} {seconds:>3}s  "
            f"+{result.reward.points:<3} {difficulty:>6} -> {new_difficulty:<6}{badge}"
        )

    summary = service.get_summary()
    print("-" * 60)
    print(f"  Level:        {summary.level} ({summary.total_points} points)")
    print(f"  Streak:       {summary.streak}")
    print(f"  Best/avg:     {summary.best_time_seconds}s / {summary.average_time_seconds}s")
    print(f"  Success rate: {summary.success_rate}%")
    print(f"  Badges:       {', '.join(summary.badges) or '-'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
