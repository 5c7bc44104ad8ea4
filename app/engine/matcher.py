"""Clock matcher — does an alarm ring at a given wall-clock instant?"""

import datetime

from app.schemas.alarm import Alarm


def weekday_index(now: datetime.datetime) -> int:
    """Weekday with Sunday = 0 (Python's ``weekday()`` has Monday = 0)."""
    return (now.weekday() + 1) % 7


def matches(alarm: Alarm, now: datetime.datetime) -> bool:
    """True iff *alarm* is active, today is one of its days and the
    current minute equals its time.

    Minute-granular: any instant within the minute matches.  Duplicate
    firing within the minute is prevented by the trigger controller, not
    here.
    """
    if not alarm.is_active:
        return False
    if weekday_index(now) not in alarm.days:
        return False
    return now.strftime("%H:%M") == alarm.time
