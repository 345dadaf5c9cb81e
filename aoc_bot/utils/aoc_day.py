"""
Advent of Code calendar helpers.

Puzzles unlock at midnight US Eastern time (UTC-5, the event never observes
daylight saving) on December 1st through 25th. The first event ran in 2015.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

FIRST_EVENT_YEAR = 2015
LAST_PUZZLE_DAY = 25
UNLOCK_TIMEZONE = timezone(timedelta(hours=-5), "EST")


def _event_now(now: Optional[datetime]) -> datetime:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(UNLOCK_TIMEZONE)


@dataclass(frozen=True, order=True)
class AocDay:
    year: int
    day: int

    def unlock_datetime(self) -> datetime:
        """UTC instant at which this day's puzzle becomes available."""
        return datetime(self.year, 12, self.day, tzinfo=UNLOCK_TIMEZONE).astimezone(timezone.utc)

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> Optional["AocDay"]:
        """The puzzle day running right now, or None outside of an event."""
        local = _event_now(now)
        if local.month == 12 and local.day <= LAST_PUZZLE_DAY:
            return cls(local.year, local.day)
        return None

    @classmethod
    def most_recent(cls, now: Optional[datetime] = None) -> "AocDay":
        """The latest puzzle day that has already been unlocked."""
        current = cls.current(now)
        if current is not None:
            return current
        local = _event_now(now)
        if local.month == 12:
            return cls(local.year, LAST_PUZZLE_DAY)
        return cls(local.year - 1, LAST_PUZZLE_DAY)
