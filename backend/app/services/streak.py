"""
Streak evaluation: pure functions, no database access.

A streak continues while the gap between two completions stays within the
streak window (24 hours by default). ``apply_completion`` and
``apply_load_time_reset`` return new ``StreakState`` values; persisting
them is up to the caller.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, UTC
from typing import Optional, Union

from app.core.config import settings
from app.core.exceptions import ParseError

# 连续学习判定窗口，来自 STREAK_WINDOW_HOURS 配置
STREAK_WINDOW: timedelta = settings.streak_window

Timestamp = Union[str, datetime]


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int
    last_activity_date: datetime

    @classmethod
    def from_record(cls, record) -> "StreakState":
        """Build a state from any object carrying the three streak fields."""
        return cls(
            current_streak=record.current_streak,
            longest_streak=record.longest_streak,
            last_activity_date=parse_timestamp(record.last_activity_date),
        )

    def as_patch(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_activity_date": self.last_activity_date,
        }


def parse_timestamp(value: Optional[Timestamp]) -> datetime:
    """
    Convert an ISO-8601 string or datetime into an aware UTC datetime.

    Naive values are taken to be UTC, which is how SQLite hands back
    timezone-aware columns.

    Raises:
        ParseError: value is missing, empty, or not a valid instant
    """
    if value is None:
        raise ParseError(value, "missing")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ParseError(value, "empty")
        # fromisoformat 在 3.11 之前不认识 'Z' 后缀
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ParseError(value, str(e)) from e
    else:
        raise ParseError(value, f"unsupported type {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def has_continued_streak(
    last_activity_date: Timestamp,
    now: Optional[Timestamp] = None,
    window: Optional[timedelta] = None,
) -> bool:
    """True iff ``now - last_activity_date`` is within the streak window."""
    last_activity = parse_timestamp(last_activity_date)
    current = datetime.now(UTC) if now is None else parse_timestamp(now)
    return current - last_activity <= (STREAK_WINDOW if window is None else window)


def should_reset(
    last_activity_date: Timestamp,
    now: Optional[Timestamp] = None,
    window: Optional[timedelta] = None,
) -> bool:
    return not has_continued_streak(last_activity_date, now, window)


def apply_completion(
    streak: StreakState,
    now: Optional[Timestamp] = None,
    window: Optional[timedelta] = None,
) -> StreakState:
    """
    Next streak state after the user completes a day at ``now``.

    A lapsed streak restarts at 1, otherwise it grows by one. The longest
    streak never drops below the current one.
    """
    current = datetime.now(UTC) if now is None else parse_timestamp(now)
    if should_reset(streak.last_activity_date, current, window):
        current_streak = 1
    else:
        current_streak = streak.current_streak + 1
    return StreakState(
        current_streak=current_streak,
        longest_streak=max(streak.longest_streak, current_streak),
        last_activity_date=current,
    )


def apply_load_time_reset(
    streak: StreakState,
    now: Optional[Timestamp] = None,
    window: Optional[timedelta] = None,
) -> StreakState:
    """
    Zero the current streak if it lapsed, as seen when the dashboard loads.

    ``longest_streak`` and ``last_activity_date`` are left alone so no
    activity is invented.
    """
    if should_reset(streak.last_activity_date, now, window):
        return replace(streak, current_streak=0)
    return streak
