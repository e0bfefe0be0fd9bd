"""
Logical Clock for Deterministic Views
=====================================

Injectable clock so that every computation receives "now" explicitly.

GUARANTEES:
- Same events + same clock reading = identical view
- Never reads system time implicitly in fixed or replay mode
- All readings are naive local wall-clock datetimes
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Sequence


class ClockExhausted(Exception):
    """Raised when replay clock runs out of ticks."""
    pass


def to_local(value: datetime) -> datetime:
    """Convert to naive host-local time. Naive inputs are taken as local already."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def calendar_day_difference(target: datetime, reference: datetime) -> int:
    """Whole local calendar days from reference to target (not 24h deltas)."""
    return (target.date() - reference.date()).days


def as_datetime(day: date) -> datetime:
    """Local midnight of a calendar date."""
    return datetime(day.year, day.month, day.day)


@dataclass
class LogicalClock:
    """
    Injectable clock.

    MODES:
    ======
    1. LIVE mode: reads host local time on every call, keeps nothing
    2. REPLAY mode: returns a pre-recorded tick sequence, in order
    """
    _ticks: List[datetime] = field(default_factory=list)
    _current_index: int = 0
    _is_live: bool = True

    def now(self) -> datetime:
        """
        Get current logical time.

        In LIVE mode: reads host local time (only the reading count is kept)
        In REPLAY mode: returns next tick from recorded sequence
        """
        if self._is_live:
            self._current_index += 1
            return datetime.now()
        if self._current_index >= len(self._ticks):
            raise ClockExhausted(
                f"Replay clock exhausted at index {self._current_index}. "
                f"Recorded sequence had {len(self._ticks)} ticks."
            )
        tick = self._ticks[self._current_index]
        self._current_index += 1
        return tick

    def tick_count(self) -> int:
        """Number of readings taken (live) or ticks consumed (replay)."""
        return self._current_index

    def is_live(self) -> bool:
        return self._is_live

    @property
    def recorded_ticks(self) -> List[datetime]:
        return list(self._ticks)

    @classmethod
    def live(cls) -> 'LogicalClock':
        """Create clock in LIVE mode (uses system time)."""
        return cls(_is_live=True)

    @classmethod
    def from_ticks(cls, ticks: Sequence[datetime]) -> 'LogicalClock':
        """Create clock in REPLAY mode from a recorded sequence."""
        return cls(
            _ticks=[to_local(t) for t in ticks],
            _current_index=0,
            _is_live=False
        )


@dataclass
class FixedClock(LogicalClock):
    """Clock frozen at a single instant; never exhausts."""
    at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.at = to_local(self.at)
        self._is_live = False

    def now(self) -> datetime:
        self._current_index += 1
        return self.at
