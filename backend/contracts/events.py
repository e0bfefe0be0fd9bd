"""
Event and Window Contracts

Immutable data carried between the normalization layer, the core layout
functions and the view layer.

INVARIANTS:
===========
- Event.end >= Event.start when end is present
- WeekWindow.start is a local midnight
- WeekWindow spans exactly 7 calendar days (end is the last millisecond)
- PositionedEvent.position is within [0, 1]
- OverflowBucket always holds at least one event
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple


DAYS_PER_WINDOW = 7
WINDOW_RESOLUTION = timedelta(milliseconds=1)


@dataclass(frozen=True)
class Event:
    """
    A canonical calendar event.

    Owned by the external source; the engine only reads it.
    """
    id: str
    title: str
    start: datetime
    end: Optional[datetime] = None
    all_day: bool = False
    calendar_name: Optional[str] = None

    def __post_init__(self):
        if self.end is not None and self.end < self.start:
            raise ValueError(f"Event {self.id!r} ends before it starts")

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'start': self.start.isoformat(),
            'end': self.end.isoformat() if self.end else None,
            'all_day': self.all_day,
            'calendar_name': self.calendar_name,
        }


@dataclass(frozen=True)
class WeekWindow:
    """
    The contiguous 7-day span currently displayed.

    Created fresh on every offset change, never persisted.
    """
    start: datetime
    end: datetime
    offset: int = 0

    def __post_init__(self):
        if (self.start.hour, self.start.minute, self.start.second,
                self.start.microsecond) != (0, 0, 0, 0):
            raise ValueError("WeekWindow must start at local midnight")
        expected_end = self.start + timedelta(days=DAYS_PER_WINDOW) - WINDOW_RESOLUTION
        if self.end != expected_end:
            raise ValueError("WeekWindow must span exactly 7 calendar days")

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    @property
    def is_current(self) -> bool:
        return self.offset == 0

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp <= self.end

    def day_starts(self) -> Tuple[datetime, ...]:
        """Midnight of each of the 7 days in the window."""
        return tuple(
            self.start + timedelta(days=i) for i in range(DAYS_PER_WINDOW)
        )


@dataclass(frozen=True)
class PositionedEvent:
    """An in-window event with its fractional place on the week axis."""
    event: Event
    position: float

    def __post_init__(self):
        if not 0.0 <= self.position <= 1.0:
            raise ValueError("position must be between 0.0 and 1.0")


@dataclass(frozen=True)
class OverflowBucket:
    """
    Aggregate placeholder for events beyond the visible cap.

    Sits at the terminal position of the axis.
    """
    hidden_events: Tuple[Event, ...]
    position: float = 1.0

    def __post_init__(self):
        if not self.hidden_events:
            raise ValueError("OverflowBucket requires at least one hidden event")

    @property
    def count(self) -> int:
        return len(self.hidden_events)

    def to_dict(self) -> dict:
        return {
            'count': self.count,
            'position': self.position,
            'hidden_events': [e.to_dict() for e in self.hidden_events],
        }
