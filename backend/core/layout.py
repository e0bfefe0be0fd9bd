"""
Timeline Layout

Maps in-window events onto the [0, 1] week axis and folds anything past
the visible cap into a single overflow bucket.

DETERMINISTIC:
Same sorted events + same window = identical layout.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import math
from typing import Optional, Sequence, Tuple

from ..contracts.events import Event, OverflowBucket, PositionedEvent, WeekWindow

DEFAULT_VISIBLE_CAP = 6


def clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def position_in_window(timestamp: datetime, window: WeekWindow) -> float:
    """Fractional horizontal placement of a timestamp along the window."""
    return clamp01((timestamp - window.start) / (window.end - window.start))


def position_events(
    sorted_events: Sequence[Event],
    window: WeekWindow
) -> Tuple[PositionedEvent, ...]:
    return tuple(
        PositionedEvent(event=e, position=position_in_window(e.start, window))
        for e in sorted_events
    )


@dataclass(frozen=True)
class OverflowLayout:
    """Directly renderable events plus the optional overflow bucket."""
    visible: Tuple[PositionedEvent, ...]
    bucket: Optional[OverflowBucket]

    @property
    def total_count(self) -> int:
        return len(self.visible) + (self.bucket.count if self.bucket else 0)


def aggregate_overflow(
    sorted_events: Sequence[Event],
    window: WeekWindow,
    cap: int = DEFAULT_VISIBLE_CAP
) -> OverflowLayout:
    """
    Keep the first ``cap`` events; the remainder becomes one bucket at 1.0.

    No bucket is produced when there are ``cap`` events or fewer.
    """
    if cap < 1:
        raise ValueError(f"visible cap must be at least 1, got {cap}")

    visible = position_events(sorted_events[:cap], window)
    hidden = tuple(sorted_events[cap:])
    bucket = OverflowBucket(hidden_events=hidden, position=1.0) if hidden else None
    return OverflowLayout(visible=visible, bucket=bucket)
