"""
Contracts Module

Explicit data types shared by every layer of the timeline pipeline.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. All failure modes are enumerated (ErrorCode)
3. Timestamps are naive local wall-clock datetimes
"""

from .base import (
    ErrorCode, Error, TimelineError, InvalidEvent, EmptySource,
    UpstreamUnavailable,
)
from .events import (
    DAYS_PER_WINDOW, Event, WeekWindow, PositionedEvent, OverflowBucket,
)

__all__ = [
    'ErrorCode', 'Error', 'TimelineError', 'InvalidEvent', 'EmptySource',
    'UpstreamUnavailable',
    'DAYS_PER_WINDOW', 'Event', 'WeekWindow', 'PositionedEvent',
    'OverflowBucket',
]
