"""
Temporal Layer
==============

Clock injection and week-window arithmetic.

INVARIANTS:
- "now" is always passed in explicitly, never read ambiently
- Window boundaries follow local calendar days, not 24h deltas

Modules:
- clock: LogicalClock / FixedClock and local-time helpers
- window: compute_week_window
"""

from .clock import (
    LogicalClock, FixedClock, ClockExhausted, to_local, start_of_day,
    calendar_day_difference,
)
from .window import compute_week_window

__all__ = [
    'LogicalClock',
    'FixedClock',
    'ClockExhausted',
    'to_local',
    'start_of_day',
    'calendar_day_difference',
    'compute_week_window',
]
