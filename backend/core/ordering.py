"""
Window Filtering, Ordering and Next-Event Resolution

Both functions are pure and never cache: callers recompute on every
window or "now" change.
"""

from __future__ import annotations
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from ..contracts.events import Event, WeekWindow


def filter_and_sort(events: Iterable[Event], window: WeekWindow) -> Tuple[Event, ...]:
    """
    Events whose start lies inside the window (inclusive), oldest first.

    sorted() is stable, so events sharing a start keep their input order.
    """
    in_window = [e for e in events if window.contains(e.start)]
    return tuple(sorted(in_window, key=lambda e: e.start))


def resolve_next_event(sorted_events: Sequence[Event], now: datetime) -> Optional[Event]:
    """First event (in sort order) starting at or after now."""
    for event in sorted_events:
        if event.start >= now:
            return event
    return None
