"""
Core Timeline Layout Engine

RESPONSIBILITY: Window filtering, ordering, positioning, overflow, labels
ALLOWED INPUTS: Normalized Events, a WeekWindow and an explicit "now"
OUTPUTS: Ordered/positioned events, OverflowBucket, label strings

WHAT THIS LAYER MUST NOT DO:
============================
- Fetch or persist events
- Mutate events
- Read the wall clock
- Hold state between calls
"""

from .ordering import filter_and_sort, resolve_next_event
from .layout import (
    DEFAULT_VISIBLE_CAP, OverflowLayout, aggregate_overflow, clamp01,
    position_events, position_in_window,
)
from .labels import LANGUAGE_PACKS, LabelFormatter, LanguagePack, UrgencyLevel

__all__ = [
    'filter_and_sort',
    'resolve_next_event',
    'DEFAULT_VISIBLE_CAP',
    'OverflowLayout',
    'aggregate_overflow',
    'clamp01',
    'position_events',
    'position_in_window',
    'LANGUAGE_PACKS',
    'LabelFormatter',
    'LanguagePack',
    'UrgencyLevel',
]
