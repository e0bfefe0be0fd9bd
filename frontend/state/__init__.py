"""
State Layer

Explicit, immutable timeline UI state and its pure transitions.

PRINCIPLES:
1. Immutable (Frozen)
2. Transitions return new values
3. No Rendering Logic
"""

from .timeline import (
    TimelineState, advance_week, retreat_week, jump_to_current_week,
    toggle_event, toggle_overflow, dismiss,
)

__all__ = [
    'TimelineState', 'advance_week', 'retreat_week', 'jump_to_current_week',
    'toggle_event', 'toggle_overflow', 'dismiss',
]
