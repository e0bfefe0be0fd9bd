"""
Timeline State

Explicit state owned by one timeline instance: the week offset and the
current selection. Navigation always resets the selection, since the
underlying event set changes with the window.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from frontend.interaction.selection import (
    NO_SELECTION, Selection, select_event, select_overflow, clear_selection,
)


@dataclass(frozen=True)
class TimelineState:
    """Immutable (offset, selection) pair. Initial state: current week, nothing selected."""
    week_offset: int = 0
    selection: Selection = NO_SELECTION


def advance_week(state: TimelineState) -> TimelineState:
    return TimelineState(week_offset=state.week_offset + 1, selection=NO_SELECTION)


def retreat_week(state: TimelineState) -> TimelineState:
    return TimelineState(week_offset=state.week_offset - 1, selection=NO_SELECTION)


def jump_to_current_week(state: TimelineState) -> TimelineState:
    return TimelineState(week_offset=0, selection=NO_SELECTION)


def toggle_event(state: TimelineState, event_id: str) -> TimelineState:
    return replace(state, selection=select_event(state.selection, event_id))


def toggle_overflow(state: TimelineState) -> TimelineState:
    return replace(state, selection=select_overflow(state.selection))


def dismiss(state: TimelineState) -> TimelineState:
    return replace(state, selection=clear_selection(state.selection))
