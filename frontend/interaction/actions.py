"""
Interaction Contracts

Valid user actions on a timeline and the reducer that applies them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from frontend.state.timeline import (
    TimelineState, advance_week, retreat_week, jump_to_current_week,
    toggle_event, toggle_overflow, dismiss,
)


class ActionType(Enum):
    """Types of user interaction."""
    # Navigation
    NEXT_WEEK = "next_week"
    PREVIOUS_WEEK = "previous_week"
    CURRENT_WEEK = "current_week"

    # Selection
    SELECT_EVENT = "select_event"
    SELECT_OVERFLOW = "select_overflow"
    DISMISS = "dismiss"


@dataclass(frozen=True)
class InteractionRequest:
    """A specific user intent."""
    action: ActionType
    event_id: Optional[str] = None

    def __post_init__(self):
        if self.action is ActionType.SELECT_EVENT and not self.event_id:
            raise ValueError("SELECT_EVENT requires an event_id")


def apply_action(state: TimelineState, request: InteractionRequest) -> TimelineState:
    action = request.action
    if action is ActionType.NEXT_WEEK:
        return advance_week(state)
    if action is ActionType.PREVIOUS_WEEK:
        return retreat_week(state)
    if action is ActionType.CURRENT_WEEK:
        return jump_to_current_week(state)
    if action is ActionType.SELECT_EVENT:
        return toggle_event(state, request.event_id)
    if action is ActionType.SELECT_OVERFLOW:
        return toggle_overflow(state)
    return dismiss(state)
