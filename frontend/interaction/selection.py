"""
Selection Contracts

The single "expanded for detail" target of a timeline.

Modeled as a tagged variant so that only three states exist:
nothing, exactly one event, or the overflow bucket.
All transitions are pure functions returning a new value.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class SelectionKind(Enum):
    NONE = "none"
    EVENT = "event"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class NoSelection:
    """Nothing expanded."""

    @property
    def kind(self) -> SelectionKind:
        return SelectionKind.NONE

    def to_token(self) -> str:
        return "none"


@dataclass(frozen=True)
class EventSelection:
    """One event expanded, referenced by id (never owned)."""
    event_id: str

    @property
    def kind(self) -> SelectionKind:
        return SelectionKind.EVENT

    def to_token(self) -> str:
        return f"event:{self.event_id}"


@dataclass(frozen=True)
class OverflowSelection:
    """The overflow bucket expanded."""

    @property
    def kind(self) -> SelectionKind:
        return SelectionKind.OVERFLOW

    def to_token(self) -> str:
        return "overflow"


Selection = Union[NoSelection, EventSelection, OverflowSelection]

NO_SELECTION = NoSelection()
OVERFLOW_SELECTION = OverflowSelection()


def select_event(current: Selection, event_id: str) -> Selection:
    """Expand an event; selecting the already-expanded event collapses it."""
    if isinstance(current, EventSelection) and current.event_id == event_id:
        return NO_SELECTION
    return EventSelection(event_id=event_id)


def select_overflow(current: Selection) -> Selection:
    """Expand the overflow bucket; selecting it again collapses it."""
    if isinstance(current, OverflowSelection):
        return NO_SELECTION
    return OVERFLOW_SELECTION


def clear_selection(current: Selection) -> Selection:
    """Collapse whatever is expanded (Escape key, tap outside)."""
    return NO_SELECTION


def parse_selection(token: str) -> Selection:
    """
    Inverse of ``to_token``: "none", "overflow" or "event:<id>".

    Raises ValueError on anything else.
    """
    token = (token or "none").strip()
    if token == "none":
        return NO_SELECTION
    if token == "overflow":
        return OVERFLOW_SELECTION
    if token.startswith("event:") and len(token) > len("event:"):
        return EventSelection(event_id=token[len("event:"):])
    raise ValueError(f"Unknown selection token: {token!r}")
