"""
Timeline Session

The long-lived owner of one timeline's state. Holds the fetched events
and the current TimelineState, and exposes navigation and selection as
methods. Every method delegates to a pure transition; this class only
stores the result.

Never shared across threads or timelines.
"""

from datetime import datetime
from typing import Iterable, Optional, Tuple

from backend.contracts.events import Event
from backend.core.labels import LabelFormatter
from backend.core.layout import DEFAULT_VISIBLE_CAP
from backend.temporal.clock import LogicalClock
from frontend.interaction.actions import InteractionRequest, apply_action
from frontend.interaction.selection import Selection
from frontend.state.timeline import (
    TimelineState, advance_week, retreat_week, jump_to_current_week,
    toggle_event, toggle_overflow, dismiss,
)
from frontend.visualization.timeline import TimelineView, build_timeline_view


class TimelineSession:
    """
    Stateful facade over one subject's timeline.

    Navigation and selection methods return the new TimelineState.
    view() reads "now" from the injected clock, which defaults to a
    live LogicalClock.
    """

    def __init__(
        self,
        subject_name: str = "",
        events: Iterable[Event] = (),
        formatter: Optional[LabelFormatter] = None,
        visible_cap: int = DEFAULT_VISIBLE_CAP,
        clock: Optional[LogicalClock] = None,
        state: Optional[TimelineState] = None,
    ):
        if visible_cap < 1:
            raise ValueError(f"visible_cap must be at least 1, got {visible_cap}")
        self._subject_name = subject_name
        self._events: Tuple[Event, ...] = tuple(events)
        self._formatter = formatter or LabelFormatter()
        self._visible_cap = visible_cap
        self._clock = clock or LogicalClock.live()
        self._state = state or TimelineState()

    @property
    def state(self) -> TimelineState:
        return self._state

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def week_offset(self) -> int:
        return self._state.week_offset

    @property
    def events(self) -> Tuple[Event, ...]:
        return self._events

    def load_events(self, events: Iterable[Event]) -> None:
        """Replace the event collection (e.g. after a refetch). Selection is kept."""
        self._events = tuple(events)

    # Navigation

    def advance_week(self) -> TimelineState:
        self._state = advance_week(self._state)
        return self._state

    def retreat_week(self) -> TimelineState:
        self._state = retreat_week(self._state)
        return self._state

    def current_week(self) -> TimelineState:
        self._state = jump_to_current_week(self._state)
        return self._state

    # Selection

    def select_event(self, event_id: str) -> TimelineState:
        self._state = toggle_event(self._state, event_id)
        return self._state

    def select_overflow(self) -> TimelineState:
        self._state = toggle_overflow(self._state)
        return self._state

    def dismiss(self) -> TimelineState:
        self._state = dismiss(self._state)
        return self._state

    def apply(self, request: InteractionRequest) -> TimelineState:
        self._state = apply_action(self._state, request)
        return self._state

    def view(self, now: Optional[datetime] = None) -> TimelineView:
        """Build the view. "now" comes from the injected clock unless given."""
        return build_timeline_view(
            events=self._events,
            state=self._state,
            now=now if now is not None else self._clock.now(),
            formatter=self._formatter,
            subject_name=self._subject_name,
            visible_cap=self._visible_cap,
        )
