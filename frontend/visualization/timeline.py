"""
Timeline Visualization Contracts

Responsibility:
Deterministic transformation of (events, state, now) into a renderable
week timeline.
Input: Events + TimelineState -> Output: TimelineView (Visualization)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple
import hashlib
import logging

from backend.contracts.events import Event, OverflowBucket, PositionedEvent, WeekWindow
from backend.core.labels import LabelFormatter, UrgencyLevel
from backend.core.layout import DEFAULT_VISIBLE_CAP, aggregate_overflow, position_in_window
from backend.core.ordering import filter_and_sort, resolve_next_event
from backend.temporal.clock import to_local
from backend.temporal.window import compute_week_window
from frontend.interaction.selection import EventSelection, OverflowSelection, Selection
from frontend.presentation.viewmodels import DetailsViewModel, derive_details
from frontend.state.timeline import TimelineState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedEvent:
    """A visual event marker ready for rendering."""
    visual_id: str
    event: Event
    position: float          # Normalized 0-1
    label: str
    time_label: str
    date_label: str
    relative_label: str
    urgency: UrgencyLevel
    is_next: bool
    is_selected: bool
    accessible_label: str


@dataclass(frozen=True)
class OverflowMarker:
    """The "+N" marker at the end of the axis."""
    count: int
    position: float
    label: str
    hidden_event_ids: Tuple[str, ...]
    is_selected: bool


@dataclass(frozen=True)
class TimeAxis:
    """The rendered time axis."""
    start_time: datetime
    end_time: datetime
    ticks: Tuple[Tuple[float, str], ...]  # (position, label)
    label: str


@dataclass(frozen=True)
class TimelineView:
    """
    Fully calculated timeline visualization.

    DETERMINISTIC:
    Same events + same state + same now = identical view.
    No layout logic allowed in the renderer - all pre-calculated here.
    """
    view_id: str
    subject_name: str
    window: WeekWindow
    window_label: str
    axis: TimeAxis
    positioned_events: Tuple[PositionedEvent, ...]
    events: Tuple[RenderedEvent, ...]
    overflow: Optional[OverflowBucket]
    overflow_marker: Optional[OverflowMarker]
    next_event_id: Optional[str]
    selection: Selection
    details: DetailsViewModel
    generated_at: datetime

    @property
    def week_offset(self) -> int:
        return self.window.offset

    @property
    def details_text(self) -> str:
        return self.details.text

    @property
    def is_empty(self) -> bool:
        return not self.positioned_events


def build_axis(window: WeekWindow, formatter: LabelFormatter) -> TimeAxis:
    ticks = tuple(
        (position_in_window(day, window), formatter.pack.weekdays_short[day.weekday()])
        for day in window.day_starts()
    )
    return TimeAxis(
        start_time=window.start,
        end_time=window.end,
        ticks=ticks,
        label=formatter.window_label(window),
    )


def _view_id(subject_name: str, state: TimelineState, events: Tuple[Event, ...],
             now: datetime) -> str:
    content = (
        f"{subject_name}|{state.week_offset}|{state.selection.to_token()}|"
        f"{','.join(e.id for e in events)}|{now.isoformat()}"
    )
    return f"view_{hashlib.sha256(content.encode('utf-8')).hexdigest()[:16]}"


def build_timeline_view(
    events: Iterable[Event],
    state: TimelineState,
    now: datetime,
    formatter: Optional[LabelFormatter] = None,
    subject_name: str = "",
    visible_cap: int = DEFAULT_VISIBLE_CAP,
) -> TimelineView:
    """
    Window, order, position and label events for one timeline.

    The next-event pointer is resolved against every in-window event,
    including those folded into the overflow bucket.
    """
    now = to_local(now)
    formatter = formatter or LabelFormatter()
    window = compute_week_window(state.week_offset, now)
    window_events = filter_and_sort(events, window)
    layout = aggregate_overflow(window_events, window, visible_cap)
    next_event = resolve_next_event(window_events, now)
    next_event_id = next_event.id if next_event else None

    selection = state.selection
    selected_id = selection.event_id if isinstance(selection, EventSelection) else None

    rendered = tuple(
        RenderedEvent(
            visual_id=p.event.id,
            event=p.event,
            position=p.position,
            label=p.event.title,
            time_label=formatter.time_of_day(p.event),
            date_label=formatter.weekday_date(p.event.start),
            relative_label=formatter.relative_day(p.event.start, now),
            urgency=formatter.urgency(p.event.start, now),
            is_next=p.event.id == next_event_id,
            is_selected=p.event.id == selected_id,
            accessible_label=(
                f"{p.event.title}{formatter.pack.separator}"
                f"{formatter.weekday_date(p.event.start)}"
            ),
        )
        for p in layout.visible
    )

    marker = None
    if layout.bucket is not None:
        marker = OverflowMarker(
            count=layout.bucket.count,
            position=layout.bucket.position,
            label=f"+{layout.bucket.count}",
            hidden_event_ids=tuple(e.id for e in layout.bucket.hidden_events),
            is_selected=isinstance(selection, OverflowSelection),
        )

    details = derive_details(
        selection=selection,
        window_events=window_events,
        overflow=layout.bucket,
        next_event=next_event,
        now=now,
        formatter=formatter,
        subject_name=subject_name,
    )

    logger.debug(
        "Built week %+d for %r: %d in window, %d visible",
        state.week_offset, subject_name, len(window_events), len(layout.visible)
    )

    return TimelineView(
        view_id=_view_id(subject_name, state, window_events, now),
        subject_name=subject_name,
        window=window,
        window_label=formatter.window_label(window),
        axis=build_axis(window, formatter),
        positioned_events=layout.visible,
        events=rendered,
        overflow=layout.bucket,
        overflow_marker=marker,
        next_event_id=next_event_id,
        selection=selection,
        details=details,
        generated_at=now,
    )
