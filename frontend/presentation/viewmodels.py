"""
Presentation Contracts

ViewModels for the details line under the timeline, and the pure
function that derives it from selection + window events.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from backend.contracts.events import Event, OverflowBucket
from backend.core.labels import LabelFormatter
from frontend.interaction.selection import EventSelection, OverflowSelection, Selection


@dataclass(frozen=True)
class DetailsViewModel:
    """ViewModel for the details text component."""
    text: str
    event_id: Optional[str]
    is_upcoming: bool
    is_overflow: bool
    is_empty: bool


def describe_event(event: Event, now: datetime, formatter: LabelFormatter) -> str:
    """Title, weekday-date and relative day, e.g. Dentist · Monday 10 Jun (Tomorrow)."""
    return (
        f"{event.title}{formatter.pack.separator}"
        f"{formatter.weekday_date(event.start)} "
        f"({formatter.relative_day(event.start, now)})"
    )


def derive_details(
    selection: Selection,
    window_events: Sequence[Event],
    overflow: Optional[OverflowBucket],
    next_event: Optional[Event],
    now: datetime,
    formatter: LabelFormatter,
    subject_name: str = "",
) -> DetailsViewModel:
    """
    Details text for the current selection.

    A selection that no longer resolves (stale id, bucket gone) falls back
    to the unselected composition.
    """
    pack = formatter.pack

    if not window_events:
        text = pack.no_events.format(name=subject_name) if subject_name else pack.no_events_anonymous
        return DetailsViewModel(text=text, event_id=None, is_upcoming=False,
                                is_overflow=False, is_empty=True)

    if isinstance(selection, OverflowSelection) and overflow is not None:
        titles = pack.separator.join(e.title for e in overflow.hidden_events)
        return DetailsViewModel(
            text=pack.overflow_prefix.format(count=overflow.count) + titles,
            event_id=None,
            is_upcoming=False,
            is_overflow=True,
            is_empty=False,
        )

    if isinstance(selection, EventSelection):
        selected = next((e for e in window_events if e.id == selection.event_id), None)
        if selected is not None:
            return DetailsViewModel(
                text=describe_event(selected, now, formatter),
                event_id=selected.id,
                is_upcoming=False,
                is_overflow=False,
                is_empty=False,
            )

    # An all-past window shows its first event without the upcoming prefix.
    if next_event is not None:
        return DetailsViewModel(
            text=pack.upcoming_prefix + describe_event(next_event, now, formatter),
            event_id=next_event.id,
            is_upcoming=True,
            is_overflow=False,
            is_empty=False,
        )
    first = window_events[0]
    return DetailsViewModel(
        text=describe_event(first, now, formatter),
        event_id=first.id,
        is_upcoming=False,
        is_overflow=False,
        is_empty=False,
    )
