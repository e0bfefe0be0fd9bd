"""
API Mapper
==========

Transforms a computed TimelineView (plus the fetch snapshot it was built
from) into the JSON document served to the dashboard.
Nothing is recomputed here; every value comes from the view.
"""
from typing import Any, Dict, Optional

from ..engine import SourceSnapshot
from frontend.visualization.timeline import RenderedEvent, TimelineView


def _iso(value) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value is not None else None


def _map_rendered(rendered: RenderedEvent) -> Dict[str, Any]:
    return {
        "visual_id": rendered.visual_id,
        "event": rendered.event.to_dict(),
        "position": rendered.position,
        "label": rendered.label,
        "time_label": rendered.time_label,
        "date_label": rendered.date_label,
        "relative_label": rendered.relative_label,
        "urgency": rendered.urgency.value,
        "is_next": rendered.is_next,
        "is_selected": rendered.is_selected,
        "accessible_label": rendered.accessible_label,
    }


def map_view_to_dto(view: TimelineView, snapshot: Optional[SourceSnapshot] = None) -> Dict[str, Any]:
    """
    Map TimelineView to the timeline response document.

    Args:
        view: The view built for (events, state, now).
        snapshot: How the events were obtained; None for caller-supplied events.
    """
    overflow = None
    if view.overflow_marker is not None:
        marker = view.overflow_marker
        overflow = {
            "count": marker.count,
            "position": marker.position,
            "label": marker.label,
            "hidden_event_ids": list(marker.hidden_event_ids),
            "is_selected": marker.is_selected,
        }

    source = None
    if snapshot is not None:
        source = {
            "status": snapshot.status.value,
            "message": snapshot.message,
            "error": snapshot.error.to_dict() if snapshot.error else None,
            "dropped": snapshot.report.dropped_count if snapshot.report else 0,
        }

    return {
        "view_id": view.view_id,
        "generated_at": _iso(view.generated_at),
        "subject_name": view.subject_name,
        "week_offset": view.week_offset,
        "window": {
            "start": _iso(view.window.start),
            "end": _iso(view.window.end),
            "is_current": view.window.is_current,
        },
        "window_label": view.window_label,
        "axis": {
            "label": view.axis.label,
            "ticks": [{"position": pos, "label": label} for pos, label in view.axis.ticks],
        },
        "positioned_events": [
            {"event": p.event.to_dict(), "position": p.position}
            for p in view.positioned_events
        ],
        "events": [_map_rendered(r) for r in view.events],
        "overflow": overflow,
        "next_event_id": view.next_event_id,
        "selection": view.selection.to_token(),
        "details_text": view.details_text,
        "is_empty": view.is_empty,
        "source": source,
    }
