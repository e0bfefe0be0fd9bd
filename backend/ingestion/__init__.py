"""
Ingestion Layer

RESPONSIBILITY: Fetch raw calendar records from external collaborators
ALLOWED INPUTS: Files, in-memory fixtures, the Google Calendar HTTP API
OUTPUTS: List of raw record mappings (uninterpreted)

WHAT THIS LAYER MUST NOT DO:
============================
- Normalize titles or parse timestamps
- Filter to the display window beyond what the upstream API does
- Swallow auth/connectivity failures (raise UpstreamUnavailable instead)
"""

from .calendar_source import (
    EventSource, StaticEventSource, JsonFileEventSource, GoogleCalendarSource,
    GOOGLE_CALENDAR_API,
)

__all__ = [
    'EventSource',
    'StaticEventSource',
    'JsonFileEventSource',
    'GoogleCalendarSource',
    'GOOGLE_CALENDAR_API',
]
