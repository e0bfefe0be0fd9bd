"""
Calendar Sources

Collaborators that hand the engine an already-fetched record collection.

PRINCIPLES:
===========
1. Records are returned raw - normalization happens downstream
2. Auth/connectivity failures raise UpstreamUnavailable with a reason
3. "Nothing to show" raises EmptySource
4. Token refresh is NOT handled here; an expired token is "unauthorized"
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from urllib.parse import quote
import json
import logging

import httpx

from ..contracts.base import EmptySource, UpstreamUnavailable

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"


def _rfc3339(value: datetime) -> str:
    """Local wall-clock datetime as an offset-qualified RFC 3339 string."""
    return value.astimezone().isoformat()


class EventSource(ABC):
    """
    Abstract base for calendar collaborators.

    Each source knows how to pull records from ONE kind of upstream.
    """

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the type of source this adapter handles."""
        pass

    @abstractmethod
    def fetch(self, time_min: datetime, time_max: datetime) -> List[Dict[str, Any]]:
        """
        Records whose events may fall inside [time_min, time_max].

        Raises EmptySource or UpstreamUnavailable.
        """
        pass


class StaticEventSource(EventSource):
    """In-memory records handed over by the caller."""

    def __init__(self, records: Iterable[Mapping[str, Any]]):
        self._records = [dict(r) for r in records]

    @property
    def source_type(self) -> str:
        return "static"

    def fetch(self, time_min: datetime, time_max: datetime) -> List[Dict[str, Any]]:
        if not self._records:
            raise EmptySource("No records configured")
        return list(self._records)


class JsonFileEventSource(EventSource):
    """
    Records from a JSON file.

    Accepts a bare list or a Google-style ``{"items": [...]}`` payload.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "json_file"

    def fetch(self, time_min: datetime, time_max: datetime) -> List[Dict[str, Any]]:
        if not self._path.is_file():
            raise EmptySource(f"File not found: {self._path}")

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise UpstreamUnavailable('malformed', f"Unreadable events file {self._path}: {exc}") from exc

        if isinstance(data, Mapping):
            data = data.get('items', [])
        if not isinstance(data, list):
            raise UpstreamUnavailable('malformed', f"Expected a list of events in {self._path}")
        if not data:
            raise EmptySource(f"No events in {self._path}")
        return data


class GoogleCalendarSource(EventSource):
    """
    Fetches events from the Google Calendar v3 API.

    GUARANTEES:
    ===========
    1. One request per calendar id, results concatenated in id order
    2. Every item is tagged with calendarId and calendarName
    3. Recurring events are expanded upstream (singleEvents=true)
    """

    def __init__(
        self,
        access_token: Optional[str],
        calendar_ids: Sequence[str] = ("primary",),
        max_results: int = 250,
        timeout: float = 30.0,
        base_url: str = GOOGLE_CALENDAR_API,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._access_token = access_token
        self._calendar_ids = [c for c in calendar_ids if c] or ["primary"]
        self._max_results = max_results
        self._timeout = timeout
        self._base_url = base_url.rstrip('/')
        self._transport = transport

    @property
    def source_type(self) -> str:
        return "google_calendar"

    def fetch(self, time_min: datetime, time_max: datetime) -> List[Dict[str, Any]]:
        if not self._access_token:
            raise UpstreamUnavailable('disconnected', "Google account is not connected")

        params = {
            'timeMin': _rfc3339(time_min),
            'timeMax': _rfc3339(time_max),
            'singleEvents': 'true',
            'orderBy': 'startTime',
            'maxResults': str(self._max_results),
        }
        headers = {'Authorization': f"Bearer {self._access_token}"}

        records: List[Dict[str, Any]] = []
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                for calendar_id in self._calendar_ids:
                    records.extend(self._fetch_calendar(client, calendar_id, params, headers))
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable('unreachable', f"Google Calendar timed out: {exc}") from exc
        except httpx.NetworkError as exc:
            raise UpstreamUnavailable('unreachable', f"Google Calendar unreachable: {exc}") from exc

        if not records:
            raise EmptySource("Google Calendar returned no events")
        return records

    def _fetch_calendar(
        self,
        client: httpx.Client,
        calendar_id: str,
        params: Dict[str, str],
        headers: Dict[str, str],
    ) -> List[Dict[str, Any]]:
        url = f"{self._base_url}/calendars/{quote(calendar_id, safe='')}/events"
        response = client.get(url, params=params, headers=headers)

        if response.status_code == 401:
            raise UpstreamUnavailable('unauthorized', "Google session expired")
        if response.status_code != 200:
            raise UpstreamUnavailable(
                'http_error',
                f"Google Calendar returned HTTP {response.status_code} for {calendar_id}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable('malformed', f"Invalid JSON from Google Calendar: {exc}") from exc
        if not isinstance(payload, dict):
            raise UpstreamUnavailable('malformed', "Google Calendar payload is not an object")

        calendar_name = payload.get('summary') or calendar_id
        items = payload.get('items') or []
        logger.debug("Fetched %d items from calendar %s", len(items), calendar_id)
        return [
            {**item, 'calendarId': calendar_id, 'calendarName': calendar_name}
            if isinstance(item, Mapping) else item
            for item in items
        ]
