"""
Engine Orchestration Module

Coordinates the fetch → normalize boundary in front of the timeline view.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. A failed or empty fetch degrades to "no events", never to an exception
3. The upstream failure reason is reported, not interpreted
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Tuple
import logging
import os

from .contracts.base import EmptySource, Error, UpstreamUnavailable
from .contracts.events import Event, WeekWindow
from .core.labels import LANGUAGE_PACKS, LabelFormatter
from .core.layout import DEFAULT_VISIBLE_CAP
from .ingestion import (
    EventSource, GoogleCalendarSource, JsonFileEventSource, StaticEventSource,
)
from .normalization import EventNormalizer, NormalizationReport

logger = logging.getLogger(__name__)

ENV_PREFIX = "TIMELINE_"


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


@dataclass
class TimelineConfig:
    """Unified configuration for the timeline backend."""
    subject_name: str = ""
    visible_cap: int = DEFAULT_VISIBLE_CAP
    language: str = "en"
    events_file: Optional[str] = None
    google_access_token: Optional[str] = None
    google_calendar_ids: Tuple[str, ...] = ("primary",)
    max_results: int = 250
    request_timeout: float = 30.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.visible_cap < 1:
            raise ValueError(f"visible_cap must be at least 1, got {self.visible_cap}")
        if self.language not in LANGUAGE_PACKS:
            raise ValueError(
                f"language must be one of {sorted(LANGUAGE_PACKS)}, got {self.language!r}"
            )
        if self.max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {self.max_results}")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        self.google_calendar_ids = tuple(self.google_calendar_ids) or ("primary",)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'TimelineConfig':
        """Build a config from TIMELINE_* environment variables."""
        environ = os.environ if environ is None else environ
        calendars = environ.get(ENV_PREFIX + "GOOGLE_CALENDARS", "primary")

        return cls(
            subject_name=environ.get(ENV_PREFIX + "SUBJECT_NAME", ""),
            visible_cap=_env_int(environ, "VISIBLE_CAP", DEFAULT_VISIBLE_CAP),
            language=environ.get(ENV_PREFIX + "LANGUAGE", "en"),
            events_file=environ.get(ENV_PREFIX + "EVENTS_FILE") or None,
            google_access_token=environ.get(ENV_PREFIX + "GOOGLE_TOKEN") or None,
            google_calendar_ids=tuple(c.strip() for c in calendars.split(",") if c.strip()),
            max_results=_env_int(environ, "MAX_RESULTS", 250),
            request_timeout=_env_float(environ, "REQUEST_TIMEOUT", 30.0),
            log_level=environ.get(ENV_PREFIX + "LOG_LEVEL", "INFO"),
        )


class SourceStatus(Enum):
    """Outcome of one fetch at the collaborator boundary."""
    OK = "ok"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SourceSnapshot:
    """
    Events handed to the view layer, with how they were obtained.

    UNAVAILABLE snapshots carry the collaborator's message and no events.
    """
    status: SourceStatus
    events: Tuple[Event, ...] = ()
    report: Optional[NormalizationReport] = None
    message: Optional[str] = None
    error: Optional[Error] = None
    fetched_at: Optional[datetime] = None

    @property
    def is_available(self) -> bool:
        return self.status is not SourceStatus.UNAVAILABLE


class TimelineBackend:
    """
    Fetch + normalize boundary for one dashboard.

    LAYER FLOW:
    ===========
    1. Ingestion: EventSource.fetch(window) → raw records
    2. Normalization: raw records → Events (invalid records dropped)
    """

    def __init__(
        self,
        config: Optional[TimelineConfig] = None,
        source: Optional[EventSource] = None
    ):
        self._config = config or TimelineConfig()
        self._source = source or self._build_source(self._config)
        self._formatter = LabelFormatter(self._config.language)

    @property
    def config(self) -> TimelineConfig:
        return self._config

    @property
    def source(self) -> EventSource:
        return self._source

    @property
    def formatter(self) -> LabelFormatter:
        return self._formatter

    @staticmethod
    def _build_source(config: TimelineConfig) -> EventSource:
        if config.google_access_token:
            return GoogleCalendarSource(
                access_token=config.google_access_token,
                calendar_ids=config.google_calendar_ids,
                max_results=config.max_results,
                timeout=config.request_timeout,
            )
        if config.events_file:
            return JsonFileEventSource(config.events_file)
        return StaticEventSource([])

    def normalizer_for(self, subject_name: Optional[str] = None) -> EventNormalizer:
        name = self._config.subject_name if subject_name is None else subject_name
        return EventNormalizer(subject_name=name, untitled_label=self._formatter.pack.untitled)

    def load_events(
        self,
        window: WeekWindow,
        now: datetime,
        subject_name: Optional[str] = None
    ) -> SourceSnapshot:
        """Fetch and normalize records for the window. Never raises for upstream failures."""
        try:
            records = self._source.fetch(window.start, window.end)
        except EmptySource as exc:
            logger.info("No events from %s: %s", self._source.source_type, exc)
            return SourceSnapshot(
                status=SourceStatus.EMPTY,
                error=exc.to_error(now),
                fetched_at=now,
            )
        except UpstreamUnavailable as exc:
            logger.warning(
                "Calendar source %s unavailable (%s): %s",
                self._source.source_type, exc.reason, exc
            )
            pack = self._formatter.pack
            message = pack.reconnect_required if exc.requires_reconnect else pack.source_unavailable
            return SourceSnapshot(
                status=SourceStatus.UNAVAILABLE,
                message=message,
                error=exc.to_error(now),
                fetched_at=now,
            )

        report = self.normalizer_for(subject_name).normalize_all(records, reported_at=now)
        status = SourceStatus.OK if report.events else SourceStatus.EMPTY
        logger.debug(
            "Normalized %d/%d records (%d dropped)",
            report.success_count, report.processed_count, report.dropped_count
        )
        return SourceSnapshot(
            status=status,
            events=tuple(report.events),
            report=report,
            fetched_at=now,
        )
