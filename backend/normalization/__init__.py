"""
Event Normalization Layer

RESPONSIBILITY: Turn heterogeneous calendar records into canonical Events
ALLOWED INPUTS: Mappings from any EventSource (flat or Google-shaped)
OUTPUTS: Event (immutable) plus a NormalizationReport

GUARANTEES:
===========
- Every input record is either normalized or dropped with a reason
- A bad record never aborts the rest of the collection
- Titles lose pictographic emoji and the subject-name prefix
- No deduplication, no time-zone reconciliation beyond host local time
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple
import hashlib
import logging
import re

from ..contracts.base import Error, ErrorCode, InvalidEvent
from ..contracts.events import Event
from ..temporal.clock import as_datetime, to_local

logger = logging.getLogger(__name__)


# Order matters: the bare-space form must be tried last.
PREFIX_SEPARATORS: Tuple[str, ...] = (" - ", "- ", " — ", " – ", ": ", " ")

# (first, last) code points treated as pictographic noise in titles.
_EMOJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F000, 0x1FAFF),   # pictographs, emoticons, transport, symbols
    (0x1F1E6, 0x1F1FF),   # regional indicators (flags)
    (0x2300, 0x23FF),     # misc technical (watch, hourglass)
    (0x2600, 0x27BF),     # misc symbols, dingbats
    (0x2B00, 0x2BFF),     # arrows, stars
    (0x200D, 0x200D),     # zero width joiner
    (0xFE0E, 0xFE0F),     # variation selectors
    (0x20E3, 0x20E3),     # combining keycap
    (0xE0020, 0xE007F),   # tag characters
)
_EMOJI_PATTERN = re.compile(
    "[" + "".join(
        re.escape(chr(first)) + "-" + re.escape(chr(last))
        for first, last in _EMOJI_RANGES
    ) + "]+"
)
_WHITESPACE = re.compile(r"\s+")


def strip_emoji(text: str) -> str:
    """Remove pictographic characters and collapse the whitespace they leave."""
    return _WHITESPACE.sub(" ", _EMOJI_PATTERN.sub("", text)).strip()


def strip_subject_prefix(title: str, subject_name: str) -> str:
    """
    Drop a leading ``"<subject><separator>"`` (case-insensitive).

    Titles without a matching prefix are returned trimmed but otherwise unchanged.
    """
    trimmed_title = (title or "").strip()
    trimmed_name = (subject_name or "").strip()
    if not trimmed_name:
        return trimmed_title

    lowered = trimmed_title.lower()
    for separator in PREFIX_SEPARATORS:
        prefix = f"{trimmed_name}{separator}".lower()
        if lowered.startswith(prefix):
            return trimmed_title[len(prefix):].strip()
        # "Alice -" is a bare prefix whose trailing space was trimmed away
        if separator.strip() and lowered == prefix.rstrip():
            return ""
    return trimmed_title


def clean_title(title: str, subject_name: str) -> str:
    return strip_subject_prefix(strip_emoji(title or ""), subject_name)


def parse_timestamp(value: Any, field_name: str = "start") -> Tuple[datetime, bool]:
    """
    Parse a record timestamp into (naive local datetime, is_all_day).

    Accepts datetime, date, ISO-8601 strings (with or without offset, "Z"
    included) and Google-style ``{"dateTime": ...}`` / ``{"date": ...}``.
    """
    if isinstance(value, Mapping):
        if value.get('dateTime'):
            return parse_timestamp(value['dateTime'], field_name)[0], False
        if value.get('date'):
            return parse_timestamp(value['date'], field_name)[0], True
        raise InvalidEvent(f"{field_name} has neither dateTime nor date")

    if isinstance(value, datetime):
        try:
            return to_local(value), False
        except OverflowError:
            pass
    elif isinstance(value, date):
        return as_datetime(value), True

    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if len(text) == 10:
            try:
                return as_datetime(date.fromisoformat(text)), True
            except ValueError:
                pass
        # Offsets at the edge of the datetime range overflow on conversion
        try:
            return to_local(datetime.fromisoformat(text.replace('Z', '+00:00'))), False
        except (ValueError, OverflowError):
            pass

    raise InvalidEvent(
        f"Unparseable {field_name} timestamp: {value!r}",
        code=ErrorCode.INVALID_TIMESTAMP,
    )


@dataclass(frozen=True)
class DroppedRecord:
    """Record of an input that could not be normalized."""
    record_id: Optional[str]
    error: Error

    def to_dict(self) -> dict:
        return {
            'record_id': self.record_id,
            'error': self.error.to_dict(),
        }


@dataclass
class NormalizationReport:
    """
    Complete report of one normalization pass.

    TRACEABLE:
    Every input record results in exactly one of:
    - An Event in `events`
    - An entry in `dropped`
    """
    processed_count: int = 0
    events: List[Event] = field(default_factory=list)
    dropped: List[DroppedRecord] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.events)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    def to_dict(self) -> dict:
        return {
            'processed_count': self.processed_count,
            'success_count': self.success_count,
            'dropped_count': self.dropped_count,
            'dropped': [d.to_dict() for d in self.dropped],
        }


class EventNormalizer:
    """
    Normalizes raw calendar records for one subject's timeline.

    NO SEMANTIC PROCESSING:
    - Does not deduplicate
    - Does not reorder
    - Does not merge sources
    """

    def __init__(self, subject_name: str = "", untitled_label: str = "Untitled"):
        self._subject_name = subject_name
        self._untitled_label = untitled_label

    @property
    def subject_name(self) -> str:
        return self._subject_name

    def normalize(self, record: Mapping[str, Any]) -> Event:
        """Normalize a single record. Raises InvalidEvent."""
        if not isinstance(record, Mapping):
            raise InvalidEvent(f"Record is not a mapping: {type(record).__name__}")

        record_id = record.get('id')
        raw_title = record.get('title')
        if raw_title is None:
            raw_title = record.get('summary')

        if 'start' not in record or record['start'] in (None, ""):
            raise InvalidEvent("Record has no start", record_id=record_id)
        try:
            start, all_day = parse_timestamp(record['start'], 'start')
            end = None
            if record.get('end'):
                end, _ = parse_timestamp(record['end'], 'end')
        except InvalidEvent as exc:
            raise InvalidEvent(str(exc), record_id=record_id, code=exc.code) from exc

        if end is not None and end < start:
            raise InvalidEvent(
                "Record ends before it starts",
                record_id=record_id,
                code=ErrorCode.INVERTED_RANGE,
            )

        title = clean_title(str(raw_title or ""), self._subject_name) or self._untitled_label

        return Event(
            id=self._generate_id(raw_title, start) if record_id in (None, "") else str(record_id),
            title=title,
            start=start,
            end=end,
            all_day=all_day,
            calendar_name=record.get('calendarName') or record.get('calendar_name'),
        )

    def normalize_all(
        self,
        records: Iterable[Mapping[str, Any]],
        reported_at: Optional[datetime] = None
    ) -> NormalizationReport:
        """Normalize a collection, dropping (and reporting) invalid records."""
        report = NormalizationReport()
        reported_at = reported_at or datetime.now()

        for record in records:
            report.processed_count += 1
            try:
                report.events.append(self.normalize(record))
            except InvalidEvent as exc:
                logger.warning("Dropping calendar record %s: %s", exc.record_id, exc)
                report.dropped.append(DroppedRecord(
                    record_id=exc.record_id,
                    error=exc.to_error(reported_at),
                ))

        return report

    @staticmethod
    def _generate_id(title: Any, start: datetime) -> str:
        """Deterministic id for records that arrive without one."""
        content = f"{title or ''}|{start.isoformat()}"
        return f"evt_{hashlib.sha256(content.encode('utf-8')).hexdigest()[:16]}"
