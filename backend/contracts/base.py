"""
Base Contracts and Shared Types

Foundational error types used across all layers.

ERROR MODEL:
============
- Errors are DATA (Error records) once they cross a layer boundary
- Exceptions are raised only inside a layer and caught at its edge
- Every degradation path is enumerated in ErrorCode
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for the timeline pipeline.
    """
    # Normalization errors
    INVALID_EVENT = auto()
    INVALID_TIMESTAMP = auto()
    INVERTED_RANGE = auto()

    # Source errors
    EMPTY_SOURCE = auto()
    UPSTREAM_UNAUTHORIZED = auto()
    UPSTREAM_DISCONNECTED = auto()
    UPSTREAM_UNREACHABLE = auto()
    MALFORMED_PAYLOAD = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and reported.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )

    def to_dict(self) -> dict:
        return {
            'code': self.code.name,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'context': dict(self.context),
        }


# =============================================================================
# EXCEPTIONS (Raised inside a layer, converted to Error at its edge)
# =============================================================================

class TimelineError(Exception):
    """Base class for all timeline pipeline failures."""

    code: ErrorCode = ErrorCode.INVALID_EVENT

    def to_error(self, timestamp: datetime) -> Error:
        return Error(code=self.code, message=str(self), timestamp=timestamp)


class InvalidEvent(TimelineError):
    """A single record could not be turned into an Event."""

    def __init__(self, message: str, record_id: Optional[str] = None,
                 code: ErrorCode = ErrorCode.INVALID_EVENT):
        super().__init__(message)
        self.record_id = record_id
        self.code = code

    def to_error(self, timestamp: datetime) -> Error:
        error = super().to_error(timestamp)
        if self.record_id is not None:
            error = error.with_context('record_id', self.record_id)
        return error


class EmptySource(TimelineError):
    """The collaborator returned nothing to show."""

    code = ErrorCode.EMPTY_SOURCE


class UpstreamUnavailable(TimelineError):
    """
    The calendar collaborator reported an auth or connectivity failure.

    reason is one of: "unauthorized", "disconnected", "unreachable",
    "http_error", "malformed".
    """

    _CODES = {
        'unauthorized': ErrorCode.UPSTREAM_UNAUTHORIZED,
        'disconnected': ErrorCode.UPSTREAM_DISCONNECTED,
        'malformed': ErrorCode.MALFORMED_PAYLOAD,
    }

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason
        self.code = self._CODES.get(reason, ErrorCode.UPSTREAM_UNREACHABLE)

    @property
    def requires_reconnect(self) -> bool:
        return self.reason in ('unauthorized', 'disconnected')

    def to_error(self, timestamp: datetime) -> Error:
        return super().to_error(timestamp).with_context('reason', self.reason)
