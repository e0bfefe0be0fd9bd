"""
Integration Test Fixtures

Fixed timestamps and event factories shared by every test module.
All fixtures are explicit - no random generation, no system clock.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from backend.contracts.events import Event


# =============================================================================
# FIXED TIMESTAMPS (deterministic)
# =============================================================================

# Monday 10 June 2024, 09:00 local
NOW = datetime(2024, 6, 10, 9, 0, 0)
TODAY = datetime(2024, 6, 10)
WEEK_START = TODAY
WEEK_END = TODAY + timedelta(days=7) - timedelta(milliseconds=1)

SUBJECT = "Alice"


# =============================================================================
# EVENT FACTORIES
# =============================================================================

def make_event(
    event_id: str,
    start: datetime,
    title: Optional[str] = None,
    end: Optional[datetime] = None,
    all_day: bool = False,
) -> Event:
    """Factory for test events."""
    return Event(
        id=event_id,
        title=title if title is not None else event_id.title(),
        start=start,
        end=end,
        all_day=all_day,
    )


def make_week_of_events(count: int, base: datetime = TODAY, hour: int = 10) -> List[Event]:
    """``count`` events spread over the week at ``base``, one every 12 hours (count <= 13)."""
    if hour + 12 * (count - 1) >= 168:
        raise ValueError("too many events for one week")
    return [
        make_event(f"evt_{i:02d}", base + timedelta(hours=hour + 12 * i))
        for i in range(count)
    ]


def dentist_record() -> dict:
    """Google-style raw record for tomorrow's dentist appointment."""
    return {
        "id": "g_dentist",
        "summary": "Alice - Dentist",
        "start": {"dateTime": "2024-06-11T14:30:00"},
        "end": {"dateTime": "2024-06-11T15:30:00"},
        "calendarName": "Family",
    }


def school_trip_record() -> dict:
    """All-day record on Saturday."""
    return {
        "id": "g_trip",
        "summary": "School trip",
        "start": {"date": "2024-06-15"},
        "end": {"date": "2024-06-16"},
    }
