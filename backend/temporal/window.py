"""
Week Window Calculation

Pure function: (offset, now) -> WeekWindow.
"""

from __future__ import annotations
from datetime import datetime, timedelta

from ..contracts.events import DAYS_PER_WINDOW, WINDOW_RESOLUTION, WeekWindow
from .clock import start_of_day, to_local


def compute_week_window(offset: int, now: datetime) -> WeekWindow:
    """
    Window starting ``7 * offset`` days after today's local midnight.

    offset 0 is the current week, negative values are past weeks.
    """
    today = start_of_day(to_local(now))
    start = today + timedelta(days=DAYS_PER_WINDOW * offset)
    end = start + timedelta(days=DAYS_PER_WINDOW) - WINDOW_RESOLUTION
    return WeekWindow(start=start, end=end, offset=offset)
