"""
Label Formatting

Human-readable relative-day, weekday-date and week-range labels.

All day differences use local calendar-day boundaries: an event at 00:30
tomorrow is "Tomorrow" even when it is less than an hour away.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Tuple

from ..contracts.events import Event, WeekWindow
from ..temporal.clock import calendar_day_difference


class UrgencyLevel(Enum):
    """Visual urgency class of an event relative to now."""
    PAST = "past"        # Earlier calendar day
    URGENT = "urgent"    # Today
    SOON = "soon"        # Within the next 48 hours
    FUTURE = "future"    # Later


SOON_HORIZON = timedelta(days=2)


@dataclass(frozen=True)
class LanguagePack:
    """Words and message templates for one UI language."""
    code: str
    weekdays: Tuple[str, ...]          # Monday first
    weekdays_short: Tuple[str, ...]
    months_short: Tuple[str, ...]      # January first
    today: str
    tomorrow: str
    yesterday: str
    in_days: str                       # "{n}"
    days_ago: str                      # "{n}"
    this_week: str
    week_of: str                       # "{start}", "{end}"
    month_day: str                     # "{day}", "{month}"
    weekday_date: str                  # "{weekday}", "{day}", "{month}"
    all_day: str
    untitled: str
    no_events: str                     # "{name}"
    no_events_anonymous: str
    upcoming_prefix: str
    overflow_prefix: str               # "{count}"
    separator: str
    reconnect_required: str
    source_unavailable: str


ENGLISH = LanguagePack(
    code="en",
    weekdays=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
              "Saturday", "Sunday"),
    weekdays_short=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    months_short=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug",
                  "Sep", "Oct", "Nov", "Dec"),
    today="Today",
    tomorrow="Tomorrow",
    yesterday="Yesterday",
    in_days="In {n} days",
    days_ago="{n} days ago",
    this_week="This week",
    week_of="Week of {start}–{end}",
    month_day="{month} {day}",
    weekday_date="{weekday} {day} {month}",
    all_day="All day",
    untitled="Untitled",
    no_events="No events for {name} this week",
    no_events_anonymous="No events this week",
    upcoming_prefix="Next: ",
    overflow_prefix="+{count} more: ",
    separator=" · ",
    reconnect_required="Google session expired: reconnect in Settings > Google.",
    source_unavailable="Unable to load Google events",
)

FRENCH = LanguagePack(
    code="fr",
    weekdays=("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi",
              "dimanche"),
    weekdays_short=("lun", "mar", "mer", "jeu", "ven", "sam", "dim"),
    months_short=("janv.", "févr.", "mars", "avr.", "mai", "juin", "juil.",
                  "août", "sept.", "oct.", "nov.", "déc."),
    today="Aujourd'hui",
    tomorrow="Demain",
    yesterday="Hier",
    in_days="Dans {n} jours",
    days_ago="Il y a {n} jours",
    this_week="Cette semaine",
    week_of="Semaine du {start}–{end}",
    month_day="{day} {month}",
    weekday_date="{weekday} {day} {month}",
    all_day="Toute la journée",
    untitled="Sans titre",
    no_events="Aucun événement pour {name} cette semaine",
    no_events_anonymous="Aucun événement cette semaine",
    upcoming_prefix="Prochain : ",
    overflow_prefix="+{count} autres : ",
    separator=" · ",
    reconnect_required="Session Google expirée : reconnectez-vous dans Paramètres > Google.",
    source_unavailable="Impossible de charger les événements Google",
)

LANGUAGE_PACKS: Dict[str, LanguagePack] = {
    ENGLISH.code: ENGLISH,
    FRENCH.code: FRENCH,
}


class LabelFormatter:
    """Formats dates for one language. Every method takes "now" explicitly."""

    def __init__(self, language: str = "en"):
        if language not in LANGUAGE_PACKS:
            raise ValueError(
                f"Unsupported language {language!r}; "
                f"expected one of {sorted(LANGUAGE_PACKS)}"
            )
        self._pack = LANGUAGE_PACKS[language]

    @property
    def pack(self) -> LanguagePack:
        return self._pack

    def relative_day(self, timestamp: datetime, now: datetime) -> str:
        days = calendar_day_difference(timestamp, now)
        if days == 0:
            return self._pack.today
        if days == 1:
            return self._pack.tomorrow
        if days == -1:
            return self._pack.yesterday
        if days > 1:
            return self._pack.in_days.format(n=days)
        return self._pack.days_ago.format(n=-days)

    def weekday_date(self, timestamp: datetime) -> str:
        """Long weekday, day, abbreviated month: "Monday 10 Jun"."""
        return self._pack.weekday_date.format(
            weekday=self._pack.weekdays[timestamp.weekday()],
            day=timestamp.day,
            month=self._pack.months_short[timestamp.month - 1],
        )

    def short_date(self, timestamp: datetime) -> str:
        """Compact upper-case header label: "MON 10 JUN"."""
        weekday = self._pack.weekdays_short[timestamp.weekday()]
        month = self._pack.months_short[timestamp.month - 1].rstrip(".")
        return f"{weekday} {timestamp.day} {month}".upper()

    def month_day(self, timestamp: datetime) -> str:
        return self._pack.month_day.format(
            day=timestamp.day,
            month=self._pack.months_short[timestamp.month - 1],
        )

    def week_range(self, window: WeekWindow) -> str:
        return self._pack.week_of.format(
            start=self.month_day(window.start),
            end=self.month_day(window.end),
        )

    def window_label(self, window: WeekWindow) -> str:
        if window.is_current:
            return self._pack.this_week
        return self.week_range(window)

    def time_of_day(self, event: Event) -> str:
        if event.all_day:
            return self._pack.all_day
        return event.start.strftime("%H:%M")

    def urgency(self, timestamp: datetime, now: datetime) -> UrgencyLevel:
        days = calendar_day_difference(timestamp, now)
        if days < 0:
            return UrgencyLevel.PAST
        if days == 0:
            return UrgencyLevel.URGENT
        if timestamp < now + SOON_HORIZON:
            return UrgencyLevel.SOON
        return UrgencyLevel.FUTURE
