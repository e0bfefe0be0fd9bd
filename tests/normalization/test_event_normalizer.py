"""
Event Normalization Tests
=========================

INVARIANTS TESTED:
1. Titles lose emoji and the subject-name prefix
2. Google-style, ISO and date-only timestamps all parse
3. Invalid records are dropped with a reason; the rest survive
4. Records without an id get a deterministic one
"""

from datetime import date, datetime, timedelta, timezone
import logging

import pytest

from backend.contracts.base import ErrorCode, InvalidEvent
from backend.normalization import (
    EventNormalizer, clean_title, parse_timestamp, strip_emoji, strip_subject_prefix,
)
from tests.integration.fixtures import SUBJECT, dentist_record, school_trip_record

TOOTH = chr(0x1F9B7)
SOCCER = chr(0x26BD)
FAMILY = chr(0x1F468) + chr(0x200D) + chr(0x1F469) + chr(0x200D) + chr(0x1F467)


# =============================================================================
# TITLE CLEANING
# =============================================================================

class TestTitleCleaning:

    @pytest.mark.parametrize("raw", [
        "Alice - Dentist",
        "Alice- Dentist",
        "Alice: Dentist",
        "alice Dentist",
        "ALICE - Dentist",
        "  Alice - Dentist  ",
    ])
    def test_subject_prefix_removed(self, raw):
        assert strip_subject_prefix(raw, SUBJECT) == "Dentist"

    def test_em_and_en_dash_separators(self):
        assert strip_subject_prefix("Alice — Piano", SUBJECT) == "Piano"
        assert strip_subject_prefix("Alice – Piano", SUBJECT) == "Piano"

    def test_name_inside_title_is_kept(self):
        assert strip_subject_prefix("Party at Alice's", SUBJECT) == "Party at Alice's"

    def test_name_without_separator_is_kept(self):
        assert strip_subject_prefix("Alicebirthday", SUBJECT) == "Alicebirthday"

    @pytest.mark.parametrize("raw", ["Alice - ", "Alice -", "Alice:", "alice — "])
    def test_bare_prefix_cleans_to_nothing(self, raw):
        assert clean_title(raw, SUBJECT) == ""

    def test_empty_subject_disables_prefix_stripping(self):
        assert strip_subject_prefix("Alice - Dentist", "") == "Alice - Dentist"

    def test_emoji_removed(self):
        assert strip_emoji(f"{TOOTH} Dentist") == "Dentist"
        assert strip_emoji(f"Soccer {SOCCER} practice") == "Soccer practice"
        assert strip_emoji(f"{FAMILY} Dinner") == "Dinner"

    def test_emoji_before_prefix(self):
        assert clean_title(f"{TOOTH} Alice - Dentist", SUBJECT) == "Dentist"

    def test_accented_text_untouched(self):
        assert clean_title("Réunion d'école", SUBJECT) == "Réunion d'école"


# =============================================================================
# TIMESTAMP PARSING
# =============================================================================

class TestParseTimestamp:

    def test_google_datetime(self):
        assert parse_timestamp({"dateTime": "2024-06-11T14:30:00"}) == (
            datetime(2024, 6, 11, 14, 30), False
        )

    def test_google_date_is_all_day(self):
        assert parse_timestamp({"date": "2024-06-15"}) == (datetime(2024, 6, 15), True)

    def test_date_only_string_is_all_day(self):
        assert parse_timestamp("2024-06-15") == (datetime(2024, 6, 15), True)

    def test_date_object_is_all_day(self):
        assert parse_timestamp(date(2024, 6, 15)) == (datetime(2024, 6, 15), True)

    def test_utc_z_suffix_converted_to_local(self):
        parsed, all_day = parse_timestamp("2024-06-11T14:30:00Z")
        expected = datetime(2024, 6, 11, 14, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed == expected
        assert parsed.tzinfo is None
        assert not all_day

    def test_aware_datetime_converted_to_local(self):
        aware = datetime(2024, 6, 11, 14, 30, tzinfo=timezone(timedelta(hours=-4)))
        parsed, _ = parse_timestamp(aware)
        assert parsed.tzinfo is None
        assert parsed == aware.astimezone().replace(tzinfo=None)

    @pytest.mark.parametrize("value", ["", "not a date", 12345, None, {"timeZone": "UTC"}])
    def test_unparseable_raises(self, value):
        with pytest.raises(InvalidEvent):
            parse_timestamp(value)

    @pytest.mark.parametrize("value", [
        "0001-01-01T00:00:00+14:00",
        "9999-12-31T23:59:59-14:00",
        {"dateTime": "0001-01-01T00:00:00+14:00"},
        datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=14))),
    ])
    def test_out_of_range_offset_raises_invalid_timestamp(self, value):
        with pytest.raises(InvalidEvent) as info:
            parse_timestamp(value)
        assert info.value.code is ErrorCode.INVALID_TIMESTAMP


# =============================================================================
# RECORD NORMALIZATION
# =============================================================================

class TestEventNormalizer:

    def test_google_record(self):
        event = EventNormalizer(subject_name=SUBJECT).normalize(dentist_record())

        assert event.id == "g_dentist"
        assert event.title == "Dentist"
        assert event.start == datetime(2024, 6, 11, 14, 30)
        assert event.end == datetime(2024, 6, 11, 15, 30)
        assert not event.all_day
        assert event.calendar_name == "Family"

    def test_all_day_record(self):
        event = EventNormalizer().normalize(school_trip_record())
        assert event.all_day
        assert event.start == datetime(2024, 6, 15)

    def test_flat_record_with_title(self):
        event = EventNormalizer().normalize({
            "id": "e1", "title": "Piano", "start": "2024-06-12T16:00:00",
        })
        assert event.title == "Piano"
        assert event.end is None

    def test_empty_title_becomes_untitled(self):
        normalizer = EventNormalizer(subject_name=SUBJECT, untitled_label="Sans titre")
        assert normalizer.normalize({"id": "e1", "title": "", "start": "2024-06-12"}).title == "Sans titre"
        assert normalizer.normalize({"id": "e3", "title": "Alice - ", "start": "2024-06-12"}).title == "Sans titre"
        # A title that is only an emoji cleans to nothing
        assert normalizer.normalize({"id": "e2", "title": f"{TOOTH}", "start": "2024-06-12"}).title == "Sans titre"

    def test_missing_id_generates_deterministic_id(self):
        record = {"title": "Piano", "start": "2024-06-12T16:00:00"}
        first = EventNormalizer().normalize(record)
        second = EventNormalizer().normalize(dict(record))
        assert first.id == second.id
        assert first.id.startswith("evt_")

    def test_falsy_id_is_kept(self):
        record = {"id": 0, "title": "Piano", "start": "2024-06-12T16:00:00"}
        assert EventNormalizer().normalize(record).id == "0"
        assert EventNormalizer().normalize({**record, "id": ""}).id.startswith("evt_")

    def test_missing_start_raises(self):
        with pytest.raises(InvalidEvent) as info:
            EventNormalizer().normalize({"id": "e1", "title": "Piano"})
        assert info.value.record_id == "e1"

    def test_inverted_range_raises(self):
        with pytest.raises(InvalidEvent) as info:
            EventNormalizer().normalize({
                "id": "e1", "title": "Piano",
                "start": "2024-06-12T16:00:00", "end": "2024-06-12T15:00:00",
            })
        assert info.value.code is ErrorCode.INVERTED_RANGE


class TestNormalizeAll:

    def test_bad_records_dropped_rest_kept(self, caplog):
        records = [
            dentist_record(),
            {"id": "bad_start", "title": "Broken", "start": "someday"},
            {"id": "no_start", "title": "Also broken"},
            "not a mapping",
            school_trip_record(),
        ]

        with caplog.at_level(logging.WARNING, logger="backend.normalization"):
            report = EventNormalizer(subject_name=SUBJECT).normalize_all(
                records, reported_at=datetime(2024, 6, 10, 9, 0)
            )

        assert report.processed_count == 5
        assert [e.id for e in report.events] == ["g_dentist", "g_trip"]
        assert report.dropped_count == 3
        assert report.dropped[0].record_id == "bad_start"
        assert report.dropped[0].error.code is ErrorCode.INVALID_TIMESTAMP
        assert report.dropped[1].error.code is ErrorCode.INVALID_EVENT
        assert "Dropping calendar record" in caplog.text

    def test_out_of_range_record_dropped_rest_kept(self):
        records = [
            {"id": "edge", "title": "Edge", "start": "0001-01-01T00:00:00+14:00"},
            {"id": "ok", "title": "Piano", "start": "2024-06-10T10:00:00"},
        ]
        report = EventNormalizer().normalize_all(records, reported_at=datetime(2024, 6, 10, 9, 0))

        assert [e.id for e in report.events] == ["ok"]
        assert report.dropped[0].record_id == "edge"
        assert report.dropped[0].error.code is ErrorCode.INVALID_TIMESTAMP

    def test_report_to_dict(self):
        report = EventNormalizer().normalize_all([{"id": "x"}], reported_at=datetime(2024, 6, 10))
        payload = report.to_dict()
        assert payload["processed_count"] == 1
        assert payload["success_count"] == 0
        assert payload["dropped"][0]["record_id"] == "x"
