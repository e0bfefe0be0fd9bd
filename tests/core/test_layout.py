"""
Layout Tests
============

INVARIANTS TESTED:
1. Positions are (start - window.start) / span, clamped to [0, 1]
2. Positions are non-decreasing for sorted input
3. Overflow bucket exists iff count > cap, holds the tail in order, sits at 1.0
"""

from datetime import timedelta

import pytest

from backend.contracts.events import OverflowBucket, PositionedEvent
from backend.core.layout import (
    DEFAULT_VISIBLE_CAP, aggregate_overflow, clamp01, position_events, position_in_window,
)
from backend.core.ordering import filter_and_sort
from backend.temporal.window import compute_week_window
from tests.integration.fixtures import NOW, TODAY, WEEK_END, make_event, make_week_of_events


class TestPositions:

    def setup_method(self):
        self.window = compute_week_window(0, NOW)

    def test_window_bounds(self):
        assert position_in_window(TODAY, self.window) == 0.0
        assert position_in_window(WEEK_END, self.window) == 1.0

    def test_midpoint(self):
        midpoint = TODAY + (WEEK_END - TODAY) / 2
        assert position_in_window(midpoint, self.window) == pytest.approx(0.5)

    def test_outside_is_clamped(self):
        assert position_in_window(TODAY - timedelta(days=1), self.window) == 0.0
        assert position_in_window(WEEK_END + timedelta(days=1), self.window) == 1.0

    def test_clamp01(self):
        assert clamp01(-0.5) == 0.0
        assert clamp01(1.5) == 1.0
        assert clamp01(0.25) == 0.25
        assert clamp01(float("nan")) == 0.0

    def test_positions_monotonic(self):
        events = filter_and_sort(make_week_of_events(10), self.window)
        positions = [p.position for p in position_events(events, self.window)]
        assert positions == sorted(positions)
        assert all(0.0 <= p <= 1.0 for p in positions)

    def test_positioned_event_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            PositionedEvent(event=make_event("x", NOW), position=1.01)


class TestOverflowAggregation:

    def setup_method(self):
        self.window = compute_week_window(0, NOW)

    def test_eight_events_cap_six(self):
        events = filter_and_sort(make_week_of_events(8), self.window)
        layout = aggregate_overflow(events, self.window, cap=6)

        assert len(layout.visible) == 6
        assert [p.event.id for p in layout.visible] == [f"evt_{i:02d}" for i in range(6)]
        assert layout.bucket is not None
        assert layout.bucket.count == 2
        assert layout.bucket.position == 1.0
        assert [e.id for e in layout.bucket.hidden_events] == ["evt_06", "evt_07"]
        assert layout.total_count == 8

    def test_exactly_cap_has_no_bucket(self):
        events = filter_and_sort(make_week_of_events(DEFAULT_VISIBLE_CAP), self.window)
        layout = aggregate_overflow(events, self.window)
        assert len(layout.visible) == DEFAULT_VISIBLE_CAP
        assert layout.bucket is None

    def test_one_past_cap(self):
        events = filter_and_sort(make_week_of_events(7), self.window)
        layout = aggregate_overflow(events, self.window)
        assert layout.bucket.count == 1

    def test_empty(self):
        layout = aggregate_overflow((), self.window)
        assert layout.visible == ()
        assert layout.bucket is None
        assert layout.total_count == 0

    def test_custom_cap(self):
        events = filter_and_sort(make_week_of_events(5), self.window)
        layout = aggregate_overflow(events, self.window, cap=2)
        assert len(layout.visible) == 2
        assert layout.bucket.count == 3

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            aggregate_overflow((), self.window, cap=0)

    def test_bucket_never_empty(self):
        with pytest.raises(ValueError):
            OverflowBucket(hidden_events=())

    def test_bucket_to_dict(self):
        bucket = OverflowBucket(hidden_events=(make_event("a", NOW),))
        payload = bucket.to_dict()
        assert payload["count"] == 1
        assert payload["position"] == 1.0
        assert payload["hidden_events"][0]["id"] == "a"
