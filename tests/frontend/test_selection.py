"""
Selection & Timeline State Tests
================================

INVARIANTS TESTED:
1. At most one thing is expanded: nothing, one event, or the overflow bucket
2. Selecting the expanded target again collapses it
3. Navigation always resets the selection
4. Selection tokens round-trip through parse_selection
"""

from dataclasses import FrozenInstanceError

import pytest

from frontend.interaction.actions import ActionType, InteractionRequest, apply_action
from frontend.interaction.selection import (
    NO_SELECTION, OVERFLOW_SELECTION, EventSelection, NoSelection, OverflowSelection,
    SelectionKind, clear_selection, parse_selection, select_event, select_overflow,
)
from frontend.state.timeline import (
    TimelineState, advance_week, dismiss, jump_to_current_week, retreat_week,
    toggle_event, toggle_overflow,
)


class TestSelectionTransitions:

    def test_select_event_from_nothing(self):
        assert select_event(NO_SELECTION, "a") == EventSelection("a")

    def test_select_same_event_collapses(self):
        assert select_event(EventSelection("a"), "a") == NO_SELECTION

    def test_select_other_event_switches(self):
        assert select_event(EventSelection("a"), "b") == EventSelection("b")

    def test_select_event_replaces_overflow(self):
        assert select_event(OVERFLOW_SELECTION, "a") == EventSelection("a")

    def test_overflow_toggle(self):
        assert select_overflow(NO_SELECTION) == OVERFLOW_SELECTION
        assert select_overflow(OVERFLOW_SELECTION) == NO_SELECTION
        assert select_overflow(EventSelection("a")) == OVERFLOW_SELECTION

    def test_clear(self):
        for current in (NO_SELECTION, OVERFLOW_SELECTION, EventSelection("a")):
            assert clear_selection(current) == NO_SELECTION

    def test_kinds(self):
        assert NoSelection().kind is SelectionKind.NONE
        assert EventSelection("a").kind is SelectionKind.EVENT
        assert OverflowSelection().kind is SelectionKind.OVERFLOW


class TestSelectionTokens:

    @pytest.mark.parametrize("selection", [
        NO_SELECTION, OVERFLOW_SELECTION, EventSelection("g_dentist"), EventSelection("a:b"),
    ])
    def test_round_trip(self, selection):
        assert parse_selection(selection.to_token()) == selection

    def test_blank_token_is_none(self):
        assert parse_selection("") == NO_SELECTION

    @pytest.mark.parametrize("token", ["event:", "expanded", "EVENT:a"])
    def test_unknown_token(self, token):
        with pytest.raises(ValueError):
            parse_selection(token)


class TestTimelineState:

    def test_initial_state(self):
        state = TimelineState()
        assert state.week_offset == 0
        assert state.selection == NO_SELECTION

    def test_navigation_resets_selection(self):
        selected = TimelineState(week_offset=2, selection=EventSelection("a"))

        assert advance_week(selected) == TimelineState(week_offset=3)
        assert retreat_week(selected) == TimelineState(week_offset=1)
        assert jump_to_current_week(selected) == TimelineState()

    def test_advance_then_retreat_is_identity_on_offset(self):
        state = TimelineState(week_offset=-4)
        assert retreat_week(advance_week(state)).week_offset == -4

    def test_selection_keeps_offset(self):
        state = TimelineState(week_offset=1)
        assert toggle_event(state, "a") == TimelineState(week_offset=1, selection=EventSelection("a"))
        assert toggle_overflow(state).selection == OVERFLOW_SELECTION
        assert dismiss(toggle_overflow(state)) == state

    def test_state_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            TimelineState().week_offset = 3


class TestActions:

    def test_reducer(self):
        state = TimelineState()
        state = apply_action(state, InteractionRequest(ActionType.SELECT_EVENT, "a"))
        assert state.selection == EventSelection("a")

        state = apply_action(state, InteractionRequest(ActionType.NEXT_WEEK))
        assert state == TimelineState(week_offset=1)

        state = apply_action(state, InteractionRequest(ActionType.SELECT_OVERFLOW))
        assert state.selection == OVERFLOW_SELECTION

        state = apply_action(state, InteractionRequest(ActionType.DISMISS))
        assert state.selection == NO_SELECTION

        state = apply_action(state, InteractionRequest(ActionType.PREVIOUS_WEEK))
        state = apply_action(state, InteractionRequest(ActionType.PREVIOUS_WEEK))
        assert state.week_offset == -1

        state = apply_action(state, InteractionRequest(ActionType.CURRENT_WEEK))
        assert state.week_offset == 0

    def test_select_event_requires_id(self):
        with pytest.raises(ValueError):
            InteractionRequest(ActionType.SELECT_EVENT)
