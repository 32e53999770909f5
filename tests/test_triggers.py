"""Tests for flow trigger selection."""

from __future__ import annotations

import pytest

from mtd085zb.flow import (
    IS_MOTION_DETECTED_CONDITION,
    TRIGGER_CARD_IDS,
    TriggerOutcome,
    classify_transition,
    is_motion_detected,
)


class TestClassifyTransition:
    """Tests for classify_transition."""

    @pytest.mark.parametrize(
        "previous,new,expected",
        [
            (False, True, TriggerOutcome.MOTION_DETECTED),
            (True, False, TriggerOutcome.MOTION_CLEARED),
            (True, True, TriggerOutcome.NONE),
            (False, False, TriggerOutcome.NONE),
            (None, True, TriggerOutcome.MOTION_DETECTED),
            (None, False, TriggerOutcome.MOTION_CLEARED),
            (None, None, TriggerOutcome.NONE),
        ],
    )
    def test_transition_table(
        self, previous: bool | None, new: bool, expected: TriggerOutcome
    ) -> None:
        """Every (previous, new) pair should map to its trigger."""
        assert classify_transition(previous, new) is expected

    @pytest.mark.parametrize("new", [True, False])
    def test_unknown_never_equals_known(self, new: bool) -> None:
        """An unknown previous state should always fire for a known one."""
        assert classify_transition(None, new).card_id is not None

    def test_symmetric(self) -> None:
        """Opposite transitions should produce opposite triggers."""
        up = classify_transition(False, True)
        down = classify_transition(True, False)
        assert {up, down} == {TriggerOutcome.MOTION_DETECTED, TriggerOutcome.MOTION_CLEARED}

    def test_state_sequence(self) -> None:
        """unknown -> true -> true -> false should fire detected, none, cleared."""
        states: list[bool | None] = [None, True, True, False]
        triggers = [classify_transition(prev, new) for prev, new in zip(states, states[1:])]
        assert triggers == [
            TriggerOutcome.MOTION_DETECTED,
            TriggerOutcome.NONE,
            TriggerOutcome.MOTION_CLEARED,
        ]


class TestTriggerOutcome:
    """Tests for TriggerOutcome values and card ids."""

    def test_values(self) -> None:
        """Values should be the flow card ids."""
        assert TriggerOutcome.MOTION_DETECTED.value == "motion_detected"
        assert TriggerOutcome.MOTION_CLEARED.value == "motion_cleared"
        assert TriggerOutcome.NONE.value == "none"

    def test_card_id(self) -> None:
        """NONE should have no card to fire."""
        assert TriggerOutcome.MOTION_DETECTED.card_id == "motion_detected"
        assert TriggerOutcome.MOTION_CLEARED.card_id == "motion_cleared"
        assert TriggerOutcome.NONE.card_id is None

    def test_card_id_list(self) -> None:
        """TRIGGER_CARD_IDS should list the two trigger cards."""
        assert TRIGGER_CARD_IDS == ("motion_detected", "motion_cleared")


class TestMotionCondition:
    """Tests for the is_motion_detected condition card."""

    def test_condition_id(self) -> None:
        assert IS_MOTION_DETECTED_CONDITION == "is_motion_detected"

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), (None, False), (1, False), ("true", False)],
    )
    def test_condition(self, value: object, expected: bool) -> None:
        """Only a stored True counts as motion."""
        assert is_motion_detected(value) is expected
