"""Flow trigger selection for presence state transitions."""

from __future__ import annotations

from enum import Enum
from typing import Any


class TriggerOutcome(str, Enum):
    """Flow card fired by a presence transition."""

    MOTION_DETECTED = "motion_detected"
    MOTION_CLEARED = "motion_cleared"
    NONE = "none"

    @property
    def card_id(self) -> str | None:
        """Trigger card id, or None when nothing fires."""
        if self is TriggerOutcome.NONE:
            return None
        return self.value


IS_MOTION_DETECTED_CONDITION = "is_motion_detected"
TRIGGER_CARD_IDS: tuple[str, ...] = (
    TriggerOutcome.MOTION_DETECTED.value,
    TriggerOutcome.MOTION_CLEARED.value,
)


def classify_transition(previous: bool | None, new: bool) -> TriggerOutcome:
    """Determine which flow card a presence transition fires.

    An unknown previous state (None) never equals a known one, so the first
    observation always fires. Two unknown states fire nothing.

    Args:
        previous: Previous presence state, None if unknown.
        new: New presence state.

    Returns:
        MOTION_DETECTED on a change to True, MOTION_CLEARED on a change to
        False, NONE if the state did not change.

    Example:
        >>> classify_transition(None, True)
        <TriggerOutcome.MOTION_DETECTED: 'motion_detected'>
        >>> classify_transition(True, True)
        <TriggerOutcome.NONE: 'none'>
    """
    if previous == new:
        return TriggerOutcome.NONE
    if new is True:
        return TriggerOutcome.MOTION_DETECTED
    return TriggerOutcome.MOTION_CLEARED


def is_motion_detected(capability_value: Any) -> bool:
    """Evaluate the is_motion_detected flow condition.

    Only a stored value of exactly True counts; an unset capability is not
    motion.
    """
    return capability_value is True
