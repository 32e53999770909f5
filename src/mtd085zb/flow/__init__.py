"""Flow (automation) integration: trigger and condition cards."""

from __future__ import annotations

from mtd085zb.flow.triggers import (
    IS_MOTION_DETECTED_CONDITION,
    TRIGGER_CARD_IDS,
    TriggerOutcome,
    classify_transition,
    is_motion_detected,
)

__all__ = [
    "TriggerOutcome",
    "classify_transition",
    "is_motion_detected",
    "IS_MOTION_DETECTED_CONDITION",
    "TRIGGER_CARD_IDS",
]
