"""Handling of zone status reports against host-held presence state.

The host owns the alarm_motion capability value. Each report is decoded and
compared with it; the host applies the new value and fires the trigger card
only when the report says something changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from mtd085zb.flow.triggers import TriggerOutcome, classify_transition
from mtd085zb.zigbee.models import ParsedZoneStatus
from mtd085zb.zigbee.zone_status import decode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneStatusReport:
    """Result of handling one zone status report."""

    flags: ParsedZoneStatus
    presence: bool
    trigger: TriggerOutcome

    @property
    def changed(self) -> bool:
        """Whether the host should update its capability and fire a card."""
        return self.trigger is not TriggerOutcome.NONE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "flags": self.flags.to_dict(),
            "presence": self.presence,
            "trigger": self.trigger.value,
            "changed": self.changed,
        }


def handle_zone_status_report(raw: Any, current_presence: bool | None) -> ZoneStatusReport:
    """Decode a zone status report and classify the presence transition.

    Args:
        raw: Raw zone status from a change notification or attribute read.
        current_presence: Presence value the host currently holds, None if
            it has never been set.

    Returns:
        ZoneStatusReport with decoded flags, new presence and trigger.
    """
    flags = decode(raw)
    presence = flags.alarm1
    trigger = classify_transition(current_presence, presence)

    if trigger is TriggerOutcome.NONE:
        logger.debug("Zone status %#06x, presence unchanged (%s)", flags.value, presence)
    else:
        logger.info("Zone status %#06x, presence %s -> %s", flags.value, current_presence, presence)

    return ZoneStatusReport(flags=flags, presence=presence, trigger=trigger)
