"""Data models for the MTD085-ZB Zigbee surface.

Defines the device identity record, the IAS Zone status flags and the
decoded zone status dataclass.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any


class ZoneStatusFlag(IntFlag):
    """IAS Zone status bits. Only the low byte is defined."""

    ALARM1 = 0x0001  # presence
    ALARM2 = 0x0002
    TAMPER = 0x0004
    BATTERY = 0x0008
    SUPERVISION_REPORTS = 0x0010
    RESTORE_REPORTS = 0x0020
    TROUBLE = 0x0040
    AC_MAINS = 0x0080


# (mask, attribute name, wire name) in bit order
ZONE_STATUS_BITS: tuple[tuple[ZoneStatusFlag, str, str], ...] = (
    (ZoneStatusFlag.ALARM1, "alarm1", "alarm1"),
    (ZoneStatusFlag.ALARM2, "alarm2", "alarm2"),
    (ZoneStatusFlag.TAMPER, "tamper", "tamper"),
    (ZoneStatusFlag.BATTERY, "battery", "battery"),
    (ZoneStatusFlag.SUPERVISION_REPORTS, "supervision_reports", "supervisionReports"),
    (ZoneStatusFlag.RESTORE_REPORTS, "restore_reports", "restoreReports"),
    (ZoneStatusFlag.TROUBLE, "trouble", "trouble"),
    (ZoneStatusFlag.AC_MAINS, "ac_mains", "acMains"),
)

ZONE_STATUS_MASK = 0xFFFF
DEFINED_BITS_MASK = 0x00FF


class ZoneStatusEncoding(str, Enum):
    """Shapes a raw zone status value can arrive in, in dispatch order."""

    INTEGER = "integer"
    BYTES = "bytes"
    SERIALIZED_BUFFER = "serialized_buffer"
    FLAGS = "flags"
    NUMERIC = "numeric"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DeviceIdentity:
    """Identity reported by the radio stack for a discovered device."""

    model_id: str
    manufacturer_name: str

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> DeviceIdentity:
        """Build from a wire record using modelId / manufacturerName keys.

        Missing keys become empty strings so the result never matches.
        """
        return cls(
            model_id=record.get("modelId", ""),
            manufacturer_name=record.get("manufacturerName", ""),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to the wire record shape."""
        return {"modelId": self.model_id, "manufacturerName": self.manufacturer_name}


@dataclass(frozen=True)
class ParsedZoneStatus:
    """Decoded IAS Zone status word.

    One boolean per defined bit. Instances are immutable and recomputed on
    every decode.
    """

    alarm1: bool = False
    alarm2: bool = False
    tamper: bool = False
    battery: bool = False
    supervision_reports: bool = False
    restore_reports: bool = False
    trouble: bool = False
    ac_mains: bool = False

    @property
    def presence(self) -> bool:
        """Presence is signalled by alarm1."""
        return self.alarm1

    @property
    def value(self) -> int:
        """Rebuild the status word from the flags."""
        status = 0
        for mask, attr, _ in ZONE_STATUS_BITS:
            if getattr(self, attr):
                status |= mask
        return int(status)

    @property
    def flags(self) -> ZoneStatusFlag:
        """Set bits as a ZoneStatusFlag."""
        return ZoneStatusFlag(self.value)

    def active_flags(self) -> list[str]:
        """Wire names of the flags that are set, in bit order."""
        return [wire for _, attr, wire in ZONE_STATUS_BITS if getattr(self, attr)]

    def to_dict(self) -> dict[str, bool]:
        """Convert to the wire flag names."""
        return {wire: getattr(self, attr) for _, attr, wire in ZONE_STATUS_BITS}

    @classmethod
    def from_int(cls, status: int) -> ParsedZoneStatus:
        """Decode the low byte of a status word. Reserved bits are ignored."""
        status &= DEFINED_BITS_MASK
        return cls(**{attr: (status & mask) != 0 for mask, attr, _ in ZONE_STATUS_BITS})
