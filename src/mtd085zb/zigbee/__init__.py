"""Zigbee surface of the MTD085-ZB mmWave presence sensor.

This module provides:
- Device matching by modelId / manufacturerName
- IAS Zone status decoding from any wire encoding
- Report handling against host-held presence state
- IAS Zone enrollment and reporting configuration with retry
"""

from __future__ import annotations

from mtd085zb.zigbee.ias_zone import (
    IASZoneCluster,
    configure_ias_zone,
    configure_ias_zone_with_retry,
    read_presence,
    read_zone_status,
)
from mtd085zb.zigbee.matcher import is_matching_device
from mtd085zb.zigbee.models import (
    DeviceIdentity,
    ParsedZoneStatus,
    ZoneStatusEncoding,
    ZoneStatusFlag,
)
from mtd085zb.zigbee.reports import ZoneStatusReport, handle_zone_status_report
from mtd085zb.zigbee.zone_status import (
    classify_encoding,
    decode,
    is_presence_detected,
    to_zone_status_word,
)

__all__ = [
    # Matching
    "is_matching_device",
    # Data models
    "DeviceIdentity",
    "ParsedZoneStatus",
    "ZoneStatusEncoding",
    "ZoneStatusFlag",
    "ZoneStatusReport",
    # Decoding
    "classify_encoding",
    "decode",
    "is_presence_detected",
    "to_zone_status_word",
    "handle_zone_status_report",
    # Cluster configuration
    "IASZoneCluster",
    "configure_ias_zone",
    "configure_ias_zone_with_retry",
    "read_presence",
    "read_zone_status",
]
