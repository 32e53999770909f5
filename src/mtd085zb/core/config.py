"""Configuration constants and sensor-specific settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Device Identity
# =============================================================================
EXPECTED_MODEL_ID: str = "TS0225"
EXPECTED_MANUFACTURER_NAME: str = "_TZ321C_fkzihax8"
DRIVER_ID: str = "mtd085zb"

# =============================================================================
# IAS Zone Cluster
# =============================================================================
IAS_ZONE_ENDPOINT: int = 1
IAS_ZONE_ID: int = 1
ENROLL_RESPONSE_SUCCESS: int = 0
ZONE_STATUS_ATTRIBUTE: str = "zoneStatus"
CIE_ADDRESS_ATTRIBUTE: str = "iasCieAddress"

# =============================================================================
# Attribute Reporting
# =============================================================================
REPORT_MIN_INTERVAL_S: int = 0
REPORT_MAX_INTERVAL_S: int = 3600  # 1 hour heartbeat
REPORT_MIN_CHANGE: int = 1

# =============================================================================
# Retry Logic (sensor drops configuration frames while still joining)
# =============================================================================
MAX_RETRIES: int = 3
RETRY_DELAY_MS: int = 1000

# =============================================================================
# Capabilities and host store keys
# =============================================================================
MOTION_CAPABILITY: str = "alarm_motion"
STORE_IAS_ZONE_ENROLLED: str = "iasZoneEnrolled"
STORE_CIE_ADDRESS_CONFIGURED: str = "cieAddressConfigured"


class EnrollmentMode(str, Enum):
    """IAS Zone enrollment handshake variants.

    The sensor has been seen to need different handshakes depending on
    firmware, so the sequence is selectable instead of fixed.
    """

    CIE_WRITE_AND_ENROLL = "cie_write_and_enroll"
    CIE_WRITE_ONLY = "cie_write_only"
    POLL_ONLY = "poll_only"


@dataclass
class SensorConfig:
    """Configuration for talking to an MTD085-ZB sensor."""

    max_retries: int = MAX_RETRIES
    retry_delay_ms: int = RETRY_DELAY_MS
    enrollment_mode: EnrollmentMode = EnrollmentMode.CIE_WRITE_AND_ENROLL
    endpoint_id: int = IAS_ZONE_ENDPOINT
    zone_id: int = IAS_ZONE_ID
    report_min_interval_s: int = REPORT_MIN_INTERVAL_S
    report_max_interval_s: int = REPORT_MAX_INTERVAL_S
    report_min_change: int = REPORT_MIN_CHANGE

    @property
    def retry_delay_seconds(self) -> float:
        """Delay between configuration attempts in seconds."""
        return self.retry_delay_ms / 1000
