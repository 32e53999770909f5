"""MTD085-ZB - status interpretation core for the Zigbee mmWave presence sensor."""

from mtd085zb.core.exceptions import (
    ConfigurationError,
    PresenceSensorError,
)
from mtd085zb.core.retry import (
    AttemptResult,
    RetryOutcome,
    run_with_retry,
    run_with_retry_async,
)
from mtd085zb.flow.triggers import TriggerOutcome, classify_transition
from mtd085zb.zigbee.matcher import is_matching_device
from mtd085zb.zigbee.models import DeviceIdentity, ParsedZoneStatus
from mtd085zb.zigbee.zone_status import decode, is_presence_detected

__version__ = "1.0.0"

__all__ = [
    # Matcher
    "DeviceIdentity",
    "is_matching_device",
    # Decoder
    "ParsedZoneStatus",
    "decode",
    "is_presence_detected",
    # Classifier
    "TriggerOutcome",
    "classify_transition",
    # Retry
    "AttemptResult",
    "RetryOutcome",
    "run_with_retry",
    "run_with_retry_async",
    # Exceptions
    "PresenceSensorError",
    "ConfigurationError",
]
