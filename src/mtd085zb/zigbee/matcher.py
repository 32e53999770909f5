"""Device matcher for the MTD085-ZB presence sensor.

Identifies the Wenzhi/LeapMMW MTD085-ZB by its Zigbee modelId and
manufacturerName. Both must match exactly; the sensor is sold under other
Tuya manufacturer names with different datapoint layouts.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from typing import Any

from mtd085zb.core.config import EXPECTED_MANUFACTURER_NAME, EXPECTED_MODEL_ID
from mtd085zb.zigbee.models import DeviceIdentity

logger = logging.getLogger(__name__)


def _identity_fields(info: Any) -> tuple[Any, Any] | None:
    if info is None or isinstance(info, (str, bytes, bytearray, numbers.Number)):
        return None
    if isinstance(info, DeviceIdentity):
        return info.model_id, info.manufacturer_name
    if isinstance(info, Mapping):
        return info.get("modelId"), info.get("manufacturerName")
    # Host node objects carry the identity as attributes
    try:
        return getattr(info, "modelId", None), getattr(info, "manufacturerName", None)
    except Exception as e:
        logger.debug("Cannot read identity from %r: %s", info, e)
        return None


def is_matching_device(info: Any) -> bool:
    """Check whether a discovered device is the MTD085-ZB.

    Args:
        info: DeviceIdentity, wire record with modelId and manufacturerName
            keys, or an object carrying them as attributes. Any other
            value is accepted and rejected.

    Returns:
        True if both identifiers match exactly.

    Example:
        >>> is_matching_device({"modelId": "TS0225", "manufacturerName": "_TZ321C_fkzihax8"})
        True
        >>> is_matching_device(None)
        False
    """
    fields = _identity_fields(info)
    if fields is None:
        return False

    model_id, manufacturer_name = fields
    return (
        isinstance(model_id, str)
        and isinstance(manufacturer_name, str)
        and model_id == EXPECTED_MODEL_ID
        and manufacturer_name == EXPECTED_MANUFACTURER_NAME
    )
