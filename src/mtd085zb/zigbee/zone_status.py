"""Zone status decoding for the IAS Zone cluster.

The 16-bit zone status bitmap reaches the host in several shapes depending
on where it came from: a plain integer from a change notification, a
little-endian buffer from an attribute read, a JSON-serialized buffer from
the pairing interview, or a bitmap object the Zigbee stack already decoded.
Every shape is normalized to one integer before bits are extracted.

Decoding never raises. Anything unrecognized decodes as 0, i.e. nothing
detected.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from typing import Any

from mtd085zb.zigbee.models import (
    ZONE_STATUS_BITS,
    ZONE_STATUS_MASK,
    ParsedZoneStatus,
    ZoneStatusEncoding,
    ZoneStatusFlag,
)

logger = logging.getLogger(__name__)

_BYTE_TYPES = (bytes, bytearray, memoryview)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _buffer_data(raw: Mapping[str, Any]) -> list[int] | None:
    """Return the byte list of a serialized buffer, or None if malformed."""
    if raw.get("type") != "Buffer":
        return None
    data = raw.get("data")
    if not isinstance(data, (list, tuple)) or not all(_is_int(b) for b in data):
        return None
    return [int(b) & 0xFF for b in data]


def _has_numeric_coercion(raw: Any) -> bool:
    cls = type(raw)
    return hasattr(cls, "__index__") or hasattr(cls, "__int__")


def _raw_field(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        return raw.get("raw")
    try:
        return getattr(raw, "raw", None)
    except Exception:
        return None


def _has_flags(raw: Any) -> bool:
    if isinstance(raw, Mapping):
        return "alarm1" in raw
    try:
        getattr(raw, "alarm1")
    except Exception:
        return False
    return True


def _flag(raw: Any, attr: str, wire: str) -> bool:
    try:
        if isinstance(raw, Mapping):
            return bool(raw.get(wire, raw.get(attr, False)))
        return bool(getattr(raw, attr, getattr(raw, wire, False)))
    except Exception as e:
        logger.debug("Cannot read zone status flag %s from %r: %s", wire, raw, e)
        return False


def classify_encoding(raw: Any) -> ZoneStatusEncoding:
    """Identify which shape a raw zone status value arrived in.

    Checks run in a fixed priority order; the first match wins.

    Args:
        raw: Raw zone status value.

    Returns:
        ZoneStatusEncoding tag. UNKNOWN for anything unrecognized.
    """
    if isinstance(raw, bool) or raw is None:
        return ZoneStatusEncoding.UNKNOWN

    if _is_int(raw):
        return ZoneStatusEncoding.INTEGER
    if isinstance(raw, float):
        return ZoneStatusEncoding.INTEGER if math.isfinite(raw) else ZoneStatusEncoding.UNKNOWN

    if isinstance(raw, _BYTE_TYPES):
        return ZoneStatusEncoding.BYTES if len(bytes(raw)) >= 2 else ZoneStatusEncoding.UNKNOWN

    if isinstance(raw, Mapping):
        data = _buffer_data(raw)
        if data is not None:
            return (
                ZoneStatusEncoding.SERIALIZED_BUFFER
                if len(data) >= 2
                else ZoneStatusEncoding.UNKNOWN
            )

    if isinstance(raw, str):
        return ZoneStatusEncoding.UNKNOWN

    if _has_flags(raw):
        return ZoneStatusEncoding.FLAGS

    if _has_numeric_coercion(raw) or _is_int(_raw_field(raw)):
        return ZoneStatusEncoding.NUMERIC

    return ZoneStatusEncoding.UNKNOWN


def _word_from_flags(raw: Any) -> int:
    status = 0
    for mask, attr, wire in ZONE_STATUS_BITS:
        if _flag(raw, attr, wire):
            status |= int(mask)
    return status


def _word_from_numeric(raw: Any) -> int:
    if _has_numeric_coercion(raw):
        try:
            return int(raw)
        except Exception as e:
            logger.debug("Numeric coercion failed for %r: %s", raw, e)
    field = _raw_field(raw)
    if _is_int(field):
        return int(field)
    return 0


def to_zone_status_word(raw: Any) -> int:
    """Normalize a raw zone status value to an unsigned 16-bit integer.

    Args:
        raw: Integer, little-endian byte buffer, serialized buffer mapping
            ({"type": "Buffer", "data": [...]}), decoded flags object, or an
            object with numeric coercion or an integer ``raw`` field.

    Returns:
        Status word in [0, 0xFFFF]. 0 if the value is not recognized.

    Example:
        >>> to_zone_status_word(b"\\x01\\x00")
        1
        >>> to_zone_status_word({"type": "Buffer", "data": [0x81, 0x00]})
        129
    """
    encoding = classify_encoding(raw)

    if encoding is ZoneStatusEncoding.INTEGER:
        status = int(raw)
    elif encoding is ZoneStatusEncoding.BYTES:
        status = int.from_bytes(bytes(raw)[:2], "little")
    elif encoding is ZoneStatusEncoding.SERIALIZED_BUFFER:
        status = int.from_bytes(bytes(_buffer_data(raw)[:2]), "little")  # type: ignore[index]
    elif encoding is ZoneStatusEncoding.FLAGS:
        status = _word_from_flags(raw)
    elif encoding is ZoneStatusEncoding.NUMERIC:
        status = _word_from_numeric(raw)
    else:
        logger.debug("Unrecognized zone status %r, treating as 0", raw)
        status = 0

    return status & ZONE_STATUS_MASK


def decode(raw: Any) -> ParsedZoneStatus:
    """Parse a raw zone status value into individual flags.

    An already-decoded flags object is used directly instead of being
    converted to an integer and back.

    Args:
        raw: Raw zone status value in any supported shape.

    Returns:
        ParsedZoneStatus with one boolean per defined bit.

    Example:
        >>> decode(0x0001).alarm1
        True
        >>> decode(0x0080).ac_mains
        True
    """
    if isinstance(raw, ParsedZoneStatus):
        return raw
    if classify_encoding(raw) is ZoneStatusEncoding.FLAGS:
        return ParsedZoneStatus(
            **{attr: _flag(raw, attr, wire) for _, attr, wire in ZONE_STATUS_BITS}
        )
    return ParsedZoneStatus.from_int(to_zone_status_word(raw))


def is_presence_detected(raw: Any) -> bool:
    """Check whether a zone status value reports presence (alarm1 bit).

    Args:
        raw: Raw zone status value in any supported shape.

    Returns:
        True if bit 0 is set.
    """
    if classify_encoding(raw) is ZoneStatusEncoding.FLAGS:
        return _flag(raw, "alarm1", "alarm1")
    return (to_zone_status_word(raw) & ZoneStatusFlag.ALARM1) != 0
