"""Validation of the app descriptor (app.json) and locale resources.

The hub rejects an app whose descriptor lacks a required field or targets an
SDK older than 3, and shows raw key paths wherever a locale string is
missing. Both files are checked here, along with the cross-references that
tie them to the code: the driver's Zigbee identity and the flow card ids.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mtd085zb.core.config import (
    DRIVER_ID,
    EXPECTED_MANUFACTURER_NAME,
    EXPECTED_MODEL_ID,
    MOTION_CAPABILITY,
)
from mtd085zb.core.exceptions import ManifestError
from mtd085zb.flow.triggers import IS_MOTION_DETECTED_CONDITION, TRIGGER_CARD_IDS

logger = logging.getLogger(__name__)

MIN_SDK_VERSION = 3

REQUIRED_MANIFEST_FIELDS: tuple[str, ...] = (
    "id",
    "version",
    "compatibility",
    "sdk",
    "name",
    "description",
    "category",
    "drivers",
)

REQUIRED_LOCALE_KEYS: tuple[str, ...] = (
    "app.name",
    "app.description",
    "device.name",
    "flow.triggers.motion_detected.title",
    "flow.triggers.motion_cleared.title",
    "flow.conditions.is_motion_detected.title",
)


class AppManifest(BaseModel):
    """Required part of the app descriptor. Other keys pass through."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Reverse-domain app id")
    version: str = Field(..., min_length=1)
    compatibility: str = Field(..., description="Hub firmware range, e.g. '>=5.0.0'")
    sdk: int = Field(..., ge=MIN_SDK_VERSION, strict=True)
    name: dict[str, str]
    description: dict[str, str]
    category: list[str] | str
    drivers: list[dict[str, Any]]


def load_json(path: Path | str) -> Any:
    """Load a JSON artifact.

    Args:
        path: File path.

    Returns:
        Parsed JSON value.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read {path}", str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(f"Invalid JSON in {path}", str(e)) from e


def validate_manifest(manifest: Any) -> list[str]:
    """Validate an app descriptor.

    Args:
        manifest: Parsed app.json.

    Returns:
        List of error messages; empty if valid.
    """
    if not isinstance(manifest, Mapping):
        return ["Manifest must be a JSON object"]

    try:
        AppManifest.model_validate(dict(manifest))
    except ValidationError as e:
        errors = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            if err["type"] == "missing":
                errors.append(f"Missing required field: {field}")
            elif field == "sdk" and err["type"] == "greater_than_equal":
                errors.append(
                    f"SDK version must be >= {MIN_SDK_VERSION}, got {err['input']}"
                )
            else:
                errors.append(f"Invalid field {field}: {err['msg']}")
        return errors

    return []


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def _card_ids(manifest: Mapping[str, Any], section: str) -> set[str]:
    flow = manifest.get("flow") or {}
    return {card.get("id") for card in flow.get(section, []) if isinstance(card, Mapping)}


def check_manifest_consistency(manifest: Mapping[str, Any]) -> list[str]:
    """Check that the descriptor agrees with the matcher and flow cards.

    Args:
        manifest: Parsed app.json that already passed validate_manifest.

    Returns:
        List of error messages; empty if consistent.
    """
    errors: list[str] = []

    drivers = [d for d in manifest.get("drivers", []) if d.get("id") == DRIVER_ID]
    if not drivers:
        errors.append(f"Missing driver: {DRIVER_ID}")
    else:
        if MOTION_CAPABILITY not in _as_list(drivers[0].get("capabilities")):
            errors.append(f"Driver {DRIVER_ID} does not list capability {MOTION_CAPABILITY}")
        zigbee = drivers[0].get("zigbee") or {}
        if EXPECTED_MANUFACTURER_NAME not in _as_list(zigbee.get("manufacturerName")):
            errors.append(
                f"Driver {DRIVER_ID} does not list manufacturerName {EXPECTED_MANUFACTURER_NAME}"
            )
        if EXPECTED_MODEL_ID not in _as_list(zigbee.get("productId")):
            errors.append(f"Driver {DRIVER_ID} does not list productId {EXPECTED_MODEL_ID}")

    triggers = _card_ids(manifest, "triggers")
    for card_id in TRIGGER_CARD_IDS:
        if card_id not in triggers:
            errors.append(f"Missing flow trigger card: {card_id}")

    if IS_MOTION_DETECTED_CONDITION not in _card_ids(manifest, "conditions"):
        errors.append(f"Missing flow condition card: {IS_MOTION_DETECTED_CONDITION}")

    return errors


def get_nested_value(data: Any, key_path: str) -> Any:
    """Look up a dotted key path, returning None where it breaks off."""
    current = data
    for key in key_path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def validate_localization(localization: Any) -> list[str]:
    """Validate that a locale resource has every required string.

    Args:
        localization: Parsed locale file (e.g. locales/en.json).

    Returns:
        List of error messages; empty if valid.
    """
    errors = []
    for key_path in REQUIRED_LOCALE_KEYS:
        value = get_nested_value(localization, key_path)
        if value is None:
            errors.append(f"Missing required key: {key_path}")
        elif not isinstance(value, str):
            errors.append(f"Key {key_path} must be a string, got {type(value).__name__}")
        elif not value.strip():
            errors.append(f"Key {key_path} must not be empty")
    return errors


def validate_app_files(manifest_path: Path | str, locale_path: Path | str) -> list[str]:
    """Validate the descriptor and one locale file from disk.

    Errors are prefixed with the file they came from.

    Raises:
        ManifestError: If either file cannot be loaded.
    """
    manifest = load_json(manifest_path)
    errors = [f"{manifest_path}: {e}" for e in validate_manifest(manifest)]
    if not errors:
        errors.extend(f"{manifest_path}: {e}" for e in check_manifest_consistency(manifest))

    localization = load_json(locale_path)
    errors.extend(f"{locale_path}: {e}" for e in validate_localization(localization))

    logger.debug("Validated %s and %s: %d errors", manifest_path, locale_path, len(errors))
    return errors
