"""App descriptor and locale resource validation."""

from __future__ import annotations

from mtd085zb.app.manifest import (
    REQUIRED_LOCALE_KEYS,
    REQUIRED_MANIFEST_FIELDS,
    AppManifest,
    check_manifest_consistency,
    load_json,
    validate_app_files,
    validate_localization,
    validate_manifest,
)

__all__ = [
    "AppManifest",
    "REQUIRED_MANIFEST_FIELDS",
    "REQUIRED_LOCALE_KEYS",
    "check_manifest_consistency",
    "load_json",
    "validate_app_files",
    "validate_localization",
    "validate_manifest",
]
