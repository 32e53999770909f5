"""CLI entry points for the MTD085-ZB presence sensor tools."""

from __future__ import annotations

import argparse
import logging
import sys

from mtd085zb.app.manifest import validate_app_files
from mtd085zb.core.exceptions import ManifestError
from mtd085zb.ui.display import (
    display_validation_errors,
    display_zone_status,
    print_banner,
    print_error,
)
from mtd085zb.zigbee.reports import handle_zone_status_report

PREVIOUS_STATES: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "unknown": None,
}


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_status_value(text: str) -> int | bytes:
    """Parse a zone status given on the command line.

    Accepts decimal ("129"), hex ("0x81") or little-endian bytes
    ("hex:8100").

    Raises:
        ValueError: If the text is not in one of those forms.
    """
    text = text.strip()
    if text.lower().startswith("hex:"):
        return bytes.fromhex(text[4:])
    return int(text, 0)


def decode_status() -> None:
    """Zone status decoder CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Decode an IAS Zone status word from the MTD085-ZB"
    )
    parser.add_argument(
        "value",
        help="Status word: decimal, 0x-prefixed hex, or hex:<little-endian bytes>",
    )
    parser.add_argument(
        "-p",
        "--previous",
        choices=sorted(PREVIOUS_STATES),
        default="unknown",
        help="Presence state held before this report (default: unknown)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        raw = parse_status_value(args.value)
    except ValueError:
        print(f"Error: Invalid status value: {args.value}", file=sys.stderr)
        sys.exit(1)

    report = handle_zone_status_report(raw, PREVIOUS_STATES[args.previous])
    display_zone_status(report)


def validate_app() -> None:
    """App descriptor and locale validation CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate the app descriptor and locale resource"
    )
    parser.add_argument(
        "-m",
        "--manifest",
        default="app.json",
        help="Path to app descriptor (default: app.json)",
    )
    parser.add_argument(
        "-l",
        "--locale",
        default="locales/en.json",
        help="Path to locale resource (default: locales/en.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    print_banner("MTD085-ZB App Validation", f"{args.manifest} / {args.locale}")

    try:
        errors = validate_app_files(args.manifest, args.locale)
    except ManifestError as e:
        print_error(str(e))
        sys.exit(1)

    display_validation_errors(errors)
    if errors:
        sys.exit(1)
