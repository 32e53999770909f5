"""Terminal display helpers."""

from mtd085zb.ui.display import (
    display_validation_errors,
    display_zone_status,
    get_console,
    print_banner,
    print_error,
    print_success,
)

__all__ = [
    "get_console",
    "print_banner",
    "print_success",
    "print_error",
    "display_zone_status",
    "display_validation_errors",
]
