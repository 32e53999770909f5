"""Rich terminal display functions for the presence sensor tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mtd085zb.zigbee.models import ZONE_STATUS_BITS

if TYPE_CHECKING:
    from mtd085zb.zigbee.reports import ZoneStatusReport


# Global console instance
_console: Console | None = None


def get_console() -> Console:
    """Get the global rich console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_banner(title: str, subtitle: str | None = None) -> None:
    """Print a styled banner.

    Args:
        title: Main title text.
        subtitle: Optional subtitle.
    """
    console = get_console()
    text = Text(title, style="bold cyan")
    if subtitle:
        text.append(f"\n{subtitle}", style="dim")
    console.print(Panel(text, border_style="cyan"))


def print_success(message: str) -> None:
    """Print a success message."""
    get_console().print(f"[bold green]✓[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    get_console().print(f"[bold red]✗[/] {escape(message)}")


def display_zone_status(report: ZoneStatusReport) -> None:
    """Display a decoded zone status report.

    Args:
        report: Report from handle_zone_status_report.
    """
    console = get_console()

    summary = Text()
    summary.append("Status Word: ", style="dim")
    summary.append(f"{report.flags.value:#06x}\n", style="cyan")
    summary.append("Presence: ", style="dim")
    summary.append(
        "detected" if report.presence else "clear",
        style="bold green" if report.presence else "yellow",
    )
    summary.append("\nTrigger: ", style="dim")
    summary.append(report.trigger.card_id or "none", style="magenta")

    console.print(Panel(summary, title="[bold]Zone Status[/]", border_style="green"))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Bit", justify="right", style="dim", width=4)
    table.add_column("Mask", justify="right", style="cyan")
    table.add_column("Flag", justify="left")
    table.add_column("Set", justify="center")

    flags = report.flags.to_dict()
    for bit, (mask, _, wire) in enumerate(ZONE_STATUS_BITS):
        is_set = flags[wire]
        table.add_row(
            str(bit),
            f"{int(mask):#06x}",
            wire,
            "[bold green]yes[/]" if is_set else "[dim]no[/]",
        )

    console.print(table)


def display_validation_errors(errors: list[str]) -> None:
    """Display app artifact validation errors, or a success line."""
    if not errors:
        print_success("App descriptor and locale are valid")
        return
    for error in errors:
        print_error(error)
