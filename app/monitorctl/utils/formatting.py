"""Console objects and table builders for settings output.

All user-supplied text is escaped before it reaches Rich markup, since
Windows paths contain backslashes.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from monitorctl.core.theme import get_theme

if TYPE_CHECKING:
    from monitorctl.models.settings import DriveMapping, MonitoredDirectory


def _color_system(stream: TextIO) -> str | None:
    # hex theme colors need truecolor; leave pipes to Rich
    return "truecolor" if stream.isatty() else None


console = Console(theme=get_theme(), color_system=_color_system(sys.stdout))
err_console = Console(theme=get_theme(), stderr=True, color_system=_color_system(sys.stderr))


def create_directory_table(title: str = "Monitored Directories", compiled: bool = False) -> Table:
    """Create a pre-configured table for monitored directories.

    Args:
        title: Table title.
        compiled: Add a column with the compiled rule count.

    Returns:
        Rich Table configured for directory display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Exclusions", overflow="fold")
    if compiled:
        table.add_column("Rules", justify="right", style="info")
    return table


def format_directory_row(directory: MonitoredDirectory, compiled: bool = False) -> tuple[str, ...]:
    """Format a monitored directory as a table row with styling.

    Args:
        directory: Directory to format.
        compiled: Include the compiled rule count column.

    Returns:
        Tuple of cells with Rich markup.
    """
    path = f"[directory]{escape(directory.path)}[/]"
    if directory.exclusions:
        exclusions = ", ".join(f"[exclusion]{escape(e)}[/]" for e in directory.exclusions)
    else:
        exclusions = "[muted]-[/]"
    if not compiled:
        return (path, exclusions)
    rules = f"{len(directory.compiled_exclusion_patterns)}/{len(directory.exclusions)}"
    return (path, exclusions, rules)


def create_mapping_table(title: str = "Drive Mappings") -> Table:
    """Create a pre-configured table for drive mappings."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Letter", width=6, justify="center")
    table.add_column("Path", no_wrap=True)
    return table


def format_mapping_row(mapping: DriveMapping) -> tuple[str, str]:
    """Format a drive mapping as a table row with styling."""
    return (f"[mapping]{mapping.letter}:[/]", f"[text]{escape(mapping.path)}[/]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
