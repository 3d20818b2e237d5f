"""The `monitorctl history` command: edits recorded in history.jsonl."""

from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from monitorctl.cli.display import echo_json
from monitorctl.core.state import StateManager
from monitorctl.models.history import HistoryEntry
from monitorctl.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of settings changes.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=0,
            help="Show at most this many recent changes.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of settings changes.

    Examples:
        monitorctl history              # Show last 20 entries
        monitorctl history -n 50        # Show last 50 entries
        monitorctl history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        echo_json([entry.to_dict() for entry in entries])
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    table = Table(title="Settings History", border_style="border", header_style="bold_header")
    table.add_column("ID", style="muted")
    table.add_column("When", style="info")
    table.add_column("Action", style="success")
    table.add_column("Target")
    table.add_column("Value", style="muted")

    for entry in entries:
        item = entry.items[0]
        table.add_row(
            entry.id[:8],
            _local_time(entry.timestamp),
            entry.action_type.value,
            escape(item.key),
            escape(item.value or "-"),
        )

    console.print(table)


def _local_time(timestamp: str) -> str:
    """Render a stored UTC timestamp in local time, minute precision."""
    try:
        moment = datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp
    return moment.astimezone().strftime("%Y-%m-%d %H:%M")
