"""Show command implementation.

Displays the current settings with their load diagnostics.
"""

from typing import Annotated

import typer

from monitorctl.cli.display import (
    echo_json,
    print_directories,
    print_mappings,
    print_overview,
    print_report,
    settings_to_json,
)
from monitorctl.cli.types import OutputFormat, get_settings_path
from monitorctl.core.settings import require_settings
from monitorctl.utils.formatting import console

app = typer.Typer(
    help="Show the current settings.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    compiled: Annotated[
        bool,
        typer.Option(
            "--compiled",
            help="Include compiled exclusion patterns.",
        ),
    ] = False,
) -> None:
    """Show staging area, drive mappings and monitored directories.

    Examples:
        monitorctl show
        monitorctl show --compiled
        monitorctl show --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    result = require_settings(get_settings_path(ctx))

    if output_format == OutputFormat.JSON:
        echo_json(settings_to_json(result.settings, compiled=compiled))
        return

    print_overview(result.settings)
    console.print()
    print_mappings(result.settings)
    print_directories(result.settings, compiled=compiled)
    console.print()
    print_report(result.report)
