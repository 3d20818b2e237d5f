"""Validate command implementation.

Loads the settings file and reports what was corrected or skipped.
"""

from typing import Annotated

import typer

from monitorctl.cli.display import print_report
from monitorctl.cli.types import get_settings_path
from monitorctl.core.settings import require_settings

app = typer.Typer(
    help="Validate the settings file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def validate(
    ctx: typer.Context,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Require a non-blank vDrivePath.",
        ),
    ] = False,
    fail_on_warnings: Annotated[
        bool,
        typer.Option(
            "--fail-on-warnings",
            help="Exit with code 1 if any entry was skipped or not compiled.",
        ),
    ] = False,
) -> None:
    """Validate the settings file and print summary counts.

    Malformed drive mappings and directories, and exclusions that cannot
    be compiled, are reported as warnings. Unparseable files and missing
    required fields are errors.

    Examples:
        monitorctl validate
        monitorctl validate --strict
    """
    if ctx.invoked_subcommand is not None:
        return

    result = require_settings(get_settings_path(ctx), require_v_drive_path=strict)
    report = result.report
    print_report(report)

    has_problems = bool(
        report.skipped_directories or report.skipped_mappings or report.compile_failures
    )
    if fail_on_warnings and has_problems:
        raise typer.Exit(code=1)
