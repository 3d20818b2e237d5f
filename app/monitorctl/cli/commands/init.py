"""Init command implementation.

Creates a settings.json file with default values.
"""

from typing import Annotated

import typer

from monitorctl.cli.types import get_store
from monitorctl.core.errors import SettingsError
from monitorctl.core.settings import create_default_settings, settings_exists
from monitorctl.utils.formatting import print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create a settings file with default values.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_settings(
    ctx: typer.Context,
    staging_area: Annotated[
        str | None,
        typer.Option(
            "--staging-area",
            "-s",
            help="Staging directory (default: C:\\StagingArea).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing settings without prompting.",
        ),
    ] = False,
) -> None:
    """Create a new settings file.

    The file starts with the given staging area, no drive mappings and
    no monitored directories.

    Examples:
        monitorctl init
        monitorctl init --staging-area D:\\Staging
        monitorctl -c ./settings.json init --force
    """
    if ctx.invoked_subcommand is not None:
        return

    store = get_store(ctx)

    if settings_exists(store.path):
        if not force:
            print_error(f"Settings already exist: {store.path}")
            print_info("Use --force to overwrite.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing settings: {store.path}")

    try:
        settings = store.create(create_default_settings(staging_area))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings created: {store.path}")
    print_info(f"Staging area: {settings.staging_area}")
