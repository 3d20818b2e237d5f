"""Staging area commands."""

from typing import Annotated

import typer

from monitorctl.cli.types import apply_change, get_settings_path, get_store
from monitorctl.core.settings import require_settings
from monitorctl.utils.formatting import console, print_success

app = typer.Typer(
    help="Show or change the staging area.",
    no_args_is_help=True,
)


@app.command("show")
def show_staging(ctx: typer.Context) -> None:
    """Print the staging area."""
    settings = require_settings(get_settings_path(ctx)).settings
    console.print(settings.staging_area, markup=False, highlight=False)


@app.command("set")
def set_staging(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="New staging directory.")],
) -> None:
    """Change the staging area."""
    store = get_store(ctx)
    settings = apply_change(lambda: store.set_staging_area(path))
    print_success(f"Staging area: {settings.staging_area}")
