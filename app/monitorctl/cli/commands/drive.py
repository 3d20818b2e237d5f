"""Drive mapping commands.

Provides commands to list, add, remove and update drive letter mappings.
"""

from typing import Annotated

import typer

from monitorctl.cli.display import echo_json, print_mappings
from monitorctl.cli.types import OutputFormat, apply_change, get_settings_path, get_store
from monitorctl.core.settings import require_settings
from monitorctl.utils.formatting import print_success

app = typer.Typer(
    help="Manage drive letter mappings.",
    no_args_is_help=True,
)


@app.command("list")
def list_mappings(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """List drive mappings."""
    settings = require_settings(get_settings_path(ctx)).settings

    if output_format == OutputFormat.JSON:
        echo_json([{"letter": m.letter, "path": m.path} for m in settings.drive_mappings])
        return

    print_mappings(settings)


@app.command()
def add(
    ctx: typer.Context,
    letter: Annotated[str, typer.Argument(help="Drive letter (e.g. V).")],
    path: Annotated[str, typer.Argument(help="UNC path (\\\\server\\share) or local path.")],
) -> None:
    """Add a drive mapping."""
    store = get_store(ctx)
    apply_change(lambda: store.add_drive_mapping(letter, path))
    print_success(f"Mapped {letter.strip().upper()}: -> {path}")


@app.command()
def remove(
    ctx: typer.Context,
    letter: Annotated[str, typer.Argument(help="Drive letter to remove.")],
) -> None:
    """Remove a drive mapping."""
    store = get_store(ctx)
    apply_change(lambda: store.remove_drive_mapping(letter))
    print_success(f"Removed mapping for {letter.strip().upper()}:")


@app.command("set")
def set_mapping(
    ctx: typer.Context,
    letter: Annotated[str, typer.Argument(help="Mapped drive letter.")],
    path: Annotated[str, typer.Argument(help="New UNC or local path.")],
) -> None:
    """Point an existing drive mapping at a new path."""
    store = get_store(ctx)
    apply_change(lambda: store.set_drive_mapping(letter, path))
    print_success(f"Mapped {letter.strip().upper()}: -> {path}")
