"""Monitored directory commands.

Provides commands to list, add, remove and update monitored directories
and to check how their exclusions match a given path.
"""

from typing import Annotated

import typer
from rich.markup import escape

from monitorctl.cli.display import echo_json, print_directories, print_exclusion_rules
from monitorctl.cli.types import OutputFormat, apply_change, get_settings_path, get_store
from monitorctl.core.settings import require_settings
from monitorctl.exclusions.compiler import any_matches
from monitorctl.exclusions.normalize import normalize_candidate
from monitorctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage monitored directories and their exclusions.",
    no_args_is_help=True,
)

ExcludeOption = Annotated[
    list[str] | None,
    typer.Option(
        "--exclude",
        "-x",
        help="Exclusion (directory name or relative path). Repeat for several.",
    ),
]


@app.command("list")
def list_directories(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """List monitored directories."""
    settings = require_settings(get_settings_path(ctx)).settings

    if output_format == OutputFormat.JSON:
        echo_json(
            [
                {"path": d.path, "exclusions": list(d.exclusions)}
                for d in settings.monitored_directories
            ]
        )
        return

    print_directories(settings, compiled=True)


@app.command()
def add(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to monitor.")],
    exclude: ExcludeOption = None,
) -> None:
    """Add a monitored directory."""
    store = get_store(ctx)
    exclusions = exclude or []
    apply_change(lambda: store.add_directory(path, exclusions))
    print_success(f"Added monitored directory: {path}")
    if exclusions:
        print_info(f"Exclusions: {', '.join(exclusions)}")


@app.command()
def remove(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Monitored directory to remove.")],
) -> None:
    """Remove a monitored directory."""
    store = get_store(ctx)
    apply_change(lambda: store.remove_directory(path))
    print_success(f"Removed monitored directory: {path}")


@app.command("set")
def set_exclusions(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Monitored directory to update.")],
    exclude: ExcludeOption = None,
    clear: Annotated[
        bool,
        typer.Option("--clear", help="Remove all exclusions."),
    ] = False,
) -> None:
    """Replace the exclusions of a monitored directory.

    The new list replaces the old one entirely.

    Examples:
        monitorctl dir set V:\\apps\\tools -x temp -x logs
        monitorctl dir set V:\\apps\\tools --clear
    """
    if not exclude and not clear:
        print_error("Give at least one --exclude, or --clear to remove all exclusions.")
        raise typer.Exit(code=1)

    store = get_store(ctx)
    exclusions = [] if clear else list(exclude or [])
    apply_change(lambda: store.set_directory_exclusions(path, exclusions))
    if exclusions:
        print_success(f"Exclusions for {path}: {', '.join(exclusions)}")
    else:
        print_success(f"Cleared exclusions for {path}")


@app.command()
def rules(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Monitored directory.")],
) -> None:
    """Show each exclusion of a directory with its normalized and compiled form."""
    settings = require_settings(get_settings_path(ctx)).settings
    directory = settings.find_directory(path)
    if directory is None:
        print_error(f"Directory not monitored: {path}")
        raise typer.Exit(code=1)

    if not directory.exclusions:
        print_info(f"{path} has no exclusions.")
        return

    print_exclusion_rules(directory)


@app.command()
def check(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Monitored directory.")],
    candidate: Annotated[str, typer.Argument(help="Path relative to the directory.")],
) -> None:
    """Check whether a relative path is excluded from a monitored directory.

    Examples:
        monitorctl dir check V:\\apps\\tools temp\\build.log
    """
    settings = require_settings(get_settings_path(ctx)).settings
    directory = settings.find_directory(path)
    if directory is None:
        print_error(f"Directory not monitored: {path}")
        raise typer.Exit(code=1)

    normalized = normalize_candidate(candidate)
    patterns = directory.compiled_exclusion_patterns
    if any_matches(patterns, normalized):
        matched = next(rule for rule in patterns if rule.matches(normalized))
        console.print(
            f"[excluded]excluded[/] {escape(candidate)} "
            f"[muted](rule: {escape(matched.normalized)})[/]"
        )
    else:
        console.print(f"[included]included[/] {escape(candidate)}")
