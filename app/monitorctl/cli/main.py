"""Typer application for the monitorctl command and its global options."""

from pathlib import Path
from typing import Annotated

import typer

from monitorctl import __version__
from monitorctl.cli.commands import dirs, drive, history, init, menu, show, staging, validate
from monitorctl.utils.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="monitorctl",
    help="Manage monitored directories, drive mappings and exclusions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _print_version(value: bool) -> None:
    """Handle --version before any subcommand runs."""
    if value:
        typer.echo(f"monitorctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_print_version,
            is_eager=True,
            help="Print the version number and exit.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file to use (default: ~/.config/monitorctl/settings.json).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug messages.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """monitorctl - Manage the monitoring configuration.

    Edit the staging area, drive mappings and monitored directories
    stored in settings.json, and check how exclusions will match.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


_COMMANDS = {
    "init": init,
    "show": show,
    "validate": validate,
    "dir": dirs,
    "drive": drive,
    "staging": staging,
    "history": history,
    "menu": menu,
}
for _name, _module in _COMMANDS.items():
    app.add_typer(_module.app, name=_name)


if __name__ == "__main__":
    app()
