"""CLI package for monitorctl.

This package contains the Typer application and all subcommands.
"""

from monitorctl.cli.main import app

__all__ = ["app"]
