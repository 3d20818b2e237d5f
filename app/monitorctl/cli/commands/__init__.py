"""CLI commands for monitorctl.

This package contains all subcommand implementations.
"""

from monitorctl.cli.commands import dirs, drive, history, init, menu, show, staging, validate

__all__ = ["dirs", "drive", "history", "init", "menu", "show", "staging", "validate"]
