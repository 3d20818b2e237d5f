"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from collections.abc import Callable
from enum import Enum
from pathlib import Path

import typer

from monitorctl.core.errors import SettingsError, SettingsNotFoundError
from monitorctl.core.mutations import SettingsStore
from monitorctl.models.settings import Settings
from monitorctl.utils.formatting import print_error, print_info


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


def get_settings_path(ctx: typer.Context) -> Path | None:
    """Get the settings file chosen with the global ``--config`` option.

    Args:
        ctx: Current Typer context.

    Returns:
        Path given on the command line, or None for the default location.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict):
        path = obj.get("settings_path")
        if isinstance(path, Path):
            return path
    return None


def get_store(ctx: typer.Context) -> SettingsStore:
    """Create a SettingsStore for the settings file selected on the command line."""
    return SettingsStore(get_settings_path(ctx))


def apply_change(change: Callable[[], Settings]) -> Settings:
    """Run a settings change, turning failures into CLI errors.

    Args:
        change: Callable performing one SettingsStore operation.

    Returns:
        The updated settings.

    Raises:
        typer.Exit: If the settings cannot be loaded or the change is rejected.
    """
    try:
        return change()
    except SettingsNotFoundError as e:
        print_error(str(e))
        print_info("Run 'monitorctl init' to create a settings file.")
        raise typer.Exit(code=1) from e
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
