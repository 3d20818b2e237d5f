"""Shared Rich display functions for settings and load diagnostics.

Provides reusable printers used by the show, validate, dir and drive
commands as well as the interactive menu.
"""

import json
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from monitorctl.core.settings import LoadReport
from monitorctl.exclusions.compiler import build_rules
from monitorctl.models.settings import MonitoredDirectory, Settings
from monitorctl.utils.formatting import (
    console,
    create_directory_table,
    create_mapping_table,
    format_directory_row,
    format_mapping_row,
    print_success,
    print_warning,
)


def print_overview(settings: Settings) -> None:
    """Print the top-level fields of the settings."""
    console.print(f"Staging area: [info]{escape(settings.staging_area)}[/]")
    if settings.v_drive_path:
        console.print(f"V drive path: [info]{escape(settings.v_drive_path)}[/]")


def print_directories(settings: Settings, compiled: bool = False) -> None:
    """Print the monitored directories as a table."""
    if not settings.monitored_directories:
        console.print("[muted]No monitored directories.[/]")
        return
    table = create_directory_table(compiled=compiled)
    for directory in settings.monitored_directories:
        table.add_row(*format_directory_row(directory, compiled=compiled))
    console.print(table)


def print_mappings(settings: Settings) -> None:
    """Print the drive mappings as a table."""
    if not settings.drive_mappings:
        console.print("[muted]No drive mappings.[/]")
        return
    table = create_mapping_table()
    for mapping in settings.drive_mappings:
        table.add_row(*format_mapping_row(mapping))
    console.print(table)


def print_exclusion_rules(directory: MonitoredDirectory) -> None:
    """Print every exclusion of a directory with its compiled pattern."""
    table = Table(
        title=f"Exclusions for {escape(directory.path)}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Raw")
    table.add_column("Normalized", style="exclusion")
    table.add_column("Pattern", style="muted")

    for rule in build_rules(directory.exclusions):
        if rule.compiled is not None:
            pattern = escape(rule.compiled.pattern)
        else:
            pattern = f"[error]{escape(rule.error or 'not compiled')}[/]"
        table.add_row(escape(rule.raw), escape(rule.normalized), pattern)

    console.print(table)


def print_report(report: LoadReport) -> None:
    """Print load warnings, compile failures and the summary counts."""
    for warning in report.warnings:
        print_warning(warning)
    for failure in report.compile_failures:
        print_warning(f"Exclusion {failure.raw!r} not compiled: {failure.reason}")

    summary = report.summary()
    if report.skipped_directories or report.skipped_mappings or report.compile_failures:
        print_warning(summary)
    else:
        print_success(summary)
    if report.skipped_mappings:
        print_warning(
            f"{report.valid_mappings} drive mappings valid, {report.skipped_mappings} skipped"
        )


def settings_to_json(settings: Settings, compiled: bool = False) -> dict[str, Any]:
    """Build the JSON view of settings, optionally with compiled patterns."""
    data = settings.model_dump(by_alias=True, exclude_none=True)
    if compiled:
        for entry, directory in zip(
            data["monitoredDirectories"], settings.monitored_directories, strict=True
        ):
            entry["compiledExclusionPatterns"] = [
                rule.pattern for rule in directory.compiled_exclusion_patterns
            ]
    return data


def echo_json(data: object) -> None:
    """Write JSON to stdout without Rich markup processing."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
