"""Interactive console menu.

Provides a numbered menu for editing the settings without remembering
individual subcommands. Every edit goes through SettingsStore, so each
one is a complete load, change and save of the settings file.
"""

from collections.abc import Callable

import typer
from rich.markup import escape

from monitorctl.cli.display import (
    print_directories,
    print_mappings,
    print_overview,
    print_report,
)
from monitorctl.cli.types import get_store
from monitorctl.core.errors import SettingsError, SettingsNotFoundError
from monitorctl.core.mutations import SettingsStore
from monitorctl.exclusions.compiler import any_matches
from monitorctl.exclusions.normalize import normalize_candidate
from monitorctl.models.settings import MonitoredDirectory
from monitorctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Edit settings through an interactive menu.",
    invoke_without_command=True,
)

QUIT_CHOICES = ("0", "q", "quit", "exit")


def parse_exclusions(text: str) -> list[str]:
    """Split a comma-separated exclusion list, dropping blank items."""
    return [item.strip() for item in text.split(",") if item.strip()]


class SettingsMenu:
    """Numbered menu loop over a settings file.

    Attributes:
        store: Store used for every load and edit.
    """

    def __init__(self, store: SettingsStore) -> None:
        self.store = store
        self._actions: list[tuple[str, Callable[[], None]]] = [
            ("Show settings", self.show),
            ("Add monitored directory", self.add_directory),
            ("Remove monitored directory", self.remove_directory),
            ("Edit directory exclusions", self.edit_exclusions),
            ("Add drive mapping", self.add_mapping),
            ("Remove drive mapping", self.remove_mapping),
            ("Change drive mapping", self.change_mapping),
            ("Change staging area", self.change_staging_area),
            ("Check a path against exclusions", self.check_path),
        ]

    def print_menu(self) -> None:
        """Print the numbered list of actions."""
        console.print()
        console.print("[bold_header]monitorctl settings[/]")
        for number, (label, _) in enumerate(self._actions, start=1):
            console.print(f"  [info]{number}[/] {label}")
        console.print("  [info]0[/] Quit")

    def run(self) -> None:
        """Show the menu until the user quits."""
        while True:
            self.print_menu()
            choice = typer.prompt("Choice", default="0").strip().lower()
            if choice in QUIT_CHOICES:
                return

            action = self._lookup(choice)
            if action is None:
                print_error(f"Unknown choice: {choice}")
                continue

            try:
                action()
            except SettingsNotFoundError as e:
                print_error(str(e))
                print_info("Run 'monitorctl init' to create a settings file.")
            except SettingsError as e:
                print_error(str(e))

    def _lookup(self, choice: str) -> Callable[[], None] | None:
        """Map a menu number to its action."""
        if not choice.isdigit():
            return None
        index = int(choice) - 1
        if 0 <= index < len(self._actions):
            return self._actions[index][1]
        return None

    def _pick_directory(self) -> MonitoredDirectory | None:
        """Ask for a monitored directory by number or by path."""
        settings = self.store.load().settings
        directories = settings.monitored_directories
        if not directories:
            print_info("No monitored directories.")
            return None

        for number, directory in enumerate(directories, start=1):
            console.print(f"  [info]{number}[/] {escape(directory.path)}")
        answer = typer.prompt("Directory (number or path)").strip()

        if answer.isdigit() and 1 <= int(answer) <= len(directories):
            return directories[int(answer) - 1]
        directory = settings.find_directory(answer)
        if directory is None:
            print_error(f"Directory not monitored: {answer}")
        return directory

    # === Actions ===

    def show(self) -> None:
        """Print the whole settings document."""
        result = self.store.load()
        print_overview(result.settings)
        print_mappings(result.settings)
        print_directories(result.settings, compiled=True)
        print_report(result.report)

    def add_directory(self) -> None:
        """Prompt for a directory and its exclusions and add it."""
        path = typer.prompt("Directory path")
        exclusions = parse_exclusions(typer.prompt("Exclusions (comma-separated)", default=""))
        self.store.add_directory(path, exclusions)
        print_success(f"Added monitored directory: {path}")

    def remove_directory(self) -> None:
        """Prompt for a directory and remove it after confirmation."""
        directory = self._pick_directory()
        if directory is None:
            return
        if not typer.confirm(f"Remove {directory.path}?", default=False):
            print_info("Aborted.")
            return
        self.store.remove_directory(directory.path)
        print_success(f"Removed monitored directory: {directory.path}")

    def edit_exclusions(self) -> None:
        """Prompt for a directory and replace its exclusions."""
        directory = self._pick_directory()
        if directory is None:
            return
        current = ", ".join(directory.exclusions)
        print_info(f"Current exclusions: {current or '-'}")
        answer = typer.prompt("New exclusions (comma-separated, replaces all)", default=current)
        if answer == current:
            # keeps exclusions that contain commas or are empty
            print_info(f"Exclusions for {directory.path} unchanged.")
            return
        exclusions = parse_exclusions(answer)
        self.store.set_directory_exclusions(directory.path, exclusions)
        print_success(f"Exclusions for {directory.path}: {', '.join(exclusions) or '-'}")

    def add_mapping(self) -> None:
        """Prompt for a drive letter and path and add the mapping."""
        letter = typer.prompt("Drive letter")
        path = typer.prompt("Path (UNC or local)")
        self.store.add_drive_mapping(letter, path)
        print_success(f"Mapped {letter.strip().upper()}: -> {path}")

    def remove_mapping(self) -> None:
        """Prompt for a drive letter and remove its mapping."""
        letter = typer.prompt("Drive letter")
        self.store.remove_drive_mapping(letter)
        print_success(f"Removed mapping for {letter.strip().upper()}:")

    def change_mapping(self) -> None:
        """Prompt for a drive letter and its new path."""
        letter = typer.prompt("Drive letter")
        path = typer.prompt("New path (UNC or local)")
        self.store.set_drive_mapping(letter, path)
        print_success(f"Mapped {letter.strip().upper()}: -> {path}")

    def change_staging_area(self) -> None:
        """Prompt for a new staging area."""
        current = self.store.load().settings.staging_area
        path = typer.prompt("Staging area", default=current)
        settings = self.store.set_staging_area(path)
        print_success(f"Staging area: {settings.staging_area}")

    def check_path(self) -> None:
        """Prompt for a directory and a relative path and report the match."""
        directory = self._pick_directory()
        if directory is None:
            return
        candidate = typer.prompt("Relative path")
        if any_matches(directory.compiled_exclusion_patterns, normalize_candidate(candidate)):
            console.print(f"[excluded]excluded[/] {escape(candidate)}")
        else:
            console.print(f"[included]included[/] {escape(candidate)}")


@app.callback(invoke_without_command=True)
def menu(ctx: typer.Context) -> None:
    """Open the interactive settings menu."""
    if ctx.invoked_subcommand is not None:
        return

    SettingsMenu(get_store(ctx)).run()
