"""Edits of the settings collections.

The module-level functions are pure: they take a Settings value and
return a new one, leaving the input untouched. SettingsStore wraps them
in a wholesale read-modify-write cycle against the settings file and
records each successful change in the history.

There is no locking. Two processes editing the same file concurrently
can lose an update (last writer wins).
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from monitorctl.core.errors import (
    DirectoryNotFoundError,
    DuplicateLetterError,
    DuplicatePathError,
    InvalidEntryError,
    MappingNotFoundError,
)
from monitorctl.core.paths import get_settings_path
from monitorctl.core.settings import LoadResult, load_settings, save_settings
from monitorctl.core.state import StateManager
from monitorctl.models.history import (
    HistoryActionType,
    HistoryItem,
    HistoryTarget,
    create_history_entry,
)
from monitorctl.models.settings import DriveMapping, MonitoredDirectory, Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Monitored directories
# =============================================================================


def add_directory(settings: Settings, path: str, exclusions: Sequence[str] = ()) -> Settings:
    """Append a monitored directory.

    The path is stored as given and compared by exact string equality,
    the same key remove_directory and set_directory_exclusions use. The
    new entry carries no compiled patterns; they are built on the next
    load.

    Raises:
        InvalidEntryError: If the path is blank.
        DuplicatePathError: If a directory with the same path exists.
    """
    if not path.strip():
        raise InvalidEntryError("Directory path cannot be empty")
    if settings.find_directory(path) is not None:
        raise DuplicatePathError(path)

    directory = MonitoredDirectory(path=path, exclusions=list(exclusions))
    return settings.model_copy(
        update={"monitored_directories": [*settings.monitored_directories, directory]}
    )


def remove_directory(settings: Settings, path: str) -> Settings:
    """Remove the monitored directory with exactly this path.

    Raises:
        DirectoryNotFoundError: If no directory has this path.
    """
    remaining = list(settings.monitored_directories)
    for index, directory in enumerate(remaining):
        if directory.path == path:
            del remaining[index]
            return settings.model_copy(update={"monitored_directories": remaining})
    raise DirectoryNotFoundError(path)


def set_directory_exclusions(
    settings: Settings, path: str, exclusions: Sequence[str]
) -> Settings:
    """Replace the whole exclusion list of a monitored directory.

    The previous list is discarded, not merged. Compiled patterns are
    cleared until the settings are loaded again.

    Raises:
        DirectoryNotFoundError: If no directory has this path.
    """
    updated: list[MonitoredDirectory] = []
    found = False
    for directory in settings.monitored_directories:
        if not found and directory.path == path:
            directory = directory.model_copy(
                update={"exclusions": list(exclusions), "compiled_exclusion_patterns": ()}
            )
            found = True
        updated.append(directory)

    if not found:
        raise DirectoryNotFoundError(path)
    return settings.model_copy(update={"monitored_directories": updated})


# =============================================================================
# Drive mappings
# =============================================================================


def _build_mapping(letter: str, path: str) -> DriveMapping:
    """Create a validated DriveMapping or raise InvalidEntryError."""
    try:
        return DriveMapping(letter=letter, path=path)
    except ValidationError as e:
        messages = "; ".join(str(err["msg"]) for err in e.errors())
        raise InvalidEntryError(f"Invalid drive mapping {letter!r} -> {path!r}: {messages}") from e


def add_drive_mapping(settings: Settings, letter: str, path: str) -> Settings:
    """Append a drive mapping. The letter is stored uppercase.

    Raises:
        InvalidEntryError: If the letter or path is malformed.
        DuplicateLetterError: If the letter is already mapped.
    """
    mapping = _build_mapping(letter, path)
    if settings.find_mapping(mapping.letter) is not None:
        raise DuplicateLetterError(mapping.letter)
    return settings.model_copy(update={"drive_mappings": [*settings.drive_mappings, mapping]})


def remove_drive_mapping(settings: Settings, letter: str) -> Settings:
    """Remove the drive mapping for a letter.

    Raises:
        MappingNotFoundError: If the letter is not mapped.
    """
    wanted = letter.strip().upper()
    remaining = list(settings.drive_mappings)
    for index, mapping in enumerate(remaining):
        if mapping.letter == wanted:
            del remaining[index]
            return settings.model_copy(update={"drive_mappings": remaining})
    raise MappingNotFoundError(wanted)


def set_drive_mapping(settings: Settings, letter: str, path: str) -> Settings:
    """Point an existing drive mapping at a new path.

    Raises:
        MappingNotFoundError: If the letter is not mapped.
        InvalidEntryError: If the new path is malformed.
    """
    wanted = letter.strip().upper()
    if settings.find_mapping(wanted) is None:
        raise MappingNotFoundError(wanted)

    replacement = _build_mapping(wanted, path)
    updated = [
        replacement if mapping.letter == wanted else mapping for mapping in settings.drive_mappings
    ]
    return settings.model_copy(update={"drive_mappings": updated})


def set_staging_area(settings: Settings, path: str) -> Settings:
    """Change the staging area.

    Raises:
        InvalidEntryError: If the path is blank.
    """
    new_path = path.strip()
    if not new_path:
        raise InvalidEntryError("Staging area cannot be empty")
    return settings.model_copy(update={"staging_area": new_path})


# =============================================================================
# File-backed store
# =============================================================================


class SettingsStore:
    """Read-modify-write access to a settings file.

    Every operation loads the file through the assembler, applies one of
    the pure edits above, writes the whole document back and records the
    change in the history.

    Attributes:
        path: Settings file this store operates on.
    """

    def __init__(
        self,
        path: Path | None = None,
        state: StateManager | None = None,
        *,
        require_v_drive_path: bool = False,
    ) -> None:
        """Initialize SettingsStore.

        Args:
            path: Settings file. Default: ~/.config/monitorctl/settings.json
            state: History manager. Default: StateManager().
            require_v_drive_path: Treat a missing ``vDrivePath`` as an error.
        """
        self.path = path or get_settings_path()
        self._state = state if state is not None else StateManager()
        self._require_v_drive_path = require_v_drive_path

    def load(self) -> LoadResult:
        """Load and assemble the current settings."""
        return load_settings(self.path, require_v_drive_path=self._require_v_drive_path)

    def create(self, settings: Settings) -> Settings:
        """Write a fresh settings document, replacing any existing file."""
        save_settings(settings, self.path)
        self._record(HistoryActionType.INIT, str(self.path), HistoryTarget.SETTINGS)
        return settings

    def add_directory(self, path: str, exclusions: Sequence[str] = ()) -> Settings:
        """Add a monitored directory and save."""
        return self._apply(
            lambda s: add_directory(s, path, exclusions),
            HistoryActionType.DIRECTORY_ADD,
            path,
            HistoryTarget.DIRECTORY,
            ", ".join(exclusions) or None,
        )

    def remove_directory(self, path: str) -> Settings:
        """Remove a monitored directory and save."""
        return self._apply(
            lambda s: remove_directory(s, path),
            HistoryActionType.DIRECTORY_REMOVE,
            path,
            HistoryTarget.DIRECTORY,
        )

    def set_directory_exclusions(self, path: str, exclusions: Sequence[str]) -> Settings:
        """Replace a directory's exclusions and save."""
        return self._apply(
            lambda s: set_directory_exclusions(s, path, exclusions),
            HistoryActionType.DIRECTORY_UPDATE,
            path,
            HistoryTarget.DIRECTORY,
            ", ".join(exclusions),
        )

    def add_drive_mapping(self, letter: str, path: str) -> Settings:
        """Add a drive mapping and save."""
        return self._apply(
            lambda s: add_drive_mapping(s, letter, path),
            HistoryActionType.MAPPING_ADD,
            letter.strip().upper(),
            HistoryTarget.MAPPING,
            path,
        )

    def remove_drive_mapping(self, letter: str) -> Settings:
        """Remove a drive mapping and save."""
        return self._apply(
            lambda s: remove_drive_mapping(s, letter),
            HistoryActionType.MAPPING_REMOVE,
            letter.strip().upper(),
            HistoryTarget.MAPPING,
        )

    def set_drive_mapping(self, letter: str, path: str) -> Settings:
        """Change a drive mapping's path and save."""
        return self._apply(
            lambda s: set_drive_mapping(s, letter, path),
            HistoryActionType.MAPPING_UPDATE,
            letter.strip().upper(),
            HistoryTarget.MAPPING,
            path,
        )

    def set_staging_area(self, path: str) -> Settings:
        """Change the staging area and save."""
        return self._apply(
            lambda s: set_staging_area(s, path),
            HistoryActionType.STAGING_UPDATE,
            "stagingArea",
            HistoryTarget.STAGING,
            path.strip(),
        )

    def _apply(
        self,
        mutate: Callable[[Settings], Settings],
        action_type: HistoryActionType,
        key: str,
        target: HistoryTarget,
        value: str | None = None,
    ) -> Settings:
        """Load, edit, save and record one change."""
        settings = self.load().settings
        updated = mutate(settings)
        save_settings(updated, self.path)
        logger.info("%s: %s", action_type.value, key)
        self._record(action_type, key, target, value)
        return updated

    def _record(
        self,
        action_type: HistoryActionType,
        key: str,
        target: HistoryTarget,
        value: str | None = None,
    ) -> None:
        """Append a history entry; failures are logged, not raised."""
        item = HistoryItem(key=key, target=target, value=value)
        entry = create_history_entry(action_type, [item], metadata={"settings": str(self.path)})
        try:
            self._state.record_action(entry)
        except (OSError, RuntimeError) as e:
            logger.warning("Could not record %s to history: %s", action_type.value, e)
