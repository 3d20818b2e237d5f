"""Exception hierarchy for settings loading and editing."""


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings text is empty, not JSON, or not a JSON object."""


class SettingsValidationError(SettingsError):
    """Raised when a required top-level field is missing or blank."""


class MutationError(SettingsError):
    """Base exception for failed edits of the settings collections."""


class InvalidEntryError(MutationError):
    """Raised when a new directory or mapping is malformed."""


class DuplicatePathError(MutationError):
    """Raised when adding a directory whose path already exists."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Directory already monitored: {path}")


class DuplicateLetterError(MutationError):
    """Raised when adding a drive mapping whose letter already exists."""

    def __init__(self, letter: str) -> None:
        self.letter = letter
        super().__init__(f"Drive letter already mapped: {letter}")


class NotFoundError(MutationError):
    """Raised when the target of a remove or update does not exist."""


class DirectoryNotFoundError(NotFoundError):
    """Raised when no monitored directory has the given path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Directory not monitored: {path}")


class MappingNotFoundError(NotFoundError):
    """Raised when no drive mapping has the given letter."""

    def __init__(self, letter: str) -> None:
        self.letter = letter
        super().__init__(f"Drive letter not mapped: {letter}")
