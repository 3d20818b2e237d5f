"""File locations used by monitorctl.

Settings live in the XDG config directory and the change history in the
XDG state directory:

- ~/.config/monitorctl/settings.json (or $MONITORCTL_SETTINGS)
- ~/.local/state/monitorctl/history.jsonl
"""

import os
from pathlib import Path

APP_NAME = "monitorctl"

# Points at a settings file outside the config directory
SETTINGS_ENV_VAR = "MONITORCTL_SETTINGS"

SETTINGS_FILENAME = "settings.json"
HISTORY_FILENAME = "history.jsonl"


def _xdg_home(env_var: str, *fallback: str) -> Path:
    """Base directory from an XDG variable, or its fallback under $HOME."""
    value = os.environ.get(env_var, "").strip()
    if value:
        return Path(value)
    return Path.home().joinpath(*fallback)


def get_config_dir() -> Path:
    """Directory holding settings.json and theme.toml."""
    return _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    """Directory holding the change history."""
    return _xdg_home("XDG_STATE_HOME", ".local", "state") / APP_NAME


def get_settings_path() -> Path:
    """Default settings file.

    ``$MONITORCTL_SETTINGS`` wins over the config directory, so scripts
    can point every command at another file without passing ``--config``.
    """
    override = os.environ.get(SETTINGS_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return get_config_dir() / SETTINGS_FILENAME


def get_history_path() -> Path:
    """Default history file."""
    return get_state_dir() / HISTORY_FILENAME


def ensure_dir(path: Path) -> Path:
    """Create a directory and its parents if needed.

    Args:
        path: Directory to create.

    Returns:
        The same path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create directory {path}: {e.strerror or e}"
        raise RuntimeError(msg) from e
    return path
