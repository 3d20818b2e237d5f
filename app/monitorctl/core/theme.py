"""Console colors for settings output.

The bundled ``data/theme.toml`` provides every color. A ``theme.toml`` in
the config directory may override any subset of them; a broken user file
is logged and ignored.
"""

import logging
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from monitorctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"


def _check_hex(value: str) -> str:
    """Accept ``#RGB`` or ``#RRGGBB``."""
    color = value.strip()
    if not color.startswith("#"):
        msg = f"color must start with '#', got {value!r}"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"color must be #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color {value!r}"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Named colors used by the console output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Settings elements and check results
    directory: HexColor = "#69B9A1"
    exclusion: HexColor = "#faf870"
    mapping: HexColor = "#0e8ac8"
    excluded: HexColor = "#f53263"
    included: HexColor = "#c1ff62"


# Rich style name -> (color field, extra attributes)
STYLE_MAP: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "directory": ("directory", "bold"),
    "exclusion": ("exclusion", ""),
    "mapping": ("mapping", "bold"),
    "excluded": ("excluded", ""),
    "included": ("included", ""),
}


def get_user_theme_path() -> Path:
    """Path of the optional user theme in the config directory."""
    return get_config_dir() / THEME_FILENAME


def _parse_colors(text: str, source: str) -> dict[str, str]:
    """Extract the ``[colors]`` table from TOML text.

    Raises:
        ValueError: If the text is not TOML or ``colors`` is not a table.
    """
    data = tomllib.loads(text)
    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        msg = f"'colors' in {source} must be a table"
        raise ValueError(msg)
    return {str(key): value for key, value in colors.items() if isinstance(value, str)}


def read_user_colors(path: Path | None = None) -> dict[str, str]:
    """Read color overrides from the user theme file.

    Args:
        path: Theme file. Default: ~/.config/monitorctl/theme.toml

    Returns:
        Overrides by color name; empty if the file is missing or unusable.
    """
    theme_path = path or get_user_theme_path()
    try:
        text = theme_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.warning("Cannot read theme file %s: %s", theme_path, e)
        return {}

    try:
        return _parse_colors(text, str(theme_path))
    except ValueError as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return {}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge bundled colors with the user's overrides.

    Invalid override values fall back to the built-in defaults as a whole.
    """
    bundled_text = resources.files("monitorctl.data").joinpath(THEME_FILENAME).read_text("utf-8")
    colors = _parse_colors(bundled_text, "bundled theme")
    colors.update(read_user_colors(user_path))

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for the console objects."""
    palette = colors if colors is not None else load_theme()
    styles = {
        name: f"{extra} {getattr(palette, field)}".strip()
        for name, (field, extra) in STYLE_MAP.items()
    }
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme, loaded on first use."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Drop the cached theme and load it again."""
    get_theme.cache_clear()
    return get_theme()
