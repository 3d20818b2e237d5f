"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

import logging
from pathlib import Path

import pytest
from monitorctl.core.theme import (
    STYLE_MAP,
    ThemeColors,
    get_rich_theme,
    get_theme,
    get_user_theme_path,
    load_theme,
    read_user_colors,
    reload_theme,
)
from pydantic import ValidationError
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors model."""

    def test_default_values(self) -> None:
        """ThemeColors has defaults for every style."""
        colors = ThemeColors()
        assert colors.directory == "#69B9A1"
        assert colors.excluded == "#f53263"
        assert colors.included == "#c1ff62"

    def test_short_and_long_hex(self) -> None:
        """Both #RGB and #RRGGBB are accepted and trimmed."""
        colors = ThemeColors(text=" #AABBCC ", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ffffff", "must start with '#'"),
            ("#ff", "must be #RGB or #RRGGBB"),
            ("#fffffff", "must be #RGB or #RRGGBB"),
            ("#gggggg", "invalid hex color"),
        ],
    )
    def test_invalid_colors(self, value: str, message: str) -> None:
        """Malformed colors are rejected with a reason."""
        with pytest.raises(ValidationError, match=message):
            ThemeColors(exclusion=value)

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown color names."""
        with pytest.raises(ValidationError):
            ThemeColors(highlight="#ffffff")  # type: ignore[call-arg]


class TestReadUserColors:
    """Tests for read_user_colors function."""

    def test_reads_colors_table(self, tmp_path: Path) -> None:
        """String values of the colors table are returned."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nmapping = "#aabbcc"\nsize = 3\n')

        assert read_user_colors(theme_file) == {"text": "#000000", "mapping": "#aabbcc"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file means no overrides."""
        assert read_user_colors(tmp_path / "nonexistent.toml") == {}

    def test_invalid_toml(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Malformed TOML is logged and ignored."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        with caplog.at_level(logging.WARNING, logger="monitorctl"):
            assert read_user_colors(theme_file) == {}

        assert "Ignoring theme file" in caplog.text

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A non-table colors entry is ignored."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('colors = "red"\n')

        assert read_user_colors(theme_file) == {}

    def test_default_location(self, tmp_path: Path) -> None:
        """Without a path the config directory theme is read."""
        config_dir = tmp_path / "xdg-config" / "monitorctl"
        config_dir.mkdir(parents=True)
        (config_dir / "theme.toml").write_text('[colors]\nincluded = "#00ff00"\n')

        assert read_user_colors() == {"included": "#00ff00"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_loads_bundled_theme(self) -> None:
        """Bundled colors are used without a user theme."""
        assert load_theme() == ThemeColors()

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User colors replace bundled ones, the rest stays."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nexcluded = "#ff0000"\n')

        colors = load_theme(user_theme)

        assert colors.excluded == "#ff0000"
        assert colors.included == "#c1ff62"

    def test_invalid_user_color_uses_defaults(self, tmp_path: Path) -> None:
        """An invalid override falls back to the defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        assert load_theme(user_theme) == ThemeColors()


class TestGetRichTheme:
    """Tests for Rich theme construction."""

    def test_every_style_defined(self) -> None:
        """All mapped style names are present."""
        theme = get_rich_theme(ThemeColors())

        assert set(STYLE_MAP) <= set(theme.styles)

    def test_bold_styles(self) -> None:
        """Styles with extra attributes keep them."""
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["bold_header"].bold
        assert theme.styles["error"].bold
        assert not theme.styles["muted"].bold

    def test_get_theme_cached(self) -> None:
        """get_theme returns the same instance until reloaded."""
        first = get_theme()

        assert get_theme() is first
        reloaded = reload_theme()
        assert reloaded is not first
        assert get_theme() is reloaded
        assert isinstance(reloaded, Theme)


class TestGetUserThemePath:
    """Tests for get_user_theme_path function."""

    def test_returns_config_dir_path(self, tmp_path: Path) -> None:
        """Returns theme.toml under the monitorctl config directory."""
        assert get_user_theme_path() == tmp_path / "xdg-config" / "monitorctl" / "theme.toml"
