"""Unit tests for drive mapping and staging area commands."""

import json
from pathlib import Path
from typing import Any

from monitorctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _document(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


class TestDriveCommands:
    """Tests for monitorctl drive subcommands."""

    def test_list_table(self, settings_file: Path) -> None:
        """Mappings are listed with their letters."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "list"])

        assert result.exit_code == 0
        assert "V:" in result.output
        assert "\\\\server\\eng_apps" in result.output

    def test_list_json(self, settings_file: Path) -> None:
        """JSON output lists letters and paths."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "list", "-f", "json"])

        assert json.loads(result.stdout) == [{"letter": "V", "path": "\\\\server\\eng_apps"}]

    def test_add(self, settings_file: Path) -> None:
        """A new mapping is stored uppercase."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "add", "w", "D:\\data"])

        assert result.exit_code == 0
        assert "Mapped W:" in result.output
        assert _document(settings_file)["driveMappings"][1] == {"letter": "W", "path": "D:\\data"}

    def test_add_duplicate(self, settings_file: Path) -> None:
        """A mapped letter cannot be added again."""
        result = runner.invoke(
            app, ["-c", str(settings_file), "drive", "add", "v", "\\\\other\\share"]
        )

        assert result.exit_code == 1
        assert "already mapped" in result.output

    def test_add_invalid_path(self, settings_file: Path) -> None:
        """Relative paths are rejected."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "add", "W", "data"])

        assert result.exit_code == 1
        assert len(_document(settings_file)["driveMappings"]) == 1

    def test_set(self, settings_file: Path) -> None:
        """set changes the target path."""
        result = runner.invoke(
            app, ["-c", str(settings_file), "drive", "set", "V", "\\\\new\\share"]
        )

        assert result.exit_code == 0
        assert _document(settings_file)["driveMappings"] == [
            {"letter": "V", "path": "\\\\new\\share"}
        ]

    def test_remove(self, settings_file: Path) -> None:
        """remove drops the mapping."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "remove", "v"])

        assert result.exit_code == 0
        assert "Removed mapping for V:" in result.output
        assert _document(settings_file)["driveMappings"] == []

    def test_remove_missing(self, settings_file: Path) -> None:
        """Removing an unmapped letter fails."""
        result = runner.invoke(app, ["-c", str(settings_file), "drive", "remove", "Q"])

        assert result.exit_code == 1
        assert "not mapped" in result.output


class TestStagingCommands:
    """Tests for monitorctl staging subcommands."""

    def test_show(self, settings_file: Path) -> None:
        """show prints the staging area."""
        result = runner.invoke(app, ["-c", str(settings_file), "staging", "show"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "C:\\StagingArea"

    def test_set(self, settings_file: Path) -> None:
        """set writes the new staging area."""
        result = runner.invoke(app, ["-c", str(settings_file), "staging", "set", "D:\\Stage"])

        assert result.exit_code == 0
        assert _document(settings_file)["stagingArea"] == "D:\\Stage"

    def test_set_blank(self, settings_file: Path) -> None:
        """A blank staging area is rejected."""
        result = runner.invoke(app, ["-c", str(settings_file), "staging", "set", "  "])

        assert result.exit_code == 1
        assert _document(settings_file)["stagingArea"] == "C:\\StagingArea"
