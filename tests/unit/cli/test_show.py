"""Unit tests for show and validate commands."""

import json
from pathlib import Path

from monitorctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestShowCommand:
    """Tests for monitorctl show command."""

    def test_show_table(self, settings_file: Path) -> None:
        """Show prints staging area, mappings, directories and summary."""
        result = runner.invoke(app, ["-c", str(settings_file), "show"])

        assert result.exit_code == 0
        assert "C:\\StagingArea" in result.output
        assert "Drive Mappings" in result.output
        assert "V:\\apps\\tools" in result.output
        assert "1 directories valid, 0 skipped, 3 patterns compiled of 3 total" in result.output

    def test_show_json(self, settings_file: Path) -> None:
        """--format json prints the on-disk document."""
        result = runner.invoke(app, ["-c", str(settings_file), "show", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["stagingArea"] == "C:\\StagingArea"
        assert data["monitoredDirectories"][0]["exclusions"] == ["temp", "logs", "cache"]
        assert "compiledExclusionPatterns" not in data["monitoredDirectories"][0]

    def test_show_json_compiled(self, settings_file: Path) -> None:
        """--compiled adds the compiled patterns to JSON output."""
        result = runner.invoke(
            app, ["-c", str(settings_file), "show", "-f", "json", "--compiled"]
        )

        assert result.exit_code == 0
        directory = json.loads(result.stdout)["monitoredDirectories"][0]
        assert directory["compiledExclusionPatterns"] == [
            "^temp($|\\\\)",
            "^logs($|\\\\)",
            "^cache($|\\\\)",
        ]

    def test_show_missing_settings(self, tmp_path: Path) -> None:
        """Show exits with code 1 and a hint when settings are missing."""
        result = runner.invoke(app, ["-c", str(tmp_path / "none.json"), "show"])

        assert result.exit_code == 1
        assert "monitorctl init" in result.output

    def test_show_invalid_json(self, tmp_path: Path) -> None:
        """Show exits with code 1 on unparseable settings."""
        path = tmp_path / "settings.json"
        path.write_text("{broken")

        result = runner.invoke(app, ["-c", str(path), "show"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestValidateCommand:
    """Tests for monitorctl validate command."""

    def test_validate_clean(self, settings_file: Path) -> None:
        """A clean file validates with exit code 0."""
        result = runner.invoke(app, ["-c", str(settings_file), "validate"])

        assert result.exit_code == 0
        assert "1 directories valid, 0 skipped" in result.output

    def test_validate_reports_skips(self, tmp_path: Path) -> None:
        """Skipped entries and failed exclusions are reported."""
        path = _write(
            tmp_path / "settings.json",
            {
                "stagingArea": "C:\\S",
                "driveMappings": [{"letter": "11", "path": "x"}],
                "monitoredDirectories": [
                    {"path": ""},
                    {"path": "V:\\apps", "exclusions": ["temp", "/"]},
                ],
            },
        )

        result = runner.invoke(app, ["-c", str(path), "validate"])

        assert result.exit_code == 0
        assert "1 directories valid, 1 skipped, 1 patterns compiled of 2 total" in result.output
        assert "0 drive mappings valid, 1 skipped" in result.output

    def test_validate_fail_on_warnings(self, tmp_path: Path) -> None:
        """--fail-on-warnings turns skips into exit code 1."""
        path = _write(tmp_path / "settings.json", {"monitoredDirectories": [{"path": " "}]})

        result = runner.invoke(app, ["-c", str(path), "validate", "--fail-on-warnings"])

        assert result.exit_code == 1

    def test_validate_strict(self, settings_file: Path, tmp_path: Path) -> None:
        """--strict requires vDrivePath."""
        missing = _write(tmp_path / "missing.json", {"stagingArea": "C:\\S"})

        assert runner.invoke(app, ["-c", str(settings_file), "validate", "--strict"]).exit_code == 0
        result = runner.invoke(app, ["-c", str(missing), "validate", "--strict"])

        assert result.exit_code == 1
        assert "vDrivePath" in result.output
