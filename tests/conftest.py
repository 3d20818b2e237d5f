"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config and state files out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    monkeypatch.delenv("MONITORCTL_SETTINGS", raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handlers installed by the CLI so caplog keeps working."""
    yield
    logger = logging.getLogger("monitorctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_settings_data() -> dict[str, object]:
    """Settings document in the on-disk format."""
    return {
        "stagingArea": "C:\\StagingArea",
        "vDrivePath": "\\\\server\\share",
        "driveMappings": [{"letter": "V", "path": "\\\\server\\eng_apps"}],
        "monitoredDirectories": [
            {"path": "V:\\apps\\tools", "exclusions": ["temp", "logs", "cache"]},
        ],
    }


@pytest.fixture
def settings_file(tmp_path: Path, sample_settings_data: dict[str, object]) -> Path:
    """Settings file written from sample_settings_data."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(sample_settings_data, indent=4), encoding="utf-8")
    return path
