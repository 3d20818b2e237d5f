"""Settings assembly and file I/O.

This module turns untrusted JSON text into a validated Settings object,
compiling every directory's exclusions on the way, and writes settings
back to disk atomically.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from pydantic import ValidationError

from monitorctl.core.errors import (
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    SettingsValidationError,
)
from monitorctl.core.paths import get_settings_path
from monitorctl.core.validation import validate_directory_record, validate_mapping_record
from monitorctl.exclusions.compiler import CompileError, compile_all
from monitorctl.models.settings import (
    DEFAULT_STAGING_AREA,
    DriveMapping,
    MonitoredDirectory,
    Settings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadReport:
    """Diagnostics collected while assembling settings.

    Attributes:
        valid_directories: Monitored directories that survived validation.
        skipped_directories: Directory entries dropped as malformed.
        compiled_patterns: Exclusions compiled into match rules.
        total_exclusions: Exclusions declared on surviving directories.
        valid_mappings: Drive mappings that survived validation.
        skipped_mappings: Drive mapping entries dropped as malformed.
        warnings: Corrections and skips, in the order they happened.
        compile_failures: Exclusions that could not be compiled.
    """

    valid_directories: int = 0
    skipped_directories: int = 0
    compiled_patterns: int = 0
    total_exclusions: int = 0
    valid_mappings: int = 0
    skipped_mappings: int = 0
    warnings: tuple[str, ...] = ()
    compile_failures: tuple[CompileError, ...] = ()

    def summary(self) -> str:
        """One-line summary of the load."""
        return (
            f"{self.valid_directories} directories valid, "
            f"{self.skipped_directories} skipped, "
            f"{self.compiled_patterns} patterns compiled of {self.total_exclusions} total"
        )


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Assembled settings together with their load diagnostics."""

    settings: Settings
    report: LoadReport


def _assemble_mappings(raw: object, warnings: list[str]) -> tuple[list[DriveMapping], int]:
    """Validate the ``driveMappings`` array, dropping malformed entries.

    Letters are unique: a later entry for an already mapped letter is
    skipped and the first one kept.
    """
    if raw is None:
        return [], 0
    if not isinstance(raw, list):
        warnings.append(f"driveMappings is not an array ({type(raw).__name__}), ignoring it")
        logger.warning("driveMappings is not an array, treating as empty")
        return [], 1

    mappings: list[DriveMapping] = []
    skipped = 0
    for index, entry in enumerate(raw):
        check = validate_mapping_record(entry)
        if not check.valid or check.record is None:
            skipped += 1
            warnings.append(f"Skipping drive mapping #{index}: {check.reason}")
            logger.warning("Skipping drive mapping #%d: %s", index, check.reason)
            continue
        try:
            mapping = DriveMapping.model_validate(check.record)
        except ValidationError as e:
            skipped += 1
            warnings.append(f"Skipping drive mapping #{index}: {e}")
            logger.warning("Skipping drive mapping #%d: %s", index, e)
            continue
        if any(m.letter == mapping.letter for m in mappings):
            skipped += 1
            reason = f"letter {mapping.letter} is already mapped"
            warnings.append(f"Skipping drive mapping #{index}: {reason}")
            logger.warning("Skipping drive mapping #%d: %s", index, reason)
            continue
        mappings.append(mapping)
    return mappings, skipped


def _assemble_directories(
    raw: object,
    warnings: list[str],
    failures: list[CompileError],
) -> tuple[list[MonitoredDirectory], int, int, int]:
    """Validate the ``monitoredDirectories`` array and compile exclusions.

    Returns:
        Tuple of (directories, skipped count, compiled count, exclusion count).
    """
    if raw is None:
        return [], 0, 0, 0
    if not isinstance(raw, list):
        warnings.append(
            f"monitoredDirectories is not an array ({type(raw).__name__}), ignoring it"
        )
        logger.warning("monitoredDirectories is not an array, treating as empty")
        return [], 1, 0, 0

    directories: list[MonitoredDirectory] = []
    skipped = 0
    compiled = 0
    total = 0
    for index, entry in enumerate(raw):
        check = validate_directory_record(entry)
        if not check.valid or check.record is None:
            skipped += 1
            warnings.append(f"Skipping monitored directory #{index}: {check.reason}")
            logger.warning("Skipping monitored directory #%d: %s", index, check.reason)
            continue

        exclusions: list[str] = check.record["exclusions"]
        result = compile_all(exclusions)
        for failure in result.failures:
            logger.warning(
                "Directory %s: exclusion %r not compiled: %s",
                check.record["path"],
                failure.raw,
                failure.reason,
            )
        failures.extend(result.failures)

        try:
            directory = MonitoredDirectory(
                path=check.record["path"],
                exclusions=exclusions,
                compiled_exclusion_patterns=result.patterns,
            )
        except ValidationError as e:
            skipped += 1
            warnings.append(f"Skipping monitored directory #{index}: {e}")
            logger.warning("Skipping monitored directory #%d: %s", index, e)
            continue

        directories.append(directory)
        compiled += result.compiled
        total += result.total
        logger.debug(
            "Directory %s: %d of %d exclusions compiled",
            directory.path,
            result.compiled,
            result.total,
        )
    return directories, skipped, compiled, total


def assemble_settings(text: str, *, require_v_drive_path: bool = False) -> LoadResult:
    """Build validated settings from raw JSON text.

    Per-entry problems (malformed mappings or directories, exclusions that
    do not compile) are dropped and reported; only unusable input or a
    missing required field is fatal. Every call compiles exclusions from
    scratch.

    Args:
        text: Raw JSON document.
        require_v_drive_path: Treat a missing or blank ``vDrivePath`` as an
            error instead of leaving it unset.

    Returns:
        LoadResult with the settings and load diagnostics.

    Raises:
        SettingsParseError: If the text is empty, not JSON, or not an object.
        SettingsValidationError: If ``vDrivePath`` is required but missing.
    """
    if not text or not text.strip():
        raise SettingsParseError("Settings document is empty")

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise SettingsParseError(f"Invalid JSON syntax: {e}") from e

    if not isinstance(data, dict):
        raise SettingsParseError(
            f"Settings document must be a JSON object, got {type(data).__name__}"
        )

    warnings: list[str] = []
    failures: list[CompileError] = []

    staging_area = data.get("stagingArea")
    if not isinstance(staging_area, str) or not staging_area.strip():
        warnings.append(f"stagingArea missing or blank, using default {DEFAULT_STAGING_AREA}")
        logger.warning("stagingArea missing or blank, using default %s", DEFAULT_STAGING_AREA)
        staging_area = DEFAULT_STAGING_AREA

    v_drive_path = data.get("vDrivePath")
    if not isinstance(v_drive_path, str) or not v_drive_path.strip():
        if require_v_drive_path:
            raise SettingsValidationError("vDrivePath is required and cannot be blank")
        v_drive_path = None

    mappings, skipped_mappings = _assemble_mappings(data.get("driveMappings"), warnings)
    directories, skipped_directories, compiled, total = _assemble_directories(
        data.get("monitoredDirectories"), warnings, failures
    )

    settings = Settings(
        staging_area=staging_area,
        v_drive_path=v_drive_path,
        drive_mappings=mappings,
        monitored_directories=directories,
    )
    report = LoadReport(
        valid_directories=len(directories),
        skipped_directories=skipped_directories,
        compiled_patterns=compiled,
        total_exclusions=total,
        valid_mappings=len(mappings),
        skipped_mappings=skipped_mappings,
        warnings=tuple(warnings),
        compile_failures=tuple(failures),
    )
    return LoadResult(settings=settings, report=report)


def load_settings(path: Path | None = None, *, require_v_drive_path: bool = False) -> LoadResult:
    """Load and assemble settings from a JSON file.

    Args:
        path: Path to the settings file. If None, uses default settings path.
        require_v_drive_path: Treat a missing ``vDrivePath`` as an error.

    Returns:
        LoadResult with the settings and load diagnostics.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the content is not a JSON object.
        SettingsValidationError: If a required field is missing.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        # utf-8-sig tolerates the BOM some Windows editors add
        text = settings_path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    result = assemble_settings(text, require_v_drive_path=require_v_drive_path)
    logger.info("Loaded %s: %s", settings_path, result.report.summary())
    return result


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a JSON file.

    The whole document is rewritten on every save. The file is written
    atomically by first writing to a temporary file in the same directory
    and then using os.replace() for atomic rename. Compiled exclusion
    patterns are never written.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            json.dump(_settings_to_dict(settings), f, indent=4, ensure_ascii=False)
            f.write("\n")
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    logger.debug("Saved settings to %s", settings_path)
    return settings_path


def settings_exists(path: Path | None = None) -> bool:
    """Check if a settings file exists.

    Args:
        path: Path to check. If None, uses default settings path.
    """
    settings_path = path or get_settings_path()
    return settings_path.exists()


def create_default_settings(staging_area: str | None = None) -> Settings:
    """Create settings with no mappings and no monitored directories.

    Args:
        staging_area: Staging directory. Blank or None uses the default.
    """
    if staging_area and staging_area.strip():
        return Settings(staging_area=staging_area)
    return Settings()


def require_settings(
    settings_path: Path | None = None, *, require_v_drive_path: bool = False
) -> LoadResult:
    """Load settings or exit with helpful error message.

    This is a convenience wrapper around load_settings() that handles
    common error cases by printing user-friendly messages and exiting.

    Args:
        settings_path: Optional custom settings path.
        require_v_drive_path: Treat a missing ``vDrivePath`` as an error.

    Returns:
        Loaded LoadResult.

    Raises:
        typer.Exit: If settings cannot be loaded.
    """
    import typer

    from monitorctl.utils.formatting import print_error, print_info

    path = settings_path or get_settings_path()
    try:
        return load_settings(path, require_v_drive_path=require_v_drive_path)
    except SettingsNotFoundError as e:
        print_error(f"Settings not found: {path}")
        print_info("Run 'monitorctl init' to create a settings file.")
        raise typer.Exit(code=1) from e
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a dictionary for JSON serialization.

    Keys use the camelCase names of the on-disk format. ``vDrivePath`` is
    omitted when unset.
    """
    result: dict[str, Any] = {"stagingArea": settings.staging_area}
    if settings.v_drive_path is not None:
        result["vDrivePath"] = settings.v_drive_path
    result["driveMappings"] = [
        {"letter": mapping.letter, "path": mapping.path} for mapping in settings.drive_mappings
    ]
    result["monitoredDirectories"] = [
        {"path": directory.path, "exclusions": list(directory.exclusions)}
        for directory in settings.monitored_directories
    ]
    return result
