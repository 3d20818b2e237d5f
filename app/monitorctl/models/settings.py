"""Settings models for the monitoring configuration document.

This module defines the Pydantic models representing the settings.json
structure: a staging area, drive-letter mappings, and monitored directories
with their exclusion lists.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from monitorctl.exclusions.compiler import MatchRule

# Fallback used when the document has no usable stagingArea
DEFAULT_STAGING_AREA = "C:\\StagingArea"

# Local drive path such as C:\data or C:/data
_LOCAL_DRIVE_PATH = re.compile(r"^[A-Za-z]:[\\/]")


def is_unc_path(path: str) -> bool:
    """Check whether a path uses the UNC form (``\\\\server\\share``)."""
    return path.startswith("\\\\")


def is_mappable_path(path: str) -> bool:
    """Check whether a path can be the target of a drive mapping.

    UNC paths and local drive paths are accepted; either must be longer
    than two characters.

    Args:
        path: Candidate mapping target.

    Returns:
        True if the path is acceptable.
    """
    if len(path) <= 2:
        return False
    return is_unc_path(path) or _LOCAL_DRIVE_PATH.match(path) is not None


class _SettingsModel(BaseModel):
    """Common configuration for settings models (camelCase on disk, immutable)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DriveMapping(_SettingsModel):
    """Association of a drive letter with a network or local path.

    Attributes:
        letter: Single uppercase drive letter (e.g., "V").
        path: UNC path (``\\\\server\\share``) or local drive path.
    """

    letter: Annotated[str, Field(description="Drive letter")]
    path: Annotated[str, Field(description="Mapped UNC or local path")]

    @field_validator("letter")
    @classmethod
    def validate_letter(cls, v: str) -> str:
        """Require exactly one alphabetic character, stored uppercase."""
        letter = v.strip()
        if len(letter) != 1 or not letter.isalpha():
            msg = f"Drive letter must be a single letter, got {v!r}"
            raise ValueError(msg)
        return letter.upper()

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Require a UNC or local drive path."""
        if not is_mappable_path(v):
            msg = f"Mapping path must be a UNC or local drive path, got {v!r}"
            raise ValueError(msg)
        return v


class MonitoredDirectory(_SettingsModel):
    """A monitored directory with its exclusion list.

    Attributes:
        path: Directory path, unique across the collection.
        exclusions: Raw exclusion strings in authored order.
        compiled_exclusion_patterns: Rules derived from ``exclusions`` at load
            time. Never persisted.
    """

    path: Annotated[str, Field(description="Monitored directory path")]
    exclusions: Annotated[
        list[str],
        Field(default_factory=list, description="Raw exclusion strings"),
    ]
    compiled_exclusion_patterns: Annotated[
        tuple[MatchRule, ...],
        Field(exclude=True, repr=False, description="Derived match rules"),
    ] = ()

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject blank directory paths."""
        if not v.strip():
            msg = "Directory path cannot be empty"
            raise ValueError(msg)
        return v


class Settings(_SettingsModel):
    """Complete monitoring configuration.

    Attributes:
        staging_area: Local directory used by downstream processing.
        v_drive_path: Optional network root the drive mappings live under.
        drive_mappings: Drive letter mappings.
        monitored_directories: Directories to monitor with their exclusions.
    """

    staging_area: Annotated[
        str, Field(description="Staging directory path")
    ] = DEFAULT_STAGING_AREA
    v_drive_path: Annotated[str | None, Field(description="Network root path")] = None
    drive_mappings: Annotated[
        list[DriveMapping],
        Field(default_factory=list, description="Drive letter mappings"),
    ]
    monitored_directories: Annotated[
        list[MonitoredDirectory],
        Field(default_factory=list, description="Monitored directories"),
    ]

    def find_directory(self, path: str) -> MonitoredDirectory | None:
        """Find a monitored directory by exact path."""
        for directory in self.monitored_directories:
            if directory.path == path:
                return directory
        return None

    def find_mapping(self, letter: str) -> DriveMapping | None:
        """Find a drive mapping by letter (case-insensitive)."""
        wanted = letter.strip().upper()
        for mapping in self.drive_mappings:
            if mapping.letter == wanted:
                return mapping
        return None

    @property
    def compiled_pattern_count(self) -> int:
        """Total number of compiled rules across all directories."""
        return sum(len(d.compiled_exclusion_patterns) for d in self.monitored_directories)
