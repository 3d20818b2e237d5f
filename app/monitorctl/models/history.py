"""Records of settings changes.

One HistoryEntry is written per successful edit. Entries are stored as
JSON Lines, one compact object per line.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class HistoryActionType(str, Enum):
    """Kind of edit recorded in the history.

    Attributes:
        INIT: Settings file created with defaults.
        DIRECTORY_ADD: Monitored directory added.
        DIRECTORY_REMOVE: Monitored directory removed.
        DIRECTORY_UPDATE: Exclusion list of a directory replaced.
        MAPPING_ADD: Drive mapping added.
        MAPPING_REMOVE: Drive mapping removed.
        MAPPING_UPDATE: Drive mapping target replaced.
        STAGING_UPDATE: Staging area changed.
    """

    INIT = "init"
    DIRECTORY_ADD = "directory_add"
    DIRECTORY_REMOVE = "directory_remove"
    DIRECTORY_UPDATE = "directory_update"
    MAPPING_ADD = "mapping_add"
    MAPPING_REMOVE = "mapping_remove"
    MAPPING_UPDATE = "mapping_update"
    STAGING_UPDATE = "staging_update"


class HistoryTarget(str, Enum):
    """Part of the settings document an edit touched."""

    SETTINGS = "settings"
    DIRECTORY = "directory"
    MAPPING = "mapping"
    STAGING = "staging"


class HistoryItem(BaseModel):
    """Settings element changed by an edit.

    Attributes:
        key: Directory path, drive letter, or field name.
        target: Kind of element.
        value: New value where one applies (exclusions, mapped path, ...).
    """

    model_config = ConfigDict(frozen=True)

    key: Annotated[str, Field(min_length=1)]
    target: HistoryTarget
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain dict without an unset value."""
        return self.model_dump(mode="json", exclude_none=True)


class HistoryEntry(BaseModel):
    """One line of the history file.

    Attributes:
        id: Short random identifier.
        timestamp: ISO 8601 time of the edit, with timezone.
        action_type: Kind of edit.
        items: Elements the edit changed (at least one).
        metadata: Extra context such as the settings file path.
    """

    model_config = ConfigDict(frozen=True)

    id: Annotated[str, Field(min_length=1)]
    timestamp: Annotated[str, Field(min_length=1)]
    action_type: HistoryActionType
    items: Annotated[tuple[HistoryItem, ...], Field(min_length=1)]
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for JSON output."""
        data = self.model_dump(mode="json", exclude={"items"})
        data["items"] = [item.to_dict() for item in self.items]
        return data

    def to_json_line(self) -> str:
        """Compact single-line JSON (no trailing newline)."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Parse one history line.

        Raises:
            pydantic.ValidationError: If the line is not a valid entry.
        """
        return cls.model_validate_json(line)


def create_history_entry(
    action_type: HistoryActionType,
    items: list[HistoryItem],
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Create an entry stamped with a new id and the current UTC time.

    Raises:
        ValueError: If items is empty.
    """
    if not items:
        msg = "Cannot create history entry with no items"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        items=tuple(items),
        metadata=metadata or {},
    )
