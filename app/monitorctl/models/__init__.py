"""Data models for monitorctl.

This module exports the core data structures used throughout the application.
"""

from monitorctl.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    HistoryTarget,
    create_history_entry,
)
from monitorctl.models.settings import (
    DEFAULT_STAGING_AREA,
    DriveMapping,
    MonitoredDirectory,
    Settings,
    is_mappable_path,
    is_unc_path,
)

__all__ = [
    "DEFAULT_STAGING_AREA",
    "DriveMapping",
    "HistoryActionType",
    "HistoryEntry",
    "HistoryItem",
    "HistoryTarget",
    "MonitoredDirectory",
    "Settings",
    "create_history_entry",
    "is_mappable_path",
    "is_unc_path",
]
