"""Change history stored as JSON Lines.

Every successful edit of the settings appends one HistoryEntry. Lines
that cannot be parsed are skipped when reading, so a damaged history
never blocks the ``history`` command.
"""

import logging
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from monitorctl.core.paths import HISTORY_FILENAME, ensure_dir, get_history_path
from monitorctl.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class StateManager:
    """Append-only history file in the state directory.

    Attributes:
        history_path: The JSONL file entries are written to.
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Directory for history.jsonl.
                Default: ~/.local/state/monitorctl
        """
        if state_dir is None:
            self.history_path = get_history_path()
        else:
            self.history_path = state_dir / HISTORY_FILENAME

    def record_action(self, entry: HistoryEntry) -> None:
        """Append one entry, creating the state directory on first use.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        ensure_dir(self.history_path.parent)
        with self.history_path.open("a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")

    def _iter_entries(self) -> Iterator[HistoryEntry]:
        """Yield stored entries oldest first, skipping corrupt lines."""
        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield HistoryEntry.from_json_line(line)
                except ValidationError as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Read entries newest first.

        Args:
            limit: Keep only this many of the most recent entries.
                Negative values are treated as zero.

        Returns:
            Entries, newest first; empty if there is no history yet.
        """
        if not self.history_path.exists():
            return []
        maxlen = None if limit is None else max(limit, 0)
        recent = deque(self._iter_entries(), maxlen=maxlen)
        return list(reversed(recent))
