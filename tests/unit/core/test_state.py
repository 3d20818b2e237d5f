"""Tests for the JSON Lines history store."""

import json
import logging
from pathlib import Path

import pytest
from monitorctl.core.state import StateManager
from monitorctl.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    HistoryTarget,
    create_history_entry,
)


def _entry(action: HistoryActionType, key: str) -> HistoryEntry:
    return create_history_entry(action, [HistoryItem(key=key, target=HistoryTarget.DIRECTORY)])


@pytest.fixture
def store(tmp_path: Path) -> StateManager:
    """History store in a state directory that does not exist yet."""
    return StateManager(state_dir=tmp_path / "state")


def _stored_lines(store: StateManager) -> list[dict[str, object]]:
    text = store.history_path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    return [json.loads(line) for line in text.splitlines()]


class TestLocation:
    """Where the history file lives."""

    def test_xdg_state_home(self, tmp_path: Path) -> None:
        """Without a directory the XDG state home is used."""
        expected = tmp_path / "xdg-state" / "monitorctl" / "history.jsonl"
        assert StateManager().history_path == expected

    def test_explicit_directory(self, tmp_path: Path) -> None:
        """An explicit state directory holds history.jsonl."""
        assert StateManager(state_dir=tmp_path).history_path == tmp_path / "history.jsonl"


class TestRecording:
    """Appending entries."""

    def test_first_write_creates_directory(self, store: StateManager) -> None:
        """The state directory is created on first record."""
        assert not store.history_path.parent.exists()

        store.record_action(_entry(HistoryActionType.DIRECTORY_ADD, "V:\\apps"))

        assert store.history_path.is_file()

    def test_one_object_per_line(self, store: StateManager) -> None:
        """Each entry is one compact JSON object."""
        entry = _entry(HistoryActionType.DIRECTORY_ADD, "V:\\apps")

        store.record_action(entry)

        [stored] = _stored_lines(store)
        assert stored["id"] == entry.id
        assert stored["action_type"] == "directory_add"
        assert stored["items"] == [{"key": "V:\\apps", "target": "directory"}]

    def test_entries_accumulate(self, store: StateManager) -> None:
        """Later entries are appended after earlier ones."""
        added = _entry(HistoryActionType.DIRECTORY_ADD, "V:\\apps")
        removed = _entry(HistoryActionType.DIRECTORY_REMOVE, "V:\\apps")

        store.record_action(added)
        store.record_action(removed)

        assert [line["id"] for line in _stored_lines(store)] == [added.id, removed.id]

    def test_unwritable_state_dir(self, tmp_path: Path) -> None:
        """A file in place of the state directory raises."""
        blocker = tmp_path / "blocked"
        blocker.write_text("")
        store = StateManager(state_dir=blocker / "state")

        with pytest.raises(RuntimeError, match="Cannot create directory"):
            store.record_action(_entry(HistoryActionType.INIT, "settings.json"))


class TestReading:
    """Reading entries back."""

    def test_no_history_yet(self, store: StateManager) -> None:
        """A missing file reads as no entries."""
        assert store.get_history() == []

    def test_newest_entry_first(self, store: StateManager) -> None:
        """Entries come back in reverse order of recording."""
        recorded = [
            _entry(HistoryActionType.DIRECTORY_ADD, "A:\\one"),
            _entry(HistoryActionType.MAPPING_ADD, "V"),
            _entry(HistoryActionType.STAGING_UPDATE, "stagingArea"),
        ]
        for entry in recorded:
            store.record_action(entry)

        assert [e.id for e in store.get_history()] == [e.id for e in reversed(recorded)]

    def test_limit_keeps_most_recent(self, store: StateManager) -> None:
        """A limit returns only the latest entries."""
        recorded = [_entry(HistoryActionType.DIRECTORY_ADD, f"C:\\dir{i}") for i in range(5)]
        for entry in recorded:
            store.record_action(entry)

        assert [e.id for e in store.get_history(limit=2)] == [recorded[4].id, recorded[3].id]
        assert len(store.get_history(limit=100)) == 5
        assert store.get_history(limit=0) == []

    def test_negative_limit_reads_nothing(self, store: StateManager) -> None:
        """A negative limit behaves like zero instead of failing."""
        store.record_action(_entry(HistoryActionType.DIRECTORY_ADD, "V:\\apps"))

        assert store.get_history(limit=-1) == []

    def test_damaged_lines_skipped(
        self, store: StateManager, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unparseable or invalid lines are logged and skipped."""
        good = _entry(HistoryActionType.DIRECTORY_ADD, "V:\\apps")
        unknown_action = {
            "id": "abc123",
            "timestamp": "2026-01-25T14:30:00+00:00",
            "action_type": "rename",
            "items": [{"key": "x", "target": "directory"}],
        }
        store.history_path.parent.mkdir(parents=True)
        store.history_path.write_text(
            "\n".join(
                [
                    good.to_json_line(),
                    "{truncated",
                    "",
                    '{"id": "only-an-id"}',
                    json.dumps(unknown_action),
                ]
            )
            + "\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING, logger="monitorctl"):
            entries = store.get_history()

        assert [e.id for e in entries] == [good.id]
        assert caplog.text.count("Skipping corrupt history line") == 3
