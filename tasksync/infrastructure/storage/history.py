"""Recent task groups store.

Keeps the groups a user has opened in a JSON file, one entry per group
id; opening a group again moves it to the front.
"""

from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from tasksync.domain.shared.result import Err, Ok, Result
from tasksync.infrastructure.storage.json_storage import JsonStorage

# Oldest entries beyond this are dropped on write
MAX_HISTORY_ENTRIES = 100


class HistoryEntry(BaseModel):
    """A recently opened task group."""

    task_group_id: str
    visited_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class GroupHistoryRepository:
    """Repository for the recent-groups history file."""

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            path: History file location.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._path = path
        self._storage = storage or JsonStorage()

    def list_recent(self, limit: int | None = None) -> Result[list[HistoryEntry], str]:
        """List recent groups, most recent first.

        Returns:
            Ok(list) of entries (empty if no history file exists yet),
            Err(str) if the file exists but cannot be read.
        """
        result = self._storage.load_json(self._path, default={"groups": []})
        if isinstance(result, Err):
            return result

        try:
            entries = [HistoryEntry(**item) for item in result.value.get("groups", [])]
        except (AttributeError, TypeError, ValidationError) as e:
            return Err(f"Invalid history data in {self._path}: {e}")

        entries.sort(key=lambda entry: entry.visited_at, reverse=True)
        return Ok(entries[:limit] if limit else entries)

    def record(self, task_group_id: str) -> Result[None, str]:
        """Insert or refresh the entry for a group."""
        result = self.list_recent()
        if isinstance(result, Err):
            return result

        entries = [HistoryEntry(task_group_id=task_group_id)]
        entries.extend(e for e in result.value if e.task_group_id != task_group_id)

        data = {"groups": [e.model_dump(mode="json") for e in entries[:MAX_HISTORY_ENTRIES]]}
        return self._storage.save_json(self._path, data)

    def clear(self) -> Result[None, str]:
        """Remove all history entries."""
        return self._storage.save_json(self._path, {"groups": []})
