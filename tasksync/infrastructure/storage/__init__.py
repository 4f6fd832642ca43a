"""Storage infrastructure for tasksync.

Persistence with Result monads for explicit error handling.
"""

from tasksync.infrastructure.storage.history import GroupHistoryRepository, HistoryEntry
from tasksync.infrastructure.storage.json_storage import JsonStorage

__all__ = [
    "JsonStorage",
    "GroupHistoryRepository",
    "HistoryEntry",
]
