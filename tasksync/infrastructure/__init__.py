"""Infrastructure layer for tasksync.

Concrete collaborators for the application services, with Result
monads for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - GroupHistoryRepository: Recent task groups

    Queue:
        - QueueClient: Page query and hook-action submission over HTTP

    Events:
        - EventBroker: In-process push stream
"""

from tasksync.infrastructure.events import EventBroker, EventSubscription
from tasksync.infrastructure.queue import QueueClient
from tasksync.infrastructure.storage import GroupHistoryRepository, HistoryEntry, JsonStorage

__all__ = [
    # Storage
    "JsonStorage",
    "GroupHistoryRepository",
    "HistoryEntry",
    # Queue
    "QueueClient",
    # Events
    "EventBroker",
    "EventSubscription",
]
