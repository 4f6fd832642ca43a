"""Identity ledger and merge engine.

The merge engine owns the ordered task collection of the active group
and the ledger of task ids merged into it. Page batches and push events
both go through it; the rule is patch-if-known, append-if-new, so the
result does not depend on whether a task was first seen on a page or
on the stream.
"""

import logging

from tasksync.domain.task.events import TaskStateChanged
from tasksync.domain.task.models import PageInfo, Task, TaskCollection

logger = logging.getLogger(__name__)


class IdentityLedger:
    """Task ids merged into the collection, with their positions.

    An id is a member exactly when its task is in the collection.
    """

    def __init__(self) -> None:
        self._positions: dict[str, int] = {}

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def add(self, task_id: str) -> int:
        """Record a new id at the end of the collection and return its position."""
        position = len(self._positions)
        self._positions[task_id] = position
        return position

    def position(self, task_id: str) -> int | None:
        return self._positions.get(task_id)

    def ids(self) -> set[str]:
        return set(self._positions)

    def clear(self) -> None:
        self._positions.clear()


class MergeEngine:
    """Merges pages and push events into one group's task collection.

    Each merge builds a new frozen TaskCollection; collections handed out
    earlier are never modified.

    Example:
        engine = MergeEngine()
        engine.reset("fH3Q1yFkTzCyRxQ6Y8c7aw")
        engine.merge_page(tasks, page_info)
        engine.merge_live_update(event)
        engine.collection.task_ids()
    """

    def __init__(self) -> None:
        self._ledger = IdentityLedger()
        self._collection = TaskCollection()

    @property
    def collection(self) -> TaskCollection:
        return self._collection

    @property
    def ledger(self) -> IdentityLedger:
        return self._ledger

    def reset(self, task_group_id: str | None = None) -> None:
        """Clear the ledger and the collection for a new group."""
        self._ledger.clear()
        self._collection = TaskCollection(task_group_id=task_group_id)
        logger.debug(f"Merge state reset for group {task_group_id}")

    def merge_page(self, tasks: list[Task], page_info: PageInfo) -> TaskCollection:
        """Append unseen tasks of a page and take over its page info.

        Tasks already in the ledger are dropped from the batch; their
        current state in the collection is kept.

        Args:
            tasks: Tasks of the page, in page order.
            page_info: Pagination metadata of the page.

        Returns:
            The updated collection.
        """
        added: list[Task] = []
        for task in tasks:
            if task.task_id in self._ledger:
                continue
            self._ledger.add(task.task_id)
            added.append(task)

        self._collection = self._collection.model_copy(
            update={
                "tasks": self._collection.tasks + tuple(added),
                "page_info": page_info,
            }
        )
        logger.debug(
            f"Merged page: {len(added)} new, {len(tasks) - len(added)} duplicate, "
            f"{len(self._collection)} total"
        )
        return self._collection

    def merge_live_update(self, event: TaskStateChanged) -> TaskCollection:
        """Apply a push event to the collection.

        A known task gets its state replaced in place. An unknown task is
        appended, built from the event's payload; without a payload a
        placeholder carrying only id, group and state is appended.

        Args:
            event: The state change.

        Returns:
            The updated collection.
        """
        position = self._ledger.position(event.task_id)

        if position is not None:
            tasks = list(self._collection.tasks)
            tasks[position] = tasks[position].model_copy(update={"state": event.state})
            self._collection = self._collection.model_copy(update={"tasks": tuple(tasks)})
            return self._collection

        if event.task is None:
            logger.warning(
                f"State change for unknown task {event.task_id} carried no payload, "
                "adding placeholder"
            )
        self._ledger.add(event.task_id)
        self._collection = self._collection.model_copy(
            update={"tasks": self._collection.tasks + (task_from_event(event),)}
        )
        return self._collection


def task_from_event(event: TaskStateChanged) -> Task:
    """Build a Task from a push event, using its payload when present."""
    payload = event.task or {}
    metadata = payload.get("metadata") or {}
    return Task(
        task_id=event.task_id,
        task_group_id=event.task_group_id,
        state=event.state,
        name=metadata.get("name", ""),
        metadata=metadata,
    )
