"""Task domain models.

Pure value types for a task group view. Uses Pydantic for serialization
compatibility with the query and event layers. Every model here is
frozen: updates go through ``model_copy(update=...)`` so a collection
handed to a renderer is never mutated underneath it.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Sentinel cursor for the first page of a group
INITIAL_CURSOR = "INITIAL_CURSOR"


class TaskState(str, Enum):
    """Status of a task as reported by the queue."""

    UNSCHEDULED = "unscheduled"
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    EXCEPTION = "exception"


class Task(BaseModel):
    """One task in a group.

    Only ``state`` changes after the task is first observed; the other
    fields are descriptive and are kept as first seen.
    """

    task_id: str
    task_group_id: str
    state: TaskState = TaskState.UNSCHEDULED
    name: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class PageInfo(BaseModel):
    """Pagination metadata of a collection or a page response.

    ``cursor`` is the cursor the page was fetched with (the sentinel for
    the first page) and ``previous_cursor`` echoes the request's
    previous-cursor, so a response can be matched to the request that
    produced it.
    """

    cursor: str = INITIAL_CURSOR
    next_cursor: str | None = None
    previous_cursor: str | None = None
    has_next_page: bool = False

    model_config = {"frozen": True}


class TaskCollection(BaseModel):
    """Append-ordered tasks of one group plus pagination metadata.

    Order is the order in which task ids were first observed, not any
    content ordering. No two tasks share a ``task_id``.
    """

    task_group_id: str | None = None
    tasks: tuple[Task, ...] = ()
    page_info: PageInfo = Field(default_factory=PageInfo)

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.tasks)

    def get(self, task_id: str) -> Task | None:
        """Get a task by its ID."""
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def task_ids(self) -> list[str]:
        """Return task ids in collection order."""
        return [task.task_id for task in self.tasks]
