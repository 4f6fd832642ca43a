"""Task domain events.

Push-stream notifications about a single task's state. They are pure
data structures: the merge engine decides what they do to a collection.
"""

from typing import Any

from tasksync.domain.shared.events import DomainEvent
from tasksync.domain.task.models import TaskState

# Event kinds a group view subscribes to
TASK_EVENT_KINDS = (
    "tasksDefined",
    "tasksPending",
    "tasksRunning",
    "tasksCompleted",
    "tasksFailed",
    "tasksException",
)


class TaskStateChanged(DomainEvent):
    """Event raised when a task in a group changes state.

    ``task`` carries the full task payload (metadata and descriptive
    fields) and is present only the first time the stream reports this
    task id.
    """

    kind: str = "tasksDefined"
    task_group_id: str
    task_id: str
    state: TaskState
    task: dict[str, Any] | None = None
