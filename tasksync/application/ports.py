"""Collaborator interfaces for the application services.

The services never reach for a transport themselves; whoever builds a
view passes implementations of these protocols in.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, Field

from tasksync.domain.action.models import ActionDescriptor
from tasksync.domain.shared import Result
from tasksync.domain.task.events import TaskStateChanged
from tasksync.domain.task.models import PageInfo, Task


class ActionFilter(BaseModel):
    """Which action descriptors a page query should return."""

    kinds: list[str] = Field(default_factory=lambda: ["task", "hook"])
    max_context_size: int = 1

    model_config = {"frozen": True}

    def matches(self, action: ActionDescriptor) -> bool:
        return action.kind in self.kinds and len(action.context) <= self.max_context_size


class PageRequest(BaseModel):
    """One page query for a task group."""

    task_group_id: str
    limit: int
    cursor: str | None = None
    previous_cursor: str | None = None
    action_filter: ActionFilter = Field(default_factory=ActionFilter)

    model_config = {"frozen": True}


class Page(BaseModel):
    """A page query response.

    ``actions`` is only filled in for the first page of a group. When the
    tasks listed fine but the actions could not be read, ``actions`` stays
    None and ``actions_error`` says why.
    """

    task_group_id: str
    tasks: list[Task] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
    actions: list[ActionDescriptor] | None = None
    actions_error: str | None = None

    model_config = {"frozen": True}


class TaskContext(BaseModel):
    """What an action is invoked against."""

    task_group_id: str
    task_id: str | None = None

    model_config = {"frozen": True}


class PageQuery(Protocol):
    """Request/response page source."""

    async def fetch_page(self, request: PageRequest) -> Result[Page, str]: ...


class Subscription(Protocol):
    """Handle returned by an event stream subscription."""

    task_group_id: str


class EventStream(Protocol):
    """At-least-once push stream of task state changes."""

    def subscribe(
        self,
        task_group_id: str,
        kinds: Sequence[str],
        callback: Callable[[TaskStateChanged], None],
    ) -> Subscription: ...

    def unsubscribe(self, subscription: Subscription) -> None: ...


class ActionSubmitter(Protocol):
    """Runs an action and reports the task it created."""

    async def submit(
        self,
        context: TaskContext,
        action: ActionDescriptor,
        input_document: Any,
    ) -> Result[str, Any]: ...


class Navigator(Protocol):
    """Receives "go to task" signals."""

    def navigate_to_task(self, task_id: str) -> None: ...


class GroupHistory(Protocol):
    """Recent-groups store."""

    def record(self, task_group_id: str) -> Result[None, str]: ...
