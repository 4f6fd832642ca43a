"""Action domain models.

Action descriptors are read from a group's actions.json, so field
aliases follow the camelCase of that document.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Action kinds this client knows how to handle
KNOWN_ACTION_KINDS = ("task", "hook")


class ActionDescriptor(BaseModel):
    """An invocable operation advertised for a task group.

    Descriptors with an empty ``context`` apply to the whole group;
    anything else is restricted to tasks matching the context.
    Other actions.json fields, such as the ``hookPayload`` template, are
    ignored: hooks are triggered with the plain task context and input.
    """

    name: str
    title: str = ""
    description: str = ""
    kind: str = "task"
    context: list[dict[str, Any]] = Field(default_factory=list)
    input_schema: dict[str, Any] | None = Field(default=None, alias="schema")
    hook_group_id: str | None = Field(default=None, alias="hookGroupId")
    hook_id: str | None = Field(default=None, alias="hookId")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def is_group_action(self) -> bool:
        """True if the action is invocable on the group as a whole."""
        return len(self.context) == 0


class CatalogEntry(BaseModel):
    """A group action with its generated default input document."""

    action: ActionDescriptor
    default_input: str = "{}\n"

    model_config = {"frozen": True}


class ActionCatalog(BaseModel):
    """Ordered group actions plus a name-keyed lookup."""

    task_group_id: str
    entries: list[CatalogEntry] = Field(default_factory=list)

    model_config = {"frozen": True}

    def get(self, name: str) -> CatalogEntry | None:
        """Get an entry by action name."""
        for entry in self.entries:
            if entry.action.name == name:
                return entry
        return None

    def names(self) -> list[str]:
        """Return action names in catalog order."""
        return [entry.action.name for entry in self.entries]

    def default_inputs(self) -> dict[str, str]:
        """Return the default input document of every action, keyed by name."""
        return {entry.action.name: entry.default_input for entry in self.entries}


class InvocationPhase(str, Enum):
    """Phase of the single action invocation a view may have."""

    IDLE = "idle"
    OPEN = "open"
    SUBMITTING = "submitting"
    ERROR = "error"
    COMPLETE = "complete"


class InvocationState(BaseModel):
    """Current action invocation.

    ``error`` is whatever the submission collaborator rejected with and
    is kept until the next submit or close.
    """

    phase: InvocationPhase = InvocationPhase.IDLE
    action: ActionDescriptor | None = None
    error: Any = None
    loading: bool = False
    result_task_id: str | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def dialog_open(self) -> bool:
        """True while the action dialog is shown."""
        return self.phase in (
            InvocationPhase.OPEN,
            InvocationPhase.SUBMITTING,
            InvocationPhase.ERROR,
        )
