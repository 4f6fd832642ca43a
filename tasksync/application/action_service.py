"""Action lifecycle controller.

Drives the single action invocation of a group view: selecting an
action from the catalog, editing its input, submitting it through the
submission collaborator, and reporting the outcome. Input documents are
YAML text owned by the user once the catalog has seeded them.
"""

import logging
from typing import Any

import yaml

from tasksync.application.ports import ActionSubmitter, Navigator, TaskContext
from tasksync.domain.action import (
    ActionCatalog,
    InvocationState,
    begin_submit,
    close_dialog,
    complete_submit,
    fail_submit,
    select_action,
)
from tasksync.domain.shared import Err, Ok, Result

logger = logging.getLogger(__name__)


class ActionLifecycleController:
    """Runs group actions one at a time.

    Example:
        controller = ActionLifecycleController(catalog, submitter, navigator)
        controller.select("retrigger")
        controller.update_input("retrigger", "tasks: [abc]")
        result = await controller.submit()
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        submitter: ActionSubmitter,
        navigator: Navigator,
        task_id: str | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            catalog: Group actions to choose from.
            submitter: Collaborator that runs an action.
            navigator: Receives the task created by a completed action.
            task_id: Task the actions are invoked against, if any.
        """
        self._catalog = catalog
        self._submitter = submitter
        self._navigator = navigator
        self._context = TaskContext(task_group_id=catalog.task_group_id, task_id=task_id)
        self.inputs: dict[str, str] = catalog.default_inputs()
        self.state = InvocationState()

    @property
    def selectable(self) -> bool:
        """False while a submission is in flight."""
        return not self.state.loading

    def select(self, name: str) -> Result[InvocationState, str]:
        """Open the dialog for the named action."""
        entry = self._catalog.get(name)
        if entry is None:
            return Err(f"Unknown action: {name}")
        return self._apply(select_action(self.state, entry.action))

    def update_input(self, name: str, text: str) -> None:
        """Replace the input document of an action."""
        self.inputs[name] = text

    def close(self) -> Result[InvocationState, str]:
        """Cancel or close the dialog."""
        return self._apply(close_dialog(self.state))

    async def submit(self) -> Result[str, Any]:
        """Submit the selected action with its current input.

        On success the dialog closes and the navigator is sent to the new
        task. On failure the error is kept on the state and the dialog
        stays open, so the user can retry or close it.

        Returns:
            Ok(task_id) of the created task, or Err with the failure.
        """
        started = self._apply(begin_submit(self.state))
        if isinstance(started, Err):
            return started
        action = started.value.action

        try:
            document = yaml.safe_load(self.inputs.get(action.name, "")) or {}
            result = await self._submitter.submit(self._context, action, document)
        except yaml.YAMLError as e:
            result = Err(f"Invalid input for '{action.name}': {e}")
        except Exception as e:
            result = Err(e)

        if isinstance(result, Err):
            logger.error(f"Action '{action.name}' failed: {result.error}")
            self._apply(fail_submit(self.state, result.error))
            return result

        task_id = result.value
        logger.info(f"Action '{action.name}' created task {task_id}")
        self._apply(complete_submit(self.state, task_id))
        self._apply(close_dialog(self.state))
        self._navigator.navigate_to_task(task_id)
        return Ok(task_id)

    def _apply(self, result: Result[InvocationState, str]) -> Result[InvocationState, str]:
        if isinstance(result, Ok):
            self.state = result.value
        return result
