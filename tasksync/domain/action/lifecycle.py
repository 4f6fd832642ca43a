"""Action invocation state machine.

Pure transitions over InvocationState. Each returns a new state, or an
error message when the transition is not allowed from the current phase.

    idle -> open -> submitting -> complete -> idle
                        |
                        v
                      error -> submitting (retry) | idle (close)
"""

from typing import Any

from tasksync.domain.action.models import (
    ActionDescriptor,
    InvocationPhase,
    InvocationState,
)
from tasksync.domain.shared import Err, Ok, Result


def select_action(
    state: InvocationState,
    action: ActionDescriptor,
) -> Result[InvocationState, str]:
    """Open the dialog for an action.

    Selecting is refused while a submission is in flight.
    """
    if state.loading or state.phase == InvocationPhase.SUBMITTING:
        return Err(f"Cannot select '{action.name}' while an action is submitting")

    return Ok(InvocationState(phase=InvocationPhase.OPEN, action=action))


def begin_submit(state: InvocationState) -> Result[InvocationState, str]:
    """Mark the selected action as submitting, clearing any previous error."""
    if state.phase not in (InvocationPhase.OPEN, InvocationPhase.ERROR):
        return Err(f"Cannot submit from phase '{state.phase.value}'")
    if state.action is None:
        return Err("No action selected")

    return Ok(
        state.model_copy(
            update={"phase": InvocationPhase.SUBMITTING, "error": None, "loading": True}
        )
    )


def fail_submit(state: InvocationState, error: Any) -> Result[InvocationState, str]:
    """Record a rejected submission. The dialog stays open for a retry."""
    if state.phase != InvocationPhase.SUBMITTING:
        return Err(f"No submission in flight (phase '{state.phase.value}')")

    return Ok(
        state.model_copy(
            update={"phase": InvocationPhase.ERROR, "error": error, "loading": False}
        )
    )


def complete_submit(state: InvocationState, task_id: str) -> Result[InvocationState, str]:
    """Record a successful submission and the task it created."""
    if state.phase != InvocationPhase.SUBMITTING:
        return Err(f"No submission in flight (phase '{state.phase.value}')")

    return Ok(
        state.model_copy(
            update={
                "phase": InvocationPhase.COMPLETE,
                "loading": False,
                "result_task_id": task_id,
            }
        )
    )


def close_dialog(state: InvocationState) -> Result[InvocationState, str]:
    """Close the dialog, clearing selection, error and loading flag."""
    if state.phase == InvocationPhase.SUBMITTING:
        return Err("Cannot close while an action is submitting")

    return Ok(InvocationState())
