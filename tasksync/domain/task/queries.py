"""Read-only views over a task collection.

Pure functions used for progress display and the filtered task table.
"""

from collections.abc import Iterable

from tasksync.domain.task.models import Task, TaskState


def count_by_state(tasks: Iterable[Task]) -> dict[TaskState, int]:
    """Count tasks by state.

    Every state is present in the result, zero-filled.

    Args:
        tasks: Tasks to count.

    Returns:
        Dictionary mapping each TaskState to its count.
    """
    counts = {state: 0 for state in TaskState}
    for task in tasks:
        counts[task.state] += 1
    return counts


def filter_tasks(
    tasks: Iterable[Task],
    state: TaskState | None = None,
    search_term: str | None = None,
) -> list[Task]:
    """Filter tasks by state and a case-insensitive "name contains" term.

    Args:
        tasks: Tasks to filter, in display order.
        state: Only keep tasks in this state. None keeps all.
        search_term: Only keep tasks whose name contains this text.

    Returns:
        Matching tasks in their original order.
    """
    needle = search_term.lower() if search_term else None
    return [
        task
        for task in tasks
        if (state is None or task.state == state)
        and (needle is None or needle in task.name.lower())
    ]


def toggle_state_filter(current: TaskState | None, selected: TaskState) -> TaskState | None:
    """Select a state filter, or clear it when the same state is picked twice."""
    return None if current == selected else selected
