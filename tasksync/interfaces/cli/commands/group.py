"""Task group CLI commands.

Loads every page of a group and shows progress and the task table.
"""

import asyncio
from typing import Optional

import typer

from tasksync.application import TaskGroupView
from tasksync.domain.task import TaskState
from tasksync.infrastructure import QueueClient
from tasksync.interfaces.cli.common import (
    get_settings,
    load_group_view,
    parse_state,
    print_error,
    print_header,
    print_info,
    print_separator,
    print_warning,
)

app = typer.Typer(help="Task group commands")

_STATE_COLORS = {
    TaskState.COMPLETED: typer.colors.GREEN,
    TaskState.RUNNING: typer.colors.BLUE,
    TaskState.PENDING: typer.colors.CYAN,
    TaskState.FAILED: typer.colors.RED,
    TaskState.EXCEPTION: typer.colors.MAGENTA,
}


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def format_progress(progress: dict[TaskState, int]) -> str:
    """Format progress counts on one line, e.g. "completed: 3  failed: 1"."""
    return "  ".join(f"{state.value}: {n}" for state, n in progress.items())


def print_task_table(view: TaskGroupView) -> None:
    tasks = view.visible_tasks()
    if not tasks:
        typer.echo("No tasks match.")
        return

    for task in tasks:
        state = typer.style(f"{task.state.value:<12}", fg=_STATE_COLORS.get(task.state))
        typer.echo(f"{task.task_id}  {state} {task.name}")


async def _load(task_group_id: str) -> TaskGroupView:
    settings = get_settings()
    client = QueueClient(settings.root_url, settings.request_timeout)
    try:
        return await load_group_view(settings, task_group_id, client)
    finally:
        await client.aclose()


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(
    task_group_id: str = typer.Argument(..., help="Task group id"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only show tasks in this state"),
    search: Optional[str] = typer.Option(None, "--search", help="Only show tasks whose name contains this"),
) -> None:
    """Show progress and tasks of a task group."""
    state = parse_state(status)
    view = asyncio.run(_load(task_group_id))

    if view.advisory is not None:
        if view.advisory.warning:
            print_warning(view.advisory.message)
        else:
            print_error(view.advisory.message)
            raise typer.Exit(1)

    print_header(f"TASK GROUP {task_group_id}")
    typer.echo(format_progress(view.progress()))
    if not view.loaded:
        print_info("Partial results: not every page could be loaded")
    print_separator("-")

    if state is not None:
        view.toggle_state_filter(state)
    view.set_search_term(search)
    print_task_table(view)
