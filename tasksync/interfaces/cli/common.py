"""Shared utilities for tasksync CLI commands.

- Settings and logging setup
- Building and loading a group view
- Formatted output helpers (error, success, info)
"""

import logging

import typer

from tasksync.application import TaskGroupView
from tasksync.config import Settings, load_settings
from tasksync.domain.task import TaskState
from tasksync.infrastructure import EventBroker, GroupHistoryRepository, QueueClient


def configure_logging(verbose: bool) -> None:
    """Log to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_settings() -> Settings:
    return load_settings()


def parse_state(value: str | None) -> TaskState | None:
    """Parse a --status option value.

    Raises:
        typer.BadParameter: If the value is not a task state.
    """
    if value is None:
        return None
    try:
        return TaskState(value.lower())
    except ValueError:
        choices = ", ".join(state.value for state in TaskState)
        raise typer.BadParameter(f"'{value}' is not one of: {choices}")


async def load_group_view(
    settings: Settings,
    task_group_id: str,
    client: QueueClient,
) -> TaskGroupView:
    """Activate a group and page through it until fully loaded.

    The view is closed (unsubscribed) before it is returned; its
    collection and catalog stay readable.
    """
    view = TaskGroupView(
        query=client,
        events=EventBroker(),
        history=GroupHistoryRepository(settings.history_file),
        settings=settings,
    )
    view.activate(task_group_id)
    try:
        await view.wait_until_idle()
    finally:
        view.close()
    return view


class EchoNavigator:
    """Navigator that prints the URL of the task to go to."""

    def __init__(self, root_url: str) -> None:
        self.root_url = root_url.rstrip("/")

    def navigate_to_task(self, task_id: str) -> None:
        print_success(f"Created task {task_id}")
        typer.echo(f"{self.root_url}/tasks/{task_id}")


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_warning(msg: str) -> None:
    """Print a formatted warning message."""
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.CYAN))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a header with separators above and below."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


__all__ = [
    "configure_logging",
    "get_settings",
    "parse_state",
    "load_group_view",
    "EchoNavigator",
    "print_error",
    "print_warning",
    "print_success",
    "print_info",
    "print_separator",
    "print_header",
]
