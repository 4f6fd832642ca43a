"""CLI interface for tasksync using Typer.

Usage:
    tasksync view <group-id>                 # Progress and tasks of a group
    tasksync actions <group-id>              # Group actions and default input
    tasksync run-action <group-id> <name>    # Run a group action
    tasksync recent                          # Recently viewed groups

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (group, action, history)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from pathlib import Path
from typing import Optional

import typer

from tasksync import __version__
from tasksync.interfaces.cli.commands import action, group, history
from tasksync.interfaces.cli.common import configure_logging

app = typer.Typer(
    name="tasksync",
    help="Live views of task groups and their actions",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tasksync version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """tasksync - live views of task groups.

    Pages through a task group, merges state changes and runs the
    actions offered for the group.
    """
    configure_logging(verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(group.app, name="group")
app.add_typer(action.app, name="action")
app.add_typer(history.app, name="history")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("view")
def view(
    task_group_id: str = typer.Argument(..., help="Task group id"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only show tasks in this state"),
    search: Optional[str] = typer.Option(None, "--search", help="Only show tasks whose name contains this"),
) -> None:
    """Show a task group (shortcut for 'group show')."""
    group.show(task_group_id, status=status, search=search)


@app.command("actions")
def actions(
    task_group_id: str = typer.Argument(..., help="Task group id"),
) -> None:
    """List group actions (shortcut for 'action list')."""
    action.list_actions(task_group_id)


@app.command("run-action")
def run_action(
    task_group_id: str = typer.Argument(..., help="Task group id"),
    name: str = typer.Argument(..., help="Action name"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="YAML file with the action input"),
) -> None:
    """Run a group action (shortcut for 'action run')."""
    action.run(task_group_id, name, input_file=input_file)


@app.command("recent")
def recent(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of groups to show"),
) -> None:
    """List recently viewed groups (shortcut for 'history list')."""
    history.list_history(limit=limit)


__all__ = ["app"]
