"""Group action CLI commands.

Lists the actions offered for a whole task group and runs one of them.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer

from tasksync.application import ActionLifecycleController
from tasksync.domain.action import ActionCatalog
from tasksync.domain.shared import Err, Result
from tasksync.infrastructure import QueueClient
from tasksync.interfaces.cli.common import (
    EchoNavigator,
    get_settings,
    load_group_view,
    print_error,
    print_header,
    print_separator,
)

app = typer.Typer(help="Group action commands")


async def _load_catalog(task_group_id: str) -> ActionCatalog | None:
    settings = get_settings()
    client = QueueClient(settings.root_url, settings.request_timeout)
    try:
        view = await load_group_view(settings, task_group_id, client)
        return view.group_actions
    finally:
        await client.aclose()


async def _run_action(
    task_group_id: str,
    name: str,
    input_text: str | None,
) -> Result[str, Any]:
    settings = get_settings()
    client = QueueClient(settings.root_url, settings.request_timeout)
    try:
        view = await load_group_view(settings, task_group_id, client)
        catalog = view.group_actions
        if catalog is None:
            return Err(view.advisory.message if view.advisory else "No actions available")

        controller = ActionLifecycleController(
            catalog, submitter=client, navigator=EchoNavigator(settings.root_url)
        )
        selected = controller.select(name)
        if isinstance(selected, Err):
            return selected
        if input_text is not None:
            controller.update_input(name, input_text)
        return await controller.submit()
    finally:
        await client.aclose()


@app.command("list")
def list_actions(
    task_group_id: str = typer.Argument(..., help="Task group id"),
) -> None:
    """List group actions with their default input."""
    catalog = asyncio.run(_load_catalog(task_group_id))
    if catalog is None or not catalog.entries:
        typer.echo("No group actions available.")
        return

    print_header(f"ACTIONS FOR {task_group_id}")
    for entry in catalog.entries:
        typer.echo(f"\n{entry.action.name}: {entry.action.title}")
        if entry.action.description:
            typer.echo(entry.action.description.strip())
        typer.echo("\nDefault input:")
        typer.echo(entry.default_input.rstrip())
        print_separator("-")


@app.command("run")
def run(
    task_group_id: str = typer.Argument(..., help="Task group id"),
    name: str = typer.Argument(..., help="Action name"),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="YAML file with the action input (default: schema defaults)"
    ),
) -> None:
    """Run a group action."""
    input_text = None
    if input_file is not None:
        try:
            input_text = input_file.read_text(encoding="utf-8")
        except OSError as e:
            print_error(f"Cannot read {input_file}: {e}")
            raise typer.Exit(1)

    result = asyncio.run(_run_action(task_group_id, name, input_text))
    if isinstance(result, Err):
        print_error(str(result.error))
        raise typer.Exit(1)
