"""Recent task groups CLI commands."""

import typer

from tasksync.domain.shared import is_err
from tasksync.infrastructure import GroupHistoryRepository
from tasksync.interfaces.cli.common import get_settings, print_error, print_success

app = typer.Typer(help="Recently viewed task groups")


def _repository() -> GroupHistoryRepository:
    return GroupHistoryRepository(get_settings().history_file)


@app.command("list")
def list_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of groups to show"),
) -> None:
    """List recently viewed task groups."""
    result = _repository().list_recent(limit)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)

    if not result.value:
        typer.echo("No task groups viewed yet.")
        return

    for entry in result.value:
        typer.echo(f"{entry.task_group_id}  {entry.visited_at:%Y-%m-%d %H:%M}")


@app.command("clear")
def clear() -> None:
    """Forget all recently viewed task groups."""
    result = _repository().clear()
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)
    print_success("History cleared")
