"""CLI command groups."""

from tasksync.interfaces.cli.commands import action, group, history

__all__ = ["action", "group", "history"]
