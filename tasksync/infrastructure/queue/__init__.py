"""Queue service client."""

from tasksync.infrastructure.queue.client import QueueClient, parse_task

__all__ = ["QueueClient", "parse_task"]
