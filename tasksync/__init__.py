"""tasksync - live, paginated views of task groups.

Keeps an in-memory, duplicate-free collection of a task group's tasks in
sync with paged queries and a push stream of state changes, and drives
group-level actions against the task queue.
"""

__version__ = "0.1.0"
