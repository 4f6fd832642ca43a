"""Task domain - tasks, pages and group identity.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskState - Task state enumeration
    Task - One task in a group
    PageInfo - Pagination metadata
    TaskCollection - Ordered, duplicate-free tasks of one group

Identity:
    is_valid_group_id - Recognised group id format
    is_current_batch - Group-identity guard for pages and events

Queries:
    count_by_state - Progress counts
    filter_tasks - State filter and name search
    toggle_state_filter - Filter toggle rule

Domain Events:
    TaskStateChanged - Push-stream state change
"""

from .events import TASK_EVENT_KINDS, TaskStateChanged
from .identity import VALID_TASK_GROUP_ID, is_current_batch, is_valid_group_id
from .models import INITIAL_CURSOR, PageInfo, Task, TaskCollection, TaskState
from .queries import count_by_state, filter_tasks, toggle_state_filter

__all__ = [
    # Models
    "INITIAL_CURSOR",
    "TaskState",
    "Task",
    "PageInfo",
    "TaskCollection",
    # Identity
    "VALID_TASK_GROUP_ID",
    "is_valid_group_id",
    "is_current_batch",
    # Queries
    "count_by_state",
    "filter_tasks",
    "toggle_state_filter",
    # Events
    "TASK_EVENT_KINDS",
    "TaskStateChanged",
]
