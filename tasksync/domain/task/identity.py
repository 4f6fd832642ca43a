"""Group identity checks.

Requests and push events resolve asynchronously, so a batch can arrive
after the view has moved to another group. These predicates decide
whether a batch still belongs to the group that is active now. A batch
that fails the check is dropped whole.
"""

import re
from collections.abc import Iterable

from tasksync.domain.task.models import Task

# Slug ids as issued by the queue (22 chars, url-safe base64 of a v4 uuid)
VALID_TASK_GROUP_ID = re.compile(
    r"^[A-Za-z0-9_-]{8}[Q-T][A-Za-z0-9_-][CGKOSWaeimquy26-][A-Za-z0-9_-]{10}[AQgw]$"
)


def is_valid_group_id(task_group_id: str) -> bool:
    """Check whether a group id has the recognised slug format.

    Examples:
        >>> is_valid_group_id("fH3Q1yFkTzCyRxQ6Y8c7aw")
        True
        >>> is_valid_group_id("not-a-group")
        False
    """
    return bool(VALID_TASK_GROUP_ID.match(task_group_id))


def is_current_batch(
    requested_group_id: str | None,
    active_group_id: str | None,
    tasks: Iterable[Task] = (),
) -> bool:
    """Check that a batch belongs to the currently active group.

    The batch passes only when the group it was requested for is the
    active one and every task in it carries that group id.

    Args:
        requested_group_id: Group active when the request was issued (or
            the group an event was published for).
        active_group_id: Group active now.
        tasks: Tasks in the batch.

    Returns:
        True if the whole batch may be merged.
    """
    if active_group_id is None or requested_group_id != active_group_id:
        return False
    return all(task.task_group_id == active_group_id for task in tasks)
