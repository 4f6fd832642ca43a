"""Cursor controller for self-driving pagination.

After every update of a collection's page info the controller decides
whether to ask for the next page. It remembers the cursor of the last
continuation it issued, so the same page is never requested twice and a
response from a superseded request can be recognised and dropped.
"""

import logging

from tasksync.application.ports import ActionFilter, Page, PageRequest
from tasksync.domain.task.models import INITIAL_CURSOR, PageInfo

logger = logging.getLogger(__name__)


class CursorController:
    """Plans continuation requests for one group at a time.

    Attributes:
        previous_cursor: Cursor of the most recently issued continuation,
            or the start sentinel before the first one.
    """

    def __init__(self, page_size: int, action_filter: ActionFilter | None = None) -> None:
        """Initialize the controller.

        Args:
            page_size: Limit sent with every continuation request.
            action_filter: Action filter sent with every request.
        """
        self.page_size = page_size
        self.action_filter = action_filter or ActionFilter()
        self.previous_cursor = INITIAL_CURSOR

    def reset(self) -> None:
        """Forget pagination progress (on group change)."""
        self.previous_cursor = INITIAL_CURSOR

    def plan_continuation(self, task_group_id: str, page_info: PageInfo) -> PageRequest | None:
        """Return the next continuation request, if one is due.

        A request is due when there are more pages and the collection's
        current cursor is the one the controller last asked for. The
        controller moves ``previous_cursor`` to the new cursor right away,
        so asking again before the response lands yields nothing.

        Args:
            task_group_id: Active group.
            page_info: Page info of the collection as it is now.

        Returns:
            PageRequest to issue, or None.
        """
        if not page_info.has_next_page or not page_info.next_cursor:
            return None
        if page_info.cursor != self.previous_cursor:
            return None

        request = PageRequest(
            task_group_id=task_group_id,
            limit=self.page_size,
            cursor=page_info.next_cursor,
            previous_cursor=page_info.cursor,
            action_filter=self.action_filter,
        )
        self.previous_cursor = page_info.next_cursor
        logger.debug(f"Requesting page {request.cursor} of group {task_group_id}")
        return request

    def accepts(self, request: PageRequest, page: Page) -> bool:
        """Check that a continuation response answers the latest request.

        The response must echo the cursor and previous cursor it was
        requested with, and that cursor must still be the one the
        controller is waiting for.
        """
        if page.page_info.cursor != request.cursor:
            return False
        if page.page_info.previous_cursor != request.previous_cursor:
            return False
        return request.cursor == self.previous_cursor
