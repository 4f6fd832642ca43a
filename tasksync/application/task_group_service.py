"""Task group view service.

Keeps the task collection of the active group in sync with the page
query and the push stream. Everything runs on one event loop; the only
suspension points are page requests. A group switch resets all merge
and pagination state synchronously, before the first request for the
new group goes out, and every response or event is checked against the
active group in the same step that merges it.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from pydantic import BaseModel

from tasksync.application.merge_engine import MergeEngine
from tasksync.application.pagination import CursorController
from tasksync.application.ports import (
    ActionFilter,
    EventStream,
    GroupHistory,
    Page,
    PageQuery,
    PageRequest,
    Subscription,
)
from tasksync.config import Settings
from tasksync.domain.action import ActionCatalog, derive_catalog
from tasksync.domain.shared import Err, Result
from tasksync.domain.task import (
    Task,
    TaskCollection,
    TaskState,
    TaskStateChanged,
    count_by_state,
    filter_tasks,
    is_current_batch,
    is_valid_group_id,
    toggle_state_filter,
)

logger = logging.getLogger(__name__)


class Advisory(BaseModel):
    """A query or subscription failure shown next to the data.

    ``warning`` is set when partial data is still available, so the
    failure is shown as a warning rather than an error.
    """

    message: str
    warning: bool = False

    model_config = {"frozen": True}


class TaskGroupView:
    """Live view of one task group at a time.

    Example:
        view = TaskGroupView(query, events, history, settings)
        view.activate("fH3Q1yFkTzCyRxQ6Y8c7aw")
        await view.wait_until_idle()
        print(view.progress())
    """

    def __init__(
        self,
        query: PageQuery,
        events: EventStream,
        history: GroupHistory,
        settings: Settings | None = None,
    ) -> None:
        self._query = query
        self._events = events
        self._history = history
        self._settings = settings or Settings()
        self._action_filter = ActionFilter(kinds=list(self._settings.action_kinds))
        self._engine = MergeEngine()
        self._cursor = CursorController(self._settings.page_size, self._action_filter)
        self._subscription: Subscription | None = None
        self._pending: set[asyncio.Task] = set()
        self._session = 0
        self._first_page_group: str | None = None

        self.active_group_id: str | None = None
        self.catalog: ActionCatalog | None = None
        self.advisory: Advisory | None = None
        self.state_filter: TaskState | None = None
        self.search_term: str | None = None

    # =========================================================================
    # Group activation
    # =========================================================================

    def activate(self, task_group_id: str) -> None:
        """Make a group the active one and start loading it.

        Must be called from a running event loop.
        """
        self.active_group_id = task_group_id
        self._engine.reset(task_group_id)
        self._session += 1
        self._cursor.reset()
        self._first_page_group = None
        self.advisory = None
        logger.info(f"Activated task group {task_group_id}")

        self._record_history(task_group_id)
        self._subscribe(task_group_id)
        self._spawn(self._load_first_page(task_group_id, self._session))

    def navigate(self, task_group_id: str) -> None:
        """Switch to a group, unless it is already the active one."""
        if task_group_id == self.active_group_id:
            return
        self.activate(task_group_id)

    def close(self) -> None:
        """Tear down the subscription. Responses still in flight are ignored."""
        self._unsubscribe()
        self.active_group_id = None

    async def wait_until_idle(self) -> None:
        """Wait until no page request is in flight.

        Merges schedule further continuations, so this keeps waiting until
        pagination has run out (or failed).
        """
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # =========================================================================
    # Read side
    # =========================================================================

    @property
    def collection(self) -> TaskCollection:
        return self._engine.collection

    @property
    def loaded(self) -> bool:
        """True once every page of the active group has been merged."""
        return (
            self.active_group_id is not None
            and self._first_page_group == self.active_group_id
            and not self.collection.page_info.has_next_page
        )

    @property
    def group_actions(self) -> ActionCatalog | None:
        """Action catalog of the active group, if it has arrived."""
        if self.catalog is None or self.catalog.task_group_id != self.active_group_id:
            return None
        return self.catalog

    def progress(self) -> dict[TaskState, int]:
        return count_by_state(self.collection.tasks)

    def visible_tasks(self) -> list[Task]:
        """Tasks after applying the state filter and name search."""
        return filter_tasks(self.collection.tasks, self.state_filter, self.search_term)

    def toggle_state_filter(self, state: TaskState) -> None:
        self.state_filter = toggle_state_filter(self.state_filter, state)

    def set_search_term(self, search_term: str | None) -> None:
        self.search_term = search_term or None

    def dismiss_advisory(self) -> None:
        self.advisory = None

    # =========================================================================
    # Push stream
    # =========================================================================

    def handle_event(self, event: TaskStateChanged) -> None:
        """Merge a push event if it belongs to the active group's subscription."""
        subscribed_group = self._subscription.task_group_id if self._subscription else None
        if subscribed_group != event.task_group_id or not is_current_batch(
            event.task_group_id, self.active_group_id
        ):
            logger.debug(
                f"Dropped {event.kind} for task {event.task_id} of group {event.task_group_id}"
            )
            return

        self._engine.merge_live_update(event)

    def _subscribe(self, task_group_id: str) -> Subscription:
        if self._subscription is not None:
            if self._subscription.task_group_id == task_group_id:
                return self._subscription
            self._unsubscribe()

        self._subscription = self._events.subscribe(
            task_group_id, self._settings.event_kinds, self.handle_event
        )
        return self._subscription

    def _unsubscribe(self) -> None:
        if self._subscription is None:
            return
        self._events.unsubscribe(self._subscription)
        self._subscription = None

    # =========================================================================
    # Page query
    # =========================================================================

    async def _load_first_page(self, task_group_id: str, session: int) -> None:
        request = PageRequest(
            task_group_id=task_group_id,
            limit=self._settings.initial_page_size,
            action_filter=self._action_filter,
        )
        result = await self._fetch(request)

        # No suspension point between the checks below and the merge
        if isinstance(result, Err):
            self._report_failure(task_group_id, result.error, session)
            return
        page = result.value
        if not self._is_current_page(request, page, session):
            logger.debug(f"Discarded first page of stale group {task_group_id}")
            return

        self._engine.merge_page(page.tasks, page.page_info)
        self._first_page_group = task_group_id

        catalog = derive_catalog(
            self.catalog.task_group_id if self.catalog else None,
            task_group_id,
            page.actions,
        )
        if catalog is not None:
            self.catalog = catalog
            logger.debug(f"Built catalog of {len(catalog.entries)} group actions")
        if page.actions_error is not None:
            # The tasks are in, so the missing actions are only a warning
            self.advisory = Advisory(message=page.actions_error, warning=True)

        self._continue_pagination()

    async def _load_continuation(self, request: PageRequest, session: int) -> None:
        result = await self._fetch(request)

        if isinstance(result, Err):
            self._report_failure(request.task_group_id, result.error, session)
            return
        page = result.value
        if not self._is_current_page(request, page, session) or not self._cursor.accepts(
            request, page
        ):
            logger.debug(f"Discarded stale page {request.cursor} of group {request.task_group_id}")
            return

        self._engine.merge_page(page.tasks, page.page_info)
        self._continue_pagination()

    def _continue_pagination(self) -> None:
        if self.active_group_id is None:
            return
        request = self._cursor.plan_continuation(
            self.active_group_id, self.collection.page_info
        )
        if request is not None:
            self._spawn(self._load_continuation(request, self._session))

    async def _fetch(self, request: PageRequest) -> Result[Page, str]:
        try:
            return await self._query.fetch_page(request)
        except Exception as e:
            logger.warning(f"Page query for group {request.task_group_id} raised: {e}")
            return Err(str(e))

    def _is_current_page(self, request: PageRequest, page: Page, session: int) -> bool:
        # A response from an earlier activation of the same group is stale too
        if session != self._session or page.task_group_id != request.task_group_id:
            return False
        return is_current_batch(request.task_group_id, self.active_group_id, page.tasks)

    def _report_failure(self, task_group_id: str, error: str, session: int) -> None:
        if session != self._session or task_group_id != self.active_group_id:
            return
        logger.warning(f"Query for group {task_group_id} failed: {error}")
        self.advisory = Advisory(message=error, warning=len(self.collection) > 0)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _record_history(self, task_group_id: str) -> None:
        if not is_valid_group_id(task_group_id):
            return
        result = self._history.record(task_group_id)
        if isinstance(result, Err):
            logger.warning(f"Could not record group history: {result.error}")

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
