"""HTTP client for the task queue and hooks services.

Implements the page query and action submission collaborators over the
queue's REST API:

- task groups are listed with ``GET /api/queue/v1/task-group/<id>/list``,
  paginated by continuation token
- group actions are read from the decision task's ``public/actions.json``
  artifact (the decision task id is the task group id)
- hook actions are run with ``POST /api/hooks/v1/hooks/<group>/<id>/trigger``
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from tasksync.application.ports import ActionFilter, Page, PageRequest, TaskContext
from tasksync.domain.action.models import ActionDescriptor
from tasksync.domain.shared.result import Err, Ok, Result
from tasksync.domain.task.models import INITIAL_CURSOR, PageInfo, Task

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def parse_task(entry: dict[str, Any]) -> Task:
    """Build a Task from one ``tasks[]`` entry of a task-group listing."""
    status = entry["status"]
    definition = entry.get("task") or {}
    metadata = definition.get("metadata") or {}
    return Task(
        task_id=status["taskId"],
        task_group_id=status.get("taskGroupId") or definition["taskGroupId"],
        state=status["state"],
        name=metadata.get("name", ""),
        metadata=metadata,
    )


class QueueClient:
    """Async client for listing task groups and running group actions.

    Example:
        client = QueueClient("https://tc.example.com")
        result = await client.fetch_page(PageRequest(task_group_id=gid, limit=20))
        if isinstance(result, Ok):
            tasks = result.value.tasks
        await client.aclose()
    """

    def __init__(
        self,
        root_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            root_url: Deployment root URL.
            timeout: Request timeout in seconds.
            client: Preconfigured httpx client (used by tests).
        """
        self.root_url = root_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # =========================================================================
    # Page query
    # =========================================================================

    async def fetch_page(self, request: PageRequest) -> Result[Page, str]:
        """Fetch one page of a task group.

        The first page (no cursor) also carries the group's actions. A
        failure to read them does not fail the page; it is reported in
        ``actions_error``. The response echoes the request's cursor and
        previous cursor.
        """
        url = f"{self.root_url}/api/queue/v1/task-group/{request.task_group_id}/list"
        params: dict[str, Any] = {"limit": request.limit}
        if request.cursor:
            params["continuationToken"] = request.cursor

        try:
            client = await self._get_client()
            response = await client.get(url, params=params)
            response.raise_for_status()
            body = response.json()
            tasks = [parse_task(entry) for entry in body.get("tasks", [])]
        except httpx.HTTPStatusError as e:
            return Err(f"Listing group {request.task_group_id} failed: HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return Err(f"Cannot reach {self.root_url}: {e}")
        except (KeyError, TypeError, ValueError) as e:
            return Err(f"Malformed task group listing: {e}")

        next_cursor = body.get("continuationToken")
        page_info = PageInfo(
            cursor=request.cursor or INITIAL_CURSOR,
            next_cursor=next_cursor,
            previous_cursor=request.previous_cursor,
            has_next_page=bool(next_cursor),
        )

        actions = None
        actions_error = None
        if request.cursor is None:
            actions_result = await self.fetch_actions(request.task_group_id, request.action_filter)
            if isinstance(actions_result, Err):
                logger.warning(actions_result.error)
                actions_error = actions_result.error
            else:
                actions = actions_result.value

        return Ok(
            Page(
                task_group_id=body.get("taskGroupId", request.task_group_id),
                tasks=tasks,
                page_info=page_info,
                actions=actions,
                actions_error=actions_error,
            )
        )

    async def fetch_actions(
        self,
        task_group_id: str,
        action_filter: ActionFilter | None = None,
    ) -> Result[list[ActionDescriptor], str]:
        """Fetch the actions advertised for a group.

        A group without an actions.json artifact has no actions.
        """
        action_filter = action_filter or ActionFilter()
        url = f"{self.root_url}/api/queue/v1/task/{task_group_id}/artifacts/public/actions.json"

        try:
            client = await self._get_client()
            response = await client.get(url)
            if response.status_code == 404:
                return Ok([])
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            return Err(f"Fetching actions of {task_group_id} failed: HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return Err(f"Cannot reach {self.root_url}: {e}")
        except ValueError as e:
            return Err(f"Malformed actions.json: {e}")

        actions: list[ActionDescriptor] = []
        for raw in body.get("actions", []) if isinstance(body, dict) else []:
            try:
                action = ActionDescriptor.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping malformed action in {task_group_id}: {e}")
                continue
            if action_filter.matches(action):
                actions.append(action)
        return Ok(actions)

    # =========================================================================
    # Action submission
    # =========================================================================

    async def submit(
        self,
        context: TaskContext,
        action: ActionDescriptor,
        input_document: Any,
    ) -> Result[str, Any]:
        """Run an action and return the id of the task it created.

        Only hook actions can be run over HTTP.
        """
        if action.kind != "hook" or not action.hook_group_id or not action.hook_id:
            return Err(f"Action '{action.name}' of kind '{action.kind}' cannot be triggered")

        url = (
            f"{self.root_url}/api/hooks/v1/hooks/"
            f"{action.hook_group_id}/{action.hook_id}/trigger"
        )
        payload = {
            "taskGroupId": context.task_group_id,
            "taskId": context.task_id,
            "input": input_document,
        }

        try:
            client = await self._get_client()
            response = await client.post(url, json=payload)
            response.raise_for_status()
            return Ok(response.json()["status"]["taskId"])
        except httpx.HTTPStatusError as e:
            return Err(f"Triggering '{action.name}' failed: HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return Err(f"Cannot reach {self.root_url}: {e}")
        except (KeyError, TypeError, ValueError) as e:
            return Err(f"Unexpected trigger response: {e}")
