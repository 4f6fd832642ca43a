"""Tests for the tasksync CLI."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from fakes import GROUP_A
from tasksync import __version__
from tasksync.infrastructure import QueueClient
from tasksync.interfaces.cli import app
from tasksync.interfaces.cli.commands import action, group

ROOT_URL = "https://tc.example.com"
LIST_PATH = f"/api/queue/v1/task-group/{GROUP_A}/list"
ACTIONS_PATH = f"/api/queue/v1/task/{GROUP_A}/artifacts/public/actions.json"
TRIGGER_PATH = "/api/hooks/v1/hooks/project-releng/in-tree-action-1-generic/abc/trigger"

runner = CliRunner()


def listing_entry(task_id, state, name):
    return {
        "status": {"taskId": task_id, "taskGroupId": GROUP_A, "state": state},
        "task": {"taskGroupId": GROUP_A, "metadata": {"name": name}},
    }


PAGES = {
    None: {
        "taskGroupId": GROUP_A,
        "tasks": [listing_entry("t1", "completed", "build-linux")],
        "continuationToken": "c1",
    },
    "c1": {
        "taskGroupId": GROUP_A,
        "tasks": [listing_entry("t2", "failed", "test-windows")],
    },
}

ACTIONS = {
    "version": 1,
    "actions": [
        {
            "name": "backfill",
            "title": "Backfill",
            "kind": "hook",
            "context": [],
            "schema": {"type": "object", "properties": {"times": {"default": 2}}},
            "hookGroupId": "project-releng",
            "hookId": "in-tree-action-1-generic/abc",
        }
    ],
}


class FakeQueue:
    """MockTransport handler serving a small two-page group."""

    def __init__(self):
        self.list_status = 200
        self.actions_status = 200
        self.triggered = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == LIST_PATH:
            if self.list_status != 200:
                return httpx.Response(self.list_status, json={"message": "boom"})
            return httpx.Response(200, json=PAGES[request.url.params.get("continuationToken")])
        if path == ACTIONS_PATH:
            if self.actions_status != 200:
                return httpx.Response(self.actions_status, json={"message": "denied"})
            return httpx.Response(200, json=ACTIONS)
        if path == TRIGGER_PATH and request.method == "POST":
            self.triggered.append(json.loads(request.content))
            return httpx.Response(200, json={"status": {"taskId": "newTask"}})
        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def fake_queue(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKSYNC_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("TASKSYNC_ROOT_URL", ROOT_URL)
    monkeypatch.delenv("TASKSYNC_PAGE_SIZE", raising=False)

    handler = FakeQueue()

    def make_client(root_url, timeout):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return QueueClient(root_url, timeout, client=http)

    monkeypatch.setattr(group, "QueueClient", make_client)
    monkeypatch.setattr(action, "QueueClient", make_client)
    return handler


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestView:
    def test_shows_progress_and_all_pages(self, fake_queue):
        result = runner.invoke(app, ["view", GROUP_A])

        assert result.exit_code == 0
        assert "completed: 1" in result.output
        assert "failed: 1" in result.output
        assert "t1" in result.output
        assert "t2" in result.output
        assert "Partial results" not in result.output

    def test_status_and_search_filters(self, fake_queue):
        result = runner.invoke(app, ["group", "show", GROUP_A, "--status", "failed"])
        assert "test-windows" in result.output
        assert "build-linux" not in result.output

        result = runner.invoke(app, ["view", GROUP_A, "--search", "LINUX"])
        assert "build-linux" in result.output
        assert "test-windows" not in result.output

    def test_unknown_status_is_rejected(self, fake_queue):
        result = runner.invoke(app, ["view", GROUP_A, "--status", "sleeping"])
        assert result.exit_code != 0

    def test_query_failure_exits_nonzero(self, fake_queue):
        fake_queue.list_status = 500

        result = runner.invoke(app, ["view", GROUP_A])

        assert result.exit_code == 1
        assert "HTTP 500" in result.output

    def test_actions_failure_is_a_warning(self, fake_queue):
        fake_queue.actions_status = 403

        result = runner.invoke(app, ["view", GROUP_A])

        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert "HTTP 403" in result.output
        assert "t1" in result.output
        assert "t2" in result.output

    def test_viewed_group_appears_in_history(self, fake_queue):
        runner.invoke(app, ["view", GROUP_A])

        result = runner.invoke(app, ["recent"])
        assert GROUP_A in result.output

        runner.invoke(app, ["history", "clear"])
        result = runner.invoke(app, ["history", "list"])
        assert "No task groups viewed yet." in result.output


class TestActions:
    def test_lists_actions_with_default_input(self, fake_queue):
        result = runner.invoke(app, ["actions", GROUP_A])

        assert result.exit_code == 0
        assert "backfill: Backfill" in result.output
        assert "times: 2" in result.output

    def test_run_action_with_defaults(self, fake_queue):
        result = runner.invoke(app, ["run-action", GROUP_A, "backfill"])

        assert result.exit_code == 0
        assert "Created task newTask" in result.output
        assert f"{ROOT_URL}/tasks/newTask" in result.output
        assert fake_queue.triggered == [
            {"taskGroupId": GROUP_A, "taskId": None, "input": {"times": 2}}
        ]

    def test_run_action_with_input_file(self, fake_queue, tmp_path):
        input_file = tmp_path / "input.yml"
        input_file.write_text("times: 5\n", encoding="utf-8")

        result = runner.invoke(app, ["action", "run", GROUP_A, "backfill", "-i", str(input_file)])

        assert result.exit_code == 0
        assert fake_queue.triggered[0]["input"] == {"times": 5}

    def test_unknown_action(self, fake_queue):
        result = runner.invoke(app, ["run-action", GROUP_A, "nope"])

        assert result.exit_code == 1
        assert "Unknown action: nope" in result.output
        assert fake_queue.triggered == []
