"""Shared pytest fixtures for tasksync tests."""

import pytest

from fakes import FakePageQuery, RecordingHistory, RecordingNavigator
from tasksync.application import TaskGroupView
from tasksync.config import Settings
from tasksync.infrastructure import EventBroker


@pytest.fixture
def settings(tmp_path):
    """Settings with small pages and a temporary config directory."""
    return Settings(
        root_url="https://tc.example.com",
        initial_page_size=2,
        page_size=2,
        config_dir=tmp_path,
    )


@pytest.fixture
def query():
    return FakePageQuery()


@pytest.fixture
def broker():
    return EventBroker()


@pytest.fixture
def history():
    return RecordingHistory()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def view(query, broker, history, settings):
    """A group view wired to fake collaborators."""
    return TaskGroupView(query, broker, history, settings)
