"""Tests for the in-process event broker."""

from fakes import GROUP_A, GROUP_B, make_event
from tasksync.infrastructure import EventBroker


def test_delivers_to_matching_group_and_kind():
    broker = EventBroker()
    received = []
    broker.subscribe(GROUP_A, ["tasksRunning"], received.append)

    assert broker.publish(make_event("t1", "running")) == 1
    assert broker.publish(make_event("t1", "failed", kind="tasksFailed")) == 0
    assert broker.publish(make_event("t2", "running", group=GROUP_B)) == 0
    assert [e.task_id for e in received] == ["t1"]


def test_unsubscribe_stops_delivery():
    broker = EventBroker()
    received = []
    handle = broker.subscribe(GROUP_A, ["tasksRunning"], received.append)

    broker.unsubscribe(handle)
    broker.unsubscribe(handle)

    assert broker.publish(make_event("t1", "running")) == 0
    assert broker.active_subscriptions() == []
