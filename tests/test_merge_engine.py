"""Tests for the identity ledger and merge engine."""

import pytest

from fakes import GROUP_A, make_event, make_task
from tasksync.application.merge_engine import IdentityLedger, MergeEngine
from tasksync.domain.task import PageInfo, TaskState


@pytest.fixture
def engine():
    engine = MergeEngine()
    engine.reset(GROUP_A)
    return engine


class TestIdentityLedger:
    """Test the ledger of merged task ids."""

    def test_add_assigns_positions_in_order(self):
        ledger = IdentityLedger()
        assert ledger.add("t1") == 0
        assert ledger.add("t2") == 1
        assert ledger.position("t2") == 1
        assert "t1" in ledger
        assert len(ledger) == 2

    def test_clear(self):
        ledger = IdentityLedger()
        ledger.add("t1")
        ledger.clear()
        assert "t1" not in ledger
        assert ledger.position("t1") is None
        assert ledger.ids() == set()


class TestMergePage:
    """Test merging page batches."""

    def test_appends_in_arrival_order(self, engine):
        engine.merge_page([make_task("t2"), make_task("t1")], PageInfo())
        engine.merge_page([make_task("t3")], PageInfo())

        assert engine.collection.task_ids() == ["t2", "t1", "t3"]
        assert engine.ledger.ids() == {"t1", "t2", "t3"}

    def test_drops_already_merged_tasks(self, engine):
        engine.merge_page([make_task("t1", "running")], PageInfo())
        engine.merge_page([make_task("t1", "completed"), make_task("t2")], PageInfo())

        assert engine.collection.task_ids() == ["t1", "t2"]
        # the page copy of t1 does not overwrite the merged one
        assert engine.collection.get("t1").state == TaskState.RUNNING

    def test_duplicates_within_one_page(self, engine):
        engine.merge_page([make_task("t1"), make_task("t1")], PageInfo())
        assert engine.collection.task_ids() == ["t1"]

    def test_replaces_page_info(self, engine):
        info = PageInfo(cursor="c1", next_cursor="c2", has_next_page=True)
        engine.merge_page([], info)
        assert engine.collection.page_info == info

    def test_redelivered_page_is_idempotent(self, engine):
        page = [make_task("t1"), make_task("t2")]
        engine.merge_page(page, PageInfo())
        before = engine.collection
        engine.merge_page(page, PageInfo())

        assert engine.collection.tasks == before.tasks

    def test_earlier_collection_is_not_mutated(self, engine):
        engine.merge_page([make_task("t1")], PageInfo())
        snapshot = engine.collection
        engine.merge_page([make_task("t2")], PageInfo())
        engine.merge_live_update(make_event("t1", "running"))

        assert snapshot.task_ids() == ["t1"]
        assert snapshot.get("t1").state == TaskState.PENDING


class TestMergeLiveUpdate:
    """Test merging push events."""

    def test_patches_state_of_known_task_in_place(self, engine):
        engine.merge_page([make_task("t1"), make_task("t2", name="lint")], PageInfo())
        engine.merge_live_update(make_event("t2", "failed"))

        task = engine.collection.get("t2")
        assert engine.collection.task_ids() == ["t1", "t2"]
        assert task.state == TaskState.FAILED
        assert task.name == "lint"

    def test_appends_unknown_task_from_payload(self, engine):
        payload = {"taskGroupId": GROUP_A, "metadata": {"name": "test-linux64"}}
        engine.merge_live_update(make_event("t9", "pending", payload=payload))

        task = engine.collection.get("t9")
        assert task.name == "test-linux64"
        assert task.state == TaskState.PENDING
        assert "t9" in engine.ledger

    def test_unknown_task_without_payload_gets_placeholder(self, engine, caplog):
        engine.merge_live_update(make_event("t9", "running"))

        task = engine.collection.get("t9")
        assert task.state == TaskState.RUNNING
        assert task.task_group_id == GROUP_A
        assert task.name == ""
        assert "no payload" in caplog.text

    def test_latest_event_wins(self, engine):
        engine.merge_page([make_task("t1")], PageInfo())
        for state in ("running", "failed", "pending", "completed"):
            engine.merge_live_update(make_event("t1", state))

        assert engine.collection.get("t1").state == TaskState.COMPLETED
        assert len(engine.collection) == 1

    def test_event_then_page_does_not_duplicate(self, engine):
        engine.merge_live_update(make_event("t1", "running", payload={"metadata": {"name": "a"}}))
        engine.merge_page([make_task("t0"), make_task("t1")], PageInfo())

        assert engine.collection.task_ids() == ["t1", "t0"]


class TestInterleavedScenario:
    """Pages and push events interleaved for the same ids."""

    def test_page_event_event_page(self, engine):
        engine.merge_page([make_task("t1", "pending")], PageInfo())
        engine.merge_live_update(make_event("t1", "running"))
        engine.merge_live_update(
            make_event("t2", "pending", payload={"metadata": {"name": "t2"}}, kind="tasksPending")
        )
        engine.merge_page([make_task("t1", "pending"), make_task("t2", "pending")], PageInfo())

        collection = engine.collection
        assert [(t.task_id, t.state) for t in collection.tasks] == [
            ("t1", TaskState.RUNNING),
            ("t2", TaskState.PENDING),
        ]
        assert engine.ledger.ids() == {"t1", "t2"}


class TestReset:
    def test_reset_clears_ledger_and_collection(self, engine):
        engine.merge_page([make_task("t1")], PageInfo(cursor="c1", has_next_page=True))
        engine.reset("other-group")

        assert len(engine.ledger) == 0
        assert len(engine.collection) == 0
        assert engine.collection.task_group_id == "other-group"
        assert engine.collection.page_info == PageInfo()
