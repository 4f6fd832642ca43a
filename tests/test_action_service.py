"""Tests for the action lifecycle controller."""

import asyncio

import pytest

from fakes import GROUP_A, RecordingNavigator, RecordingSubmitter
from tasksync.application import ActionLifecycleController
from tasksync.domain.action import ActionDescriptor, InvocationPhase, build_catalog
from tasksync.domain.shared import Err, Ok


@pytest.fixture
def catalog():
    return build_catalog(
        GROUP_A,
        [
            ActionDescriptor(name="retrigger", title="Retrigger"),
            ActionDescriptor(
                name="backfill",
                title="Backfill",
                schema={"type": "object", "properties": {"times": {"default": 2}}},
            ),
        ],
    )


def make_controller(catalog, *results):
    submitter = RecordingSubmitter(*results)
    navigator = RecordingNavigator()
    return ActionLifecycleController(catalog, submitter, navigator), submitter, navigator


class TestSelect:
    def test_unknown_action(self, catalog):
        controller, _, _ = make_controller(catalog)
        result = controller.select("nope")

        assert isinstance(result, Err)
        assert controller.state.phase == InvocationPhase.IDLE

    def test_select_opens_without_submitting(self, catalog):
        controller, submitter, _ = make_controller(catalog)
        controller.select("retrigger")

        assert controller.state.phase == InvocationPhase.OPEN
        assert controller.state.action.name == "retrigger"
        assert submitter.calls == []


class TestSubmit:
    @pytest.mark.asyncio
    async def test_rejection_keeps_dialog_open(self, catalog):
        error = RuntimeError("E")
        controller, _, navigator = make_controller(catalog, Err(error))
        controller.select("retrigger")

        result = await controller.submit()

        assert isinstance(result, Err)
        state = controller.state
        assert state.phase == InvocationPhase.ERROR
        assert state.error is error
        assert state.loading is False
        assert state.dialog_open
        assert navigator.visited == []

    @pytest.mark.asyncio
    async def test_success_closes_and_navigates_once(self, catalog):
        controller, _, navigator = make_controller(catalog, Ok("abc"))
        controller.select("retrigger")

        result = await controller.submit()

        assert result == Ok("abc")
        assert controller.state.phase == InvocationPhase.IDLE
        assert not controller.state.dialog_open
        assert navigator.visited == ["abc"]

    @pytest.mark.asyncio
    async def test_retry_after_error_without_reselecting(self, catalog):
        controller, submitter, navigator = make_controller(catalog, Err("E"), Ok("abc"))
        controller.select("retrigger")

        await controller.submit()
        result = await controller.submit()

        assert result == Ok("abc")
        assert len(submitter.calls) == 2
        assert navigator.visited == ["abc"]

    @pytest.mark.asyncio
    async def test_submits_parsed_input_with_group_context(self, catalog):
        controller, submitter, _ = make_controller(catalog, Ok("abc"))
        controller.select("backfill")

        await controller.submit()

        context, action, document = submitter.calls[0]
        assert context.task_group_id == GROUP_A
        assert context.task_id is None
        assert action.name == "backfill"
        assert document == {"times": 2}

    @pytest.mark.asyncio
    async def test_edited_input_is_submitted(self, catalog):
        controller, submitter, _ = make_controller(catalog, Ok("abc"))
        controller.select("backfill")
        controller.update_input("backfill", "times: 7\n")

        await controller.submit()

        assert submitter.calls[0][2] == {"times": 7}

    @pytest.mark.asyncio
    async def test_invalid_yaml_is_a_submission_error(self, catalog):
        controller, submitter, _ = make_controller(catalog)
        controller.select("retrigger")
        controller.update_input("retrigger", "times: [unclosed")

        result = await controller.submit()

        assert isinstance(result, Err)
        assert submitter.calls == []
        assert controller.state.phase == InvocationPhase.ERROR

    @pytest.mark.asyncio
    async def test_collaborator_exception_becomes_error(self, catalog):
        class ExplodingSubmitter:
            async def submit(self, context, action, input_document):
                raise ConnectionError("gone")

        controller = ActionLifecycleController(catalog, ExplodingSubmitter(), RecordingNavigator())
        controller.select("retrigger")

        result = await controller.submit()

        assert isinstance(result.error, ConnectionError)
        assert controller.state.phase == InvocationPhase.ERROR

    @pytest.mark.asyncio
    async def test_submit_without_selection(self, catalog):
        controller, submitter, _ = make_controller(catalog)
        result = await controller.submit()

        assert isinstance(result, Err)
        assert submitter.calls == []


class TestSingleInvocation:
    @pytest.mark.asyncio
    async def test_selection_disabled_while_submitting(self, catalog):
        controller, submitter, _ = make_controller(catalog, Ok("abc"))
        submitter.gate = asyncio.Event()
        controller.select("retrigger")

        pending = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)

        assert controller.state.phase == InvocationPhase.SUBMITTING
        assert not controller.selectable
        assert isinstance(controller.select("backfill"), Err)
        assert isinstance(controller.close(), Err)

        submitter.gate.set()
        await pending
        assert controller.selectable

    def test_close_clears_selection(self, catalog):
        controller, _, _ = make_controller(catalog)
        controller.select("retrigger")
        controller.close()

        assert controller.state.phase == InvocationPhase.IDLE
        assert controller.state.action is None
