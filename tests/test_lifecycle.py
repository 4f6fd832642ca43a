"""Tests for the pure action invocation transitions."""

from tasksync.domain.action import (
    ActionDescriptor,
    InvocationPhase,
    InvocationState,
    begin_submit,
    close_dialog,
    complete_submit,
    fail_submit,
    select_action,
)
from tasksync.domain.shared import Err, Ok

RETRIGGER = ActionDescriptor(name="retrigger", title="Retrigger")


def opened() -> InvocationState:
    return select_action(InvocationState(), RETRIGGER).value


def submitting() -> InvocationState:
    return begin_submit(opened()).value


def test_select_opens_dialog():
    state = opened()
    assert state.phase == InvocationPhase.OPEN
    assert state.action == RETRIGGER
    assert state.dialog_open


def test_select_refused_while_submitting():
    result = select_action(submitting(), ActionDescriptor(name="cancel"))
    assert isinstance(result, Err)


def test_begin_submit_clears_error_and_sets_loading():
    failed = fail_submit(submitting(), "boom").value
    retry = begin_submit(failed)

    assert isinstance(retry, Ok)
    assert retry.value.phase == InvocationPhase.SUBMITTING
    assert retry.value.error is None
    assert retry.value.loading


def test_begin_submit_requires_open_dialog():
    assert isinstance(begin_submit(InvocationState()), Err)
    assert isinstance(begin_submit(submitting()), Err)


def test_fail_keeps_dialog_open_with_error():
    error = RuntimeError("E")
    state = fail_submit(submitting(), error).value

    assert state.phase == InvocationPhase.ERROR
    assert state.error is error
    assert not state.loading
    assert state.dialog_open
    assert state.action == RETRIGGER


def test_complete_records_task_id():
    state = complete_submit(submitting(), "abc").value
    assert state.phase == InvocationPhase.COMPLETE
    assert state.result_task_id == "abc"
    assert not state.dialog_open


def test_fail_and_complete_require_submission():
    assert isinstance(fail_submit(opened(), "x"), Err)
    assert isinstance(complete_submit(opened(), "abc"), Err)


def test_close_resets_everything():
    failed = fail_submit(submitting(), "boom").value
    state = close_dialog(failed).value

    assert state == InvocationState()
    assert state.phase == InvocationPhase.IDLE


def test_close_refused_while_submitting():
    assert isinstance(close_dialog(submitting()), Err)
