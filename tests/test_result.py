"""Tests for the Result helpers."""

from tasksync.domain.shared import Err, Ok, is_err, is_ok


def test_ok_and_err_predicates():
    assert is_ok(Ok(1))
    assert not is_err(Ok(1))
    assert is_err(Err("boom"))
    assert not is_ok(Err("boom"))


def test_results_compare_by_value():
    assert Ok("abc") == Ok("abc")
    assert Err("x") != Ok("x")
