"""
Confirm flags arrive as strings: "false" must not count as confirmation.
"""
from garden_planner.utils.query_params import ensure_bool_query


def test_ensure_bool_query_false_strings() -> None:
    assert ensure_bool_query("false") is False
    assert ensure_bool_query("False") is False
    assert ensure_bool_query("0") is False
    assert ensure_bool_query("no") is False
    assert ensure_bool_query("") is False
    assert ensure_bool_query(None) is False


def test_ensure_bool_query_true_strings() -> None:
    assert ensure_bool_query("true") is True
    assert ensure_bool_query("TRUE") is True
    assert ensure_bool_query(" 1 ") is True
    assert ensure_bool_query("yes") is True


def test_ensure_bool_query_native_bool() -> None:
    assert ensure_bool_query(True) is True
    assert ensure_bool_query(False) is False
