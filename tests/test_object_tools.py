import datetime

from object_mask._mask_globals import MISSING
from object_mask.values.object_tools import (
    child_map,
    deep_copy,
    deep_equals,
    get_child,
    is_empty,
    is_scalar,
    is_terminal,
    sanitize_date,
    set_child,
)


def test_is_scalar():
    for value in (None, 1, 1.5, "s", True, datetime.datetime.now(), len):
        assert is_scalar(value)
    for value in ({}, [], ()):
        assert not is_scalar(value)


def test_is_terminal():
    assert is_terminal(5)
    assert is_terminal((1, 2))
    assert not is_terminal({})
    assert not is_terminal([])


def test_is_empty():
    for value in (None, False, MISSING, "", [], {}):
        assert is_empty(value)
    for value in (0, 0.0, "a", [0], {"a": None}):
        assert not is_empty(value)


def test_deep_equals():
    assert deep_equals({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
    assert deep_equals({"a": 1, "b": 2}, {"b": 2, "a": 1})
    assert deep_equals((1, 2), [1, 2])
    assert not deep_equals({"a": 1}, {"a": 1, "b": None})
    assert not deep_equals([1, 2], [1, 2, 3])
    assert not deep_equals([], {})
    assert not deep_equals({"a": 1}, 1)


def test_scalar_equality_rules():
    assert deep_equals(1, 1.0)
    assert not deep_equals(True, 1)
    assert not deep_equals(0, False)
    assert not deep_equals(float("nan"), float("nan"))
    assert deep_equals(None, None)
    assert not deep_equals(None, 0)


def test_datetimes_compare_by_instant():
    utc = datetime.datetime(2020, 1, 1, 12, tzinfo=datetime.timezone.utc)
    plus_one = datetime.datetime(2020, 1, 1, 13, tzinfo=datetime.timezone(datetime.timedelta(hours=1)))
    assert deep_equals({"when": utc}, {"when": plus_one})
    assert not deep_equals(utc, datetime.datetime(2020, 1, 1, 12))


def test_deep_copy():
    when = datetime.datetime.now()
    original = {"a": [1, {"b": 2}], "c": ({"d": 3},), "when": when}
    copied = deep_copy(original)
    assert deep_equals(copied, original)
    assert copied["a"] is not original["a"]
    assert copied["a"][1] is not original["a"][1]
    assert isinstance(copied["c"], tuple)
    assert copied["c"][0] is not original["c"][0]
    assert copied["when"] is when


def test_children():
    assert child_map([5, 6]) == {"0": 5, "1": 6}
    assert child_map(5) == {}
    assert get_child([1], "0") == 1
    assert get_child([1], "x") is MISSING
    assert get_child([1], 3) is MISSING
    assert get_child({"a": 1}, "b", None) is None

    values = []
    set_child(values, 2, "x")
    assert values == [None, None, "x"]


def test_sanitize_date():
    utc = datetime.timezone.utc
    assert sanitize_date(datetime.date(2020, 1, 2)) == datetime.datetime(2020, 1, 2)
    assert sanitize_date(86400000) == datetime.datetime(1970, 1, 2, tzinfo=utc)
    assert sanitize_date("2020-01-02T03:04:05Z") == datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=utc)
    assert sanitize_date({"date": "2020-01-02"}) == datetime.datetime(2020, 1, 2)
    assert sanitize_date("") is None
    assert sanitize_date({"when": "2020-01-02"}) is None
