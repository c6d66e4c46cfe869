"""
Unit tests for merge() and sync_object()
"""

from object_mask._mask_globals import MISSING
from object_mask.values.merge import merge, merge_heavy, merge_light, sync_object


def test_merge_nested():
    result = merge({"a": 1, "b": {"c": 1}}, {"b": {"d": 2}}, {"e": 3})
    assert result == {"a": 1, "b": {"c": 1, "d": 2}, "e": 3}


def test_merge_skips_missing_but_not_none():
    assert merge({"a": 1}, {"a": MISSING, "b": 2}) == {"a": 1, "b": 2}
    assert merge({"a": 1}, {"a": None}) == {"a": None}


def test_merge_lists_by_position():
    assert merge([1, 2, 3], [4]) == [4, 2, 3]
    assert merge({"l": [1]}, {"l": [None, 2]}) == {"l": [None, 2]}


def test_merge_terminal_source_replaces():
    assert merge({"a": 1}, 5) == 5
    assert merge({"a": [1, 2]}, {"a": {"x": 1}}) == {"a": {"x": 1}}


def test_merge_light_copies_nested_sources():
    source = {"a": {"b": {"c": 1}}}
    result = merge_light({}, source)
    assert result == source
    assert result["a"] is not source["a"]


def test_merge_with_customizer():
    def concat_lists(target_value, source_value, *rest):
        if isinstance(target_value, list):
            return target_value + source_value
        return None

    assert merge({"a": [1], "b": 1}, {"a": [2], "b": 2}, concat_lists) == {"a": [1, 2], "b": 2}


def test_customizer_on_scalars():
    def add_a(target_value, source_value, key, *rest):
        return target_value + source_value if key == "a" else None

    assert merge({"a": 1, "b": 2}, {"a": 10, "b": 20}, add_a) == {"a": 11, "b": 20}


def test_customizer_sees_missing_target_values():
    seen = []

    def record(target_value, source_value, key, target, source):
        seen.append((key, target_value))

    merge_heavy({"a": 1}, {"a": 2, "b": 3}, record)
    assert seen == [("a", 1), ("b", MISSING)]


def test_merge_as_reducer():
    items = [{"a": 1}, {"b": {"c": 2}}, {"b": {"d": 3}}]
    acc = {}
    for index, item in enumerate(items):
        acc = merge(acc, item, index, items)
    assert acc == {"a": 1, "b": {"c": 2, "d": 3}}


def test_merge_heavy_builds_fresh_containers():
    source = {"a": {"b": {"c": 1}}, "l": [1, 2]}
    result = merge_heavy({}, source)
    assert result == source
    assert result["a"] is not source["a"]
    assert result["l"] is not source["l"]


def _sync_with_changes(to_obj, from_obj, on_field=None):
    changes = []
    sync_object(to_obj, from_obj, on_field, lambda field, *rest: changes.append(field))
    return changes


def test_sync_object():
    to_obj = {"a": 1, "b": {"c": 2}, "d": [1, 2]}
    from_obj = {"a": 1, "b": {"c": 3}, "d": [1, 2, 3], "e": 4}
    b = to_obj["b"]

    changes = _sync_with_changes(to_obj, from_obj)
    assert changes == ["b.c", "d.2", "d", "e"]
    assert to_obj == from_obj
    # Sub-objects are updated in place rather than replaced
    assert to_obj["b"] is b


def test_sync_object_same_length_lists_in_place():
    to_obj = {"l": [{"x": 1}, 2]}
    element = to_obj["l"][0]
    changes = _sync_with_changes(to_obj, {"l": [{"x": 5}, 2]})
    assert changes == ["l.0.x"]
    assert to_obj["l"][0] is element
    assert element == {"x": 5}


def test_sync_object_deletes_fields():
    to_obj = {"x": 1, "y": 2}
    assert _sync_with_changes(to_obj, {"x": 1}) == ["y"]
    assert to_obj == {"x": 1}


def test_sync_object_replaces_mismatched_types():
    to_obj = {"a": {"b": 1}}
    assert _sync_with_changes(to_obj, {"a": [1]}) == ["a"]
    assert to_obj == {"a": [1]}


def test_sync_object_on_field_can_skip():
    to_obj = {"a": 1, "b": {"c": 2}}
    changes = _sync_with_changes(to_obj, {"a": 2, "b": {"c": 3}}, lambda field, *rest: field != "b")
    assert changes == ["a"]
    assert to_obj == {"a": 2, "b": {"c": 2}}
