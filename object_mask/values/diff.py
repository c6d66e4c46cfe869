"""
Structural diffs between nested values.

diff_objects() compares any number of values and returns a structure that
mirrors them, holding the differing values at each divergent leaf.
dotted_diff() compares two values and returns the shallowest dotted paths at
which they diverge.
"""

from .object_tools import child_map, deep_equals, is_scalar, scalar_equals
from .paths import join_path


def get_duplicates(values):
    """
    Returns the values that occur more than once, each reported once, in the
    order in which they were first repeated.
    """
    seen = set()
    duplicates = []
    for value in values:
        if value in seen:
            if value not in duplicates:
                duplicates.append(value)
        else:
            seen.add(value)
    return duplicates


def _all_keys(objects):
    # Concatenation of the keys of every object, duplicates included
    keys = []
    for obj in objects:
        keys.extend(child_map(obj).keys())
    return keys


def _has_non_null_scalars(values):
    return any(value is not None and is_scalar(value) for value in values)


def diff_objects(*objects):
    """
    Diffs n values.

    If any of them is a non-None scalar, they can't be compared field by
    field, so the result is simply the list of the values. Otherwise the
    result is a dict holding an entry for every key at which the values
    differ. That entry is either the list of the n values at that key, or,
    when those values are themselves collections sharing some keys, their
    own diff_objects() result. Keys at which all the values are equal are
    left out.

    diff_objects({"a": 1, "b": {"c": 2, "d": 3}}, {"a": 2, "b": {"c": 2, "d": 4}})
    returns {"a": [1, 2], "b": {"d": [3, 4]}}.
    """
    if _has_non_null_scalars(objects):
        return list(objects)

    maps = [child_map(obj) for obj in objects]
    result = {}
    for key in dict.fromkeys(_all_keys(objects)):
        values = [obj_map.get(key) for obj_map in maps]
        if all(deep_equals(value, values[0]) for value in values[1:]):
            continue

        if _has_non_null_scalars(values) or not get_duplicates(_all_keys(values)):
            result[key] = values
        else:
            result[key] = diff_objects(*values)
    return result


def dotted_diff(value1, value2):
    """
    Returns the sorted dotted paths of the shallowest branches at which the
    two values differ. Once a path is known to differ, nothing below it is
    reported. Two differing scalars give [""].
    """
    if is_scalar(value1) and is_scalar(value2):
        return [] if scalar_equals(value1, value2) else [""]
    return sorted(_add_dotted_diff_fields(set(), "", value1, value2))


def _add_dotted_diff_fields(field_set, field_path, value1, value2):
    if is_scalar(value1) or is_scalar(value2):
        if not (is_scalar(value1) and is_scalar(value2) and scalar_equals(value1, value2)):
            field_set.add(field_path)
        return field_set

    map1 = child_map(value1)
    map2 = child_map(value2)
    for key, child in map1.items():
        sub_path = join_path(field_path, key)
        if key in map2:
            _add_dotted_diff_fields(field_set, sub_path, child, map2[key])
        else:
            field_set.add(sub_path)
    for key in map2:
        if key not in map1:
            field_set.add(join_path(field_path, key))
    return field_set
