"""
Deep merging and in-place synchronization of nested values.

There are two merge flavours. merge_light() simply overwrites leaves and is
the fast path. merge_heavy() supports a customizer callback and being called
as a reducer callback (accumulator, value, index, collection). merge() picks
the right one based on its arguments.
"""

from collections import namedtuple

from .._mask_globals import MISSING
from .object_tools import (
    child_keys,
    get_child,
    is_plain_object,
    is_scalar,
    is_sequence,
    is_terminal,
    scalar_equals,
    set_child,
)
from .paths import join_path


def _is_reducer_call(sources):
    # When used as a reducer callback, the sources are (value, index, collection),
    # and the collection contains the value being reduced
    if len(sources) < 2 or not isinstance(sources[-1], list):
        return False
    return any(item is sources[0] for item in sources[-1])


def merge(target, *sources):
    """
    Merges the sources into target, left to right, and returns the result.
    If the last argument is a callable, it is used as a customizer (see
    merge_heavy()).
    """
    if (sources and callable(sources[-1])) or _is_reducer_call(sources):
        return merge_heavy(target, *sources)
    return merge_light(target, *sources)


def _empty_like(value):
    return [None] * len(value) if is_sequence(value) else {}


def merge_light(target, *sources):
    """
    The fast version of merge(): no customizer support. Source values that
    are MISSING are skipped; anything else overwrites the target at the leaves.
    """
    for source in sources:
        if is_terminal(source):
            target = source
            continue

        if is_terminal(target) or isinstance(target, list) != isinstance(source, list):
            target = _empty_like(source)
        for key in child_keys(source):
            value = get_child(source, key)
            if value is not MISSING:
                set_child(target, key, merge_light(get_child(target, key), value))
    return target


def merge_heavy(target, *sources):
    """
    Merges the sources into target, in place.

    If the last source is callable, it is a customizer called as
    customizer(target_value, source_value, key, target, source), with
    target_value being MISSING when the target has no such key. Returning
    anything other than None replaces the default merge for that key.
    """
    sources = list(sources)
    customizer = None
    if sources and callable(sources[-1]):
        customizer = sources.pop()

    if _is_reducer_call(sources):
        _base_merge_heavy(target, sources[0], customizer)
    else:
        for source in sources:
            _base_merge_heavy(target, source, customizer)
    return target


def _base_merge_heavy(target, source, customizer):
    if is_scalar(target) or is_scalar(source):
        return target

    for key in child_keys(source):
        source_value = get_child(source, key)
        if not is_scalar(source_value):
            _base_merge_deep_heavy(target, source, key, customizer)
            continue

        value = get_child(target, key)
        result = customizer(value, source_value, key, target, source) if customizer else None
        use_source = result is None
        if use_source:
            result = source_value

        has_value = is_sequence(source) or result is not MISSING
        both_nan = result != result and value != value
        is_new_value = not scalar_equals(result, value) and not both_nan
        if has_value and (use_source or is_new_value):
            set_child(target, key, result)
    return target


def _base_merge_deep_heavy(target, source, key, customizer):
    source_value = get_child(source, key)
    value = get_child(target, key)
    result = customizer(value, source_value, key, target, source) if customizer else None
    recurse = result is None

    if recurse:
        if is_sequence(source_value):
            result = value if isinstance(value, list) else []
        elif is_plain_object(source_value):
            result = value if isinstance(value, dict) else {}
        else:
            # Some other kind of container: take it as a whole
            recurse = False
            result = source_value if is_scalar(value) else value

    if recurse:
        set_child(target, key, _base_merge_heavy(result, source_value, customizer))
    elif result is not value:
        set_child(target, key, result)


# Result of synchronizing a sub-value: either unchanged, or changed to `value`
SyncResult = namedtuple("SyncResult", ["changed", "value"])
UNCHANGED = SyncResult(False, None)


def sync_object(to_obj, from_obj, on_field=None, on_change=None):
    """
    Synchronizes to_obj to look like from_obj, in place, replacing whole
    sub-objects only when necessary. Returns to_obj.

    on_field(field, to_value, from_value, parent) is called for every field
    traversed. If it returns False, the field is left alone and not descended
    into. on_change(field, to_value, from_value, parent) is called for every
    field that is modified. Fields are given as dotted paths.
    """

    def notify_change(path, to_value, from_value, parent):
        if on_change:
            on_change(path, to_value, from_value, parent)

    def sync_value(to_value, from_value, parent, path):
        if parent is not None and on_field and on_field(path, to_value, from_value, parent) is False:
            return UNCHANGED

        if is_scalar(to_value) and is_scalar(from_value):
            if scalar_equals(from_value, to_value):
                return UNCHANGED
            return SyncResult(True, from_value)

        if is_scalar(to_value) or is_scalar(from_value):
            # Exactly one of them is a scalar, so replace outright
            return SyncResult(True, from_value)

        if isinstance(to_value, list) and isinstance(from_value, list):
            return sync_list(to_value, from_value, path)

        if isinstance(to_value, dict) and isinstance(from_value, dict):
            sync_dict(to_value, from_value, path)
            return UNCHANGED

        # Type mismatch between the two containers
        return SyncResult(True, from_value)

    def sync_list(to_list, from_list, path):
        if len(to_list) == len(from_list):
            # Same length, so sync each element in place
            for index, from_item in enumerate(from_list):
                item_path = join_path(path, index)
                result = sync_value(to_list[index], from_item, to_list, item_path)
                if result.changed:
                    notify_change(item_path, to_list[index], from_item, to_list)
                    to_list[index] = result.value
            return UNCHANGED

        # Different lengths: build a new list
        for index, from_item in enumerate(from_list):
            item_path = join_path(path, index)
            to_item = to_list[index] if index < len(to_list) else None
            result = sync_value(to_item, from_item, to_list, item_path)
            if result.changed or index >= len(to_list):
                notify_change(item_path, to_item, from_item, to_list)
        return SyncResult(True, list(from_list))

    def sync_dict(to_dict, from_dict, path):
        for key, from_item in from_dict.items():
            sub_path = join_path(path, key)
            if key not in to_dict:
                # Brand new field
                if on_field and on_field(sub_path, None, from_item, to_dict) is False:
                    continue
                notify_change(sub_path, None, from_item, to_dict)
                to_dict[key] = from_item
                continue
            result = sync_value(to_dict[key], from_item, to_dict, sub_path)
            if result.changed:
                notify_change(sub_path, to_dict[key], from_item, to_dict)
                to_dict[key] = result.value

        # Now delete fields that are not in from_dict
        for key in [key for key in to_dict if key not in from_dict]:
            sub_path = join_path(path, key)
            if on_field and on_field(sub_path, to_dict[key], None, to_dict) is False:
                continue
            notify_change(sub_path, to_dict[key], None, to_dict)
            del to_dict[key]

    sync_value(to_obj, from_obj, None, "")
    return to_obj
