"""
Dotted path helpers. A dotted path such as "foo.bar.0.baz" addresses a nested
location; numeric segments index into lists.
"""

import re

from .._mask_globals import MISSING, PATH_SEPARATOR
from .object_tools import child_keys, deep_equals, get_child, is_scalar, is_sequence, set_child

numeric_segment_regex = re.compile(r"^[0-9]+$")


def join_path(path, key):
    return f"{path}{PATH_SEPARATOR}{key}" if path else str(key)


def set_path(obj, path, value):
    """
    Sets the value at a given path, creating intermediate dicts where the
    path goes through a scalar or a missing key. Returns obj.
    """
    current = obj
    parts = path.split(PATH_SEPARATOR)
    for part in parts[:-1]:
        child = get_child(current, part)
        if is_scalar(child):
            child = {}
            set_child(current, part, child)
        current = child
    set_child(current, parts[-1], value)
    return obj


def delete_path(obj, path):
    """
    Deletes the value at a given path, if it exists. Returns obj.
    """
    current = obj
    parts = path.split(PATH_SEPARATOR)
    for part in parts[:-1]:
        current = get_child(current, part)
        if is_scalar(current):
            return obj

    last = parts[-1]
    if isinstance(current, dict):
        current.pop(last, None)
    elif isinstance(current, list) and get_child(current, last) is not MISSING:
        del current[int(last)]
    return obj


def get_path(obj, path, allow_skip_arrays=False):
    """
    Gets the value at a given path, or None if there's nothing there.

    If allow_skip_arrays is set and the path reaches a list with exactly one
    element while the next segment is not numeric, the list is stepped through
    as if it were its only element.
    """
    if path is None:
        return obj

    current = obj
    parts = path.split(PATH_SEPARATOR)
    index = 0
    while index < len(parts):
        if is_scalar(current):
            return None
        part = parts[index]
        if (
            allow_skip_arrays
            and is_sequence(current)
            and len(current) == 1
            and not numeric_segment_regex.match(part)
        ):
            # Don't consume the segment, just descend into the single element
            current = current[0]
            continue
        current = get_child(current, part, None)
        index += 1
    return current


def collapse_to_dotted(obj, include_redundant_levels=False, stop_at_arrays=False):
    """
    Converts a nested value into a one-level dict whose keys are dotted paths.

    { "foo": { "bar": "baz" } } becomes { "foo.bar": "baz" }. With
    include_redundant_levels, intermediate containers are included as well,
    e.g. { "foo": { "bar": "baz" }, "foo.bar": "baz" }. With stop_at_arrays,
    lists are kept as values rather than expanded to "foo.0", "foo.1", ...
    """
    result = {}
    if is_scalar(obj):
        return result

    def add_value(value, path):
        if is_scalar(value) or (stop_at_arrays and is_sequence(value)):
            result[path] = value
            return
        if include_redundant_levels and path:
            result[path] = value
        for key in child_keys(value):
            add_value(get_child(value, key), join_path(path, key))

    add_value(obj, "")
    return result


def match_dotted_object(doc, query):
    """
    Returns whether every dotted field of the query equals the corresponding
    field of the (also dotted) document.
    """
    if query is True:
        return doc is True
    if is_scalar(query) or is_scalar(doc):
        return deep_equals(query, doc)
    return all(deep_equals(get_child(doc, key, None), value) for key, value in query.items())
