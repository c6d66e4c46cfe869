"""
General helpers for the untyped value model used throughout object_mask.

A value is either a map (dict), a sequence (list or tuple) or a scalar.
Everything that is not a dict, list or tuple is a scalar: None, numbers,
strings, booleans, dates and callables all stop the recursion.

None of the recursive helpers detect cycles. Passing a self-referencing
structure will exhaust the stack and raise RecursionError.
"""

import datetime
import math

from .._mask_globals import MISSING


def is_scalar(value):
    return not isinstance(value, (dict, list, tuple))


def is_sequence(value):
    return isinstance(value, (list, tuple))


def is_plain_object(value):
    return type(value) is dict


def is_terminal(value):
    """
    Terminal values are not descended into when copying: every scalar, plus
    any container that is not a plain dict or list (tuples, dict subclasses).
    """
    return not (type(value) is dict or type(value) is list)


def is_empty(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return False
    if value is None or value is False or value is MISSING:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def child_keys(value):
    """
    The keys of a container: dict keys, or positional indices of a sequence.
    Scalars have no keys.
    """
    if isinstance(value, dict):
        return list(value.keys())
    if is_sequence(value):
        return list(range(len(value)))
    return []


def child_map(value):
    """
    Returns a dict from string key to child value, so that dicts and
    sequences can be walked uniformly ("0", "1", ... for sequences).
    """
    if isinstance(value, dict):
        return {str(key): child for key, child in value.items()}
    if is_sequence(value):
        return {str(index): child for index, child in enumerate(value)}
    return {}


def get_child(value, key, default=MISSING):
    if isinstance(value, dict):
        return value.get(key, default)
    if is_sequence(value):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return default
        if 0 <= index < len(value):
            return value[index]
    return default


def set_child(value, key, child):
    """
    Sets a child of a dict or list. Lists are padded with None when the index
    is past the end.
    """
    if isinstance(value, list):
        index = int(key)
        if index >= len(value):
            value.extend([None] * (index + 1 - len(value)))
        value[index] = child
    else:
        value[key] = child


def scalar_equals(a, b):
    # Booleans and numbers are distinct kinds, even though True == 1 in Python
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if isinstance(a, datetime.datetime) and isinstance(b, datetime.datetime):
        # Compare instants. Naive and aware datetimes can't be compared, so they differ
        try:
            return a == b
        except TypeError:
            return False
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return False
    return a is b or a == b


def deep_equals(a, b):
    """
    Checks for deep equality between two values. Dicts are compared key by
    key regardless of insertion order, sequences element by element, and
    scalars with scalar_equals().
    """
    if is_scalar(a) or is_scalar(b):
        if is_scalar(a) and is_scalar(b):
            return scalar_equals(a, b)
        return False

    if is_sequence(a) and is_sequence(b):
        if len(a) != len(b):
            return False
        return all(deep_equals(x, y) for x, y in zip(a, b))

    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(deep_equals(a[key], b[key]) for key in a)

    # One is a map and the other a sequence
    return False


def deep_copy(value):
    """
    Returns a deep copy of the given value. Plain dicts and lists are copied
    recursively, tuples are rebuilt from copies of their items, and anything
    else is returned as is.
    """
    if isinstance(value, tuple):
        return tuple(deep_copy(item) for item in value)
    if is_terminal(value):
        return value
    if type(value) is list:
        return [deep_copy(item) for item in value]
    return {key: deep_copy(child) for key, child in value.items()}


def sanitize_date(value):
    """
    Converts a datetime, an ISO 8601 string, a number of milliseconds since
    the epoch, or a dict with a "date" field into a datetime. Returns None for
    anything else.
    """
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)
    if isinstance(value, dict) and value.get("date"):
        return sanitize_date(value["date"])
    return None
