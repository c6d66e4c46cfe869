"""
Stable structural hashing of nested values, for use as memoization or
identity keys.
"""

import hashlib

from .._mask_globals import MAX_HASH_KEY_SIZE
from .object_tools import is_sequence


def hash_key(value):
    """
    Builds the canonical string form of a value. Dict keys are sorted, and
    every nested token is prefixed by its length so that concatenating tokens
    can never be ambiguous.
    """
    if is_sequence(value):
        result = "ar"
        for item in value:
            item_key = hash_key(item)
            result += f"{len(item_key)} {item_key}"
        return result

    if isinstance(value, dict):
        result = "obj"
        for key in sorted(value, key=str):
            item_key = hash_key(value[key])
            key = str(key)
            result += f"{len(key)} {key}{len(item_key)} {item_key}"
        return result

    return type(value).__name__ + str(value)


def object_hash(obj, force_hash=False):
    """
    Returns a consistent hash of a value. Values that are structurally equal
    (same keys in any insertion order, same nested structure) hash the same.

    Short canonical keys are returned as they are, unless force_hash is set.
    Longer ones are replaced by their MD5 hex digest.
    """
    key = hash_key(obj)
    if len(key) <= MAX_HASH_KEY_SIZE and not force_hash:
        return key
    return hashlib.md5(key.encode("utf-8")).hexdigest()
