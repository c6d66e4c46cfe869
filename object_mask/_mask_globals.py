"""
Constants shared by the value helpers and the mask engine.
"""

# The reserved mask key that applies to every field not explicitly listed
WILDCARD = "_"

# Separator used by dotted paths such as "foo.bar.0.baz"
PATH_SEPARATOR = "."

# object_hash() returns the canonical key itself when it is at most this long
MAX_HASH_KEY_SIZE = 40


class _Missing:
    """
    Marker for "no value here", distinct from None (which is a real value).
    Merging skips source values that are MISSING.
    """

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()
