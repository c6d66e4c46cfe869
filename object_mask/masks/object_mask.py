"""
ObjectMask represents a mask, or whitelist, of fields on an object. The mask
is stored as a tree that looks like this:

    { "foo": True, "bar": { "baz": True } }

This mask applies to the fields "foo" and "bar.baz" of an object. Wildcards
can also be used:

    { "foo": False, "bar": False, "_": True }

This allows every field except foo and bar. Lists in the masked object are
treated as dicts keyed by position, so a list holding a single mask is the
same as a wildcard. These two masks are equivalent, and the first is turned
into the second when the mask is created:

    { "foo": [ { "bar": True, "baz": True } ] }
    { "foo": { "_": { "bar": True, "baz": True } } }

Masks are not validated when created. Call validate() on masks that come
from an untrusted source.
"""

from .._mask_globals import PATH_SEPARATOR, WILDCARD
from ..values.object_tools import child_keys, deep_copy, deep_equals, get_child, is_scalar, is_sequence
from ..values.paths import join_path, set_path
from .mask_algebra import (
    InvalidMaskOperationError,
    add_mask,
    and_mask,
    invert,
    is_truthy,
    resolve_key,
    subtract,
    underscorize_lists,
    validate_mask,
)

# Returned by _filter_deep() for values that are masked out entirely
_MASKED_OUT = object()


def _tree_of(mask):
    # Raw trees are canonicalized (and copied) before the algebra sees them
    return mask.mask if isinstance(mask, ObjectMask) else ObjectMask(mask).mask


class ObjectMask:
    def __init__(self, mask):
        if isinstance(mask, ObjectMask):
            self.mask = deep_copy(mask.mask)
        else:
            self.mask = underscorize_lists(deep_copy(mask))

    def __repr__(self):
        return f"ObjectMask({self.mask!r})"

    def __eq__(self, other):
        if not isinstance(other, ObjectMask):
            return NotImplemented
        return deep_equals(self.mask, other.mask)

    @classmethod
    def from_field_list(cls, fields):
        """
        Creates a mask that allows each of the given dotted fields.
        """
        tree = {}
        # Sort long to short, so that more specific fields don't clobber less specific ones
        for field in sorted(fields, key=len, reverse=True):
            set_path(tree, field, True)
        return cls(tree)

    @classmethod
    def add_masks(cls, *masks):
        """
        Combines masks such that the result allows the fields allowed by any
        of them.
        """
        result = False
        for mask in masks:
            result = add_mask(result, _tree_of(mask))
            if result is True:
                return cls(True)
        return cls(result if is_truthy(result) else False)

    @classmethod
    def and_masks(cls, *masks):
        """
        Combines masks such that the result only allows the fields allowed by
        all of them.
        """
        result = True
        for mask in masks:
            result = and_mask(result, _tree_of(mask))
            if result is False:
                return cls(False)
        return cls(result if is_truthy(result) else False)

    @classmethod
    def subtract_masks(cls, minuend, subtrahend):
        """
        Returns a mask allowing the fields allowed by the minuend but not by
        the subtrahend. Neither argument is modified.

        Raises InvalidMaskOperationError on an attempt to subtract non-boolean
        scalars.
        """
        return cls(minuend).subtract_mask(subtrahend)

    @classmethod
    def invert_mask(cls, mask):
        """
        Returns a mask that disallows every field the given mask allows, and
        allows every field it disallows.
        """
        return cls(invert(_tree_of(mask)))

    @staticmethod
    def is_object_mask(obj):
        return isinstance(obj, ObjectMask)

    def subtract_mask(self, mask):
        """
        Subtracts a mask from this one, in place. Returns self. If the
        subtraction raises, this mask is left unchanged.
        """
        self.mask = subtract(deep_copy(self.mask), _tree_of(mask))
        return self

    def add_field(self, path):
        """
        Makes the mask allow the given dotted field. Does nothing if the field
        is already allowed. Returns self.
        """
        if self.check_path(path):
            return self

        if is_scalar(self.mask):
            self.mask = {}
        node = self.mask
        parts = path.split(PATH_SEPARATOR)
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                wildcard = node.get(WILDCARD)
                if part not in node and isinstance(wildcard, dict):
                    # Keep whatever the wildcard allowed below this field
                    child = deep_copy(wildcard)
                else:
                    child = {}
                node[part] = child
            node = child
        node[parts[-1]] = True
        return self

    def remove_field(self, path):
        """
        Makes the mask disallow the given dotted field. Does nothing if the
        field is already disallowed. Returns self.

        Wildcards can't be removed, only overridden for specific fields, so
        this raises InvalidMaskOperationError if the path is or ends with a
        wildcard.
        """
        if path == WILDCARD or path.endswith(PATH_SEPARATOR + WILDCARD):
            raise InvalidMaskOperationError("Attempt to remove wildcard")
        if not self.check_path(path):
            return self

        if self.mask is True:
            self.mask = {WILDCARD: True}
        node = self.mask
        parts = path.split(PATH_SEPARATOR)
        for part in parts[:-1]:
            child = resolve_key(node, part)
            if child is True:
                child = {WILDCARD: True}
            elif part not in node:
                # Inherited from the wildcard, so give this field its own copy,
                # leaving its siblings alone
                child = deep_copy(child)
            node[part] = child
            node = child
        node[parts[-1]] = False
        return self

    def filter_object(self, obj, masked_out_hook=None):
        """
        Returns a copy of obj that only includes the fields allowed by the
        mask. If masked_out_hook is given, it's called with the dotted path of
        each disallowed field, at the highest level it is disallowed.

        Fields that are fully allowed are copied by reference, so the result
        may share nested values with obj. Lists keep only their allowed
        elements, renumbered from 0. Returns None if obj is masked out as a
        whole.
        """
        result = _filter_deep(obj, self.mask, "", masked_out_hook)
        return None if result is _MASKED_OUT else result

    def get_sub_mask(self, path):
        """
        Returns the part of the mask that applies at the given dotted path,
        following wildcards where the path isn't listed explicitly.
        """
        mask = self.mask
        for part in path.split(PATH_SEPARATOR):
            if is_scalar(mask):
                break
            mask = resolve_key(mask, part)
        return ObjectMask(mask if is_truthy(mask) else False)

    def check_path(self, path):
        return self.get_sub_mask(path).mask is True

    def clone(self):
        return ObjectMask(self.mask)

    def to_object(self):
        return self.mask

    def validate(self):
        """
        Returns whether the mask is strictly valid, i.e. only contains dicts
        and booleans.
        """
        return validate_mask(self.mask)

    def get_masked_out_fields(self, obj):
        masked_out = []
        self.filter_object(obj, masked_out.append)
        return masked_out

    def filter_dotted_object(self, dotted_obj, masked_out_hook=None):
        """
        Like filter_object(), but for a dict from dotted paths to values, such
        as { "foo.bar": "baz" }.
        """
        result = {}
        for path, value in dotted_obj.items():
            if self.check_path(path):
                result[path] = value
            elif masked_out_hook:
                masked_out_hook(path)
        return result

    def get_dotted_masked_out_fields(self, dotted_obj):
        masked_out = []
        self.filter_dotted_object(dotted_obj, masked_out.append)
        return masked_out

    def check_fields(self, obj):
        """
        Returns True if every field of obj is allowed by the mask.
        """
        return len(self.get_masked_out_fields(obj)) == 0

    def check_dotted_fields(self, dotted_obj):
        return all(self.check_path(path) for path in dotted_obj)

    def create_filter_func(self):
        """
        Returns a function that does the same as filter_object(obj).
        """
        return lambda obj: self.filter_object(obj)


def _filter_deep(obj, mask, path, masked_out_hook):
    if mask is True:
        return obj

    if is_truthy(mask) and not is_scalar(obj) and not is_scalar(mask):
        result_is_list = is_sequence(obj)
        result = [] if result_is_list else {}
        for key in child_keys(obj):
            sub_mask = resolve_key(mask, key)
            value = _filter_deep(
                get_child(obj, key),
                sub_mask if is_truthy(sub_mask) else False,
                join_path(path, key),
                masked_out_hook,
            )
            if value is _MASKED_OUT:
                continue
            if result_is_list:
                result.append(value)
            else:
                result[key] = value
        return result

    if masked_out_hook:
        masked_out_hook(path)
    return _MASKED_OUT

