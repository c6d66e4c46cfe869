"""
Algebra over raw mask trees: union (add), intersection (and), subtraction and
inversion.

A mask tree is True (everything allowed), False (nothing allowed) or a dict
from field name to mask tree, where the WILDCARD key "_" gives the mask for
every field that isn't listed explicitly.

The binary helpers here take ownership of their first operand: they modify it
in place and return the result, which may or may not be the same object.
The second operand is only read, and nothing from it is aliased into the
result. Callers that need to keep the first operand must pass a copy.
"""

from .._mask_globals import WILDCARD
from ..values.object_tools import deep_copy, deep_equals, is_scalar, is_sequence


class InvalidMaskOperationError(ValueError):
    pass


def is_truthy(mask):
    """
    Truthiness of a mask value. Any dict counts as true, even an empty one.
    """
    return not is_scalar(mask) or bool(mask)


def resolve_key(mask, key):
    """
    Returns the sub-mask for a key of a dict mask: the explicit entry if there
    is one, otherwise the wildcard, otherwise False.
    """
    if key in mask:
        return mask[key]
    if not isinstance(key, str) and str(key) in mask:
        return mask[str(key)]
    return mask.get(WILDCARD, False)


def underscorize_lists(mask):
    """
    Canonicalizes list masks, in place where possible. A list holding a single
    mask is equivalent to { "_": mask }, since lists are matched as dicts keyed
    by position.
    """
    if is_sequence(mask):
        return {WILDCARD: underscorize_lists(mask[0]) if mask else False}
    if isinstance(mask, dict):
        for key, sub_mask in mask.items():
            mask[key] = underscorize_lists(sub_mask)
    return mask


def sanitize_falsies(mask):
    """
    If the mask has no (truthy) wildcard, removes the wildcard and every key
    set to False, since those are disallowed anyway. Shallow.
    """
    if not is_truthy(mask.get(WILDCARD, False)):
        mask.pop(WILDCARD, None)
        for key in [key for key, sub_mask in mask.items() if sub_mask is False]:
            del mask[key]
    return mask


def invert(mask):
    if is_scalar(mask):
        return not mask

    result = {key: invert(sub_mask) for key, sub_mask in mask.items()}
    if WILDCARD not in result:
        # Anything that wasn't mentioned was disallowed, so is now allowed
        result[WILDCARD] = True
    elif not is_truthy(result[WILDCARD]):
        del result[WILDCARD]
    return result


def subtract(minuend, subtrahend):
    """
    Returns the minuend with everything allowed by the subtrahend disallowed.
    Only boolean leaves can be subtracted: any other scalar raises
    InvalidMaskOperationError.
    """
    if minuend is True:
        return invert(subtrahend)
    if minuend is False:
        return False
    if not is_truthy(minuend):
        # Absent minuend
        return invert(subtrahend)
    if not is_truthy(subtrahend):
        return minuend
    if subtrahend is True or deep_equals(minuend, subtrahend):
        return False

    if is_scalar(minuend) or is_scalar(subtrahend):
        raise InvalidMaskOperationError("Cannot subtract non-boolean scalars")

    # Resolve keys of the subtrahend against the wildcard as it was before
    # this subtraction touches it
    minuend_wildcard = deep_copy(minuend.get(WILDCARD, False))

    if WILDCARD in subtrahend:
        # Fields only covered by the subtrahend's wildcard, and the wildcards themselves
        for key in list(minuend):
            if key == WILDCARD or key not in subtrahend:
                minuend[key] = subtract(minuend[key], subtrahend[WILDCARD])

    for key, sub_mask in subtrahend.items():
        if key == WILDCARD:
            continue
        if key in minuend:
            minuend[key] = subtract(minuend[key], sub_mask)
        elif minuend_wildcard is not False:
            # The field was allowed through the minuend's wildcard
            minuend[key] = subtract(deep_copy(minuend_wildcard), sub_mask)

    return sanitize_falsies(minuend)


def add_mask(result_mask, new_mask):
    """
    Adds new_mask into result_mask, so that the result allows anything either
    of them allows. Returns True if the result is fully allowed.
    """
    if result_mask is True or new_mask is True:
        return True
    if is_scalar(new_mask):
        return result_mask
    if is_scalar(result_mask):
        return deep_copy(new_mask)

    # Keys that only the result mask lists are covered by the new mask's wildcard
    if WILDCARD in new_mask:
        for key in list(result_mask):
            if key != WILDCARD and key not in new_mask:
                result_mask[key] = add_mask(result_mask[key], new_mask[WILDCARD])

    # Same for keys that only the new mask lists, against the result's wildcard
    for key, sub_mask in new_mask.items():
        if key == WILDCARD:
            continue
        if key in result_mask:
            result_mask[key] = add_mask(result_mask[key], sub_mask)
        elif WILDCARD in result_mask:
            result_mask[key] = add_mask(deep_copy(sub_mask), result_mask[WILDCARD])
        else:
            result_mask[key] = deep_copy(sub_mask)

    # Fill in the wildcard that was skipped above
    if WILDCARD in new_mask:
        if WILDCARD in result_mask:
            result_mask[WILDCARD] = add_mask(result_mask[WILDCARD], new_mask[WILDCARD])
        else:
            result_mask[WILDCARD] = deep_copy(new_mask[WILDCARD])

    # Keys that are the same as the wildcard are redundant
    if WILDCARD in result_mask:
        wildcard = result_mask[WILDCARD]
        for key in [key for key in result_mask if key != WILDCARD]:
            if deep_equals(result_mask[key], wildcard):
                del result_mask[key]

    return result_mask


def and_mask(result_mask, new_mask):
    """
    Intersects result_mask with new_mask, so that the result only allows what
    both of them allow. Returns False if nothing is left.
    """
    if result_mask is True:
        return deep_copy(new_mask)
    if new_mask is True:
        return result_mask
    if is_scalar(result_mask) or is_scalar(new_mask):
        return False

    # Keys in both masks
    for key, sub_mask in new_mask.items():
        if key != WILDCARD and key in result_mask:
            result_mask[key] = and_mask(result_mask[key], sub_mask)

    # Keys only in the result mask
    for key in list(result_mask):
        if key != WILDCARD and key not in new_mask:
            if WILDCARD in new_mask:
                result_mask[key] = and_mask(result_mask[key], new_mask[WILDCARD])
            else:
                result_mask[key] = False

    # Keys only in the new mask
    for key, sub_mask in new_mask.items():
        if key != WILDCARD and key not in result_mask:
            if WILDCARD in result_mask:
                result_mask[key] = and_mask(deep_copy(sub_mask), result_mask[WILDCARD])
            else:
                result_mask[key] = False

    if WILDCARD in new_mask and WILDCARD in result_mask:
        result_mask[WILDCARD] = and_mask(result_mask[WILDCARD], new_mask[WILDCARD])
    else:
        result_mask.pop(WILDCARD, None)

    result_mask = sanitize_falsies(result_mask)
    return result_mask if result_mask else False


def validate_mask(mask):
    """
    A mask is strictly valid if it only contains dicts and booleans.
    """
    if isinstance(mask, bool):
        return True
    if isinstance(mask, dict):
        return all(validate_mask(sub_mask) for sub_mask in mask.values())
    return False
