from ..values.object_tools import is_scalar
from .mask_algebra import is_truthy, resolve_key


def apply_mask_to_object_graph(obj, mask, masked_out_hook=None, path=""):
    """
    Takes an object and a mask tree (as held by ObjectMask.mask) and removes,
    in place, all the properties of the object that the mask doesn't allow.
    Lists are compacted so that only the allowed elements remain.

    This gives the same result as ObjectMask.filter_object(), without copying,
    for callers that own obj and don't need the original any more. The one
    exception is a root mask that allows nothing: obj can't be dropped in
    place, so it is emptied instead, and each of its keys is reported.
    """

    if mask is True:
        return

    if isinstance(obj, dict):
        # We need to copy the keys into a list because we are going to be deleting some
        for key in list(obj.keys()):
            if not _apply_to_child(obj[key], mask, key, masked_out_hook, path):
                del obj[key]
    elif isinstance(obj, list):
        obj[:] = [
            element
            for index, element in enumerate(obj)
            if _apply_to_child(element, mask, index, masked_out_hook, path)
        ]
    elif is_scalar(obj):
        raise ValueError("Only dicts and lists can be masked in place")
    else:
        raise ValueError("Unexpected type")


def _apply_to_child(child, mask, key, masked_out_hook, path):
    """
    Masks one child in place, returning whether it should be kept at all.
    """
    sub_path = f"{path}.{key}" if path else str(key)
    sub_mask = resolve_key(mask, key) if isinstance(mask, dict) else False

    if sub_mask is True:
        return True
    if is_truthy(sub_mask) and isinstance(sub_mask, dict) and isinstance(child, (dict, list)):
        # The mask goes deeper, so apply recursively
        apply_mask_to_object_graph(child, sub_mask, masked_out_hook, sub_path)
        return True

    # The key is not allowed, so it will be removed
    if masked_out_hook:
        masked_out_hook(sub_path)
    return False
