import hashlib

from object_mask.values.object_hash import hash_key, object_hash


def test_key_order_does_not_matter():
    assert object_hash({"a": 1, "b": {"c": [1, 2]}}) == object_hash({"b": {"c": [1, 2]}, "a": 1})


def test_list_order_matters():
    assert object_hash([1, 2]) != object_hash([2, 1])


def test_types_are_distinguished():
    assert object_hash({"a": "1"}) != object_hash({"a": 1})
    assert object_hash(None) != object_hash("None")


def test_tokens_are_unambiguous():
    assert hash_key(["ab", "c"]) != hash_key(["a", "bc"])
    assert hash_key({"a": "bc"}) != hash_key({"ab": "c"})


def test_short_keys_are_not_hashed():
    assert object_hash(1) == "int1"
    assert object_hash("x") == "strx"


def test_long_keys_are_hashed():
    value = {"name": "a fairly long value", "tags": [1, 2, 3]}
    assert len(hash_key(value)) > 40
    assert object_hash(value) == hashlib.md5(hash_key(value).encode("utf-8")).hexdigest()


def test_force_hash():
    assert object_hash(1, force_hash=True) == hashlib.md5(b"int1").hexdigest()
