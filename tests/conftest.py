import copy

import pytest

OBJ1 = {
    "str1": "string",
    "str2": "string2",
    "num1": 1,
    "num2": 2,
    "nul1": None,
    "nul2": None,
    "undef": None,
    "obj": {"foo": "test", "bar": "test2", "baz": "test3"},
    "arr": [{"str1": "one", "str2": "two"}, {"str1": "three", "str2": "four"}],
}

MASK1 = {
    "str1": True,
    "str2": True,
    "num1": True,
    "nul1": True,
    "nul2": True,
    "obj": {"foo": True, "bar": True},
    "arr": [{"str1": True}],
}

MASK2 = {
    "str1": True,
    "num2": True,
    "nul2": True,
    "obj": {"_": True, "foo": False},
    "arr": [{"str2": True}],
}


@pytest.fixture
def obj1():
    return copy.deepcopy(OBJ1)


@pytest.fixture
def mask1():
    return copy.deepcopy(MASK1)


@pytest.fixture
def mask2():
    return copy.deepcopy(MASK2)
