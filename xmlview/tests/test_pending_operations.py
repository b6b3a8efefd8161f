import pytest

from xmlview.core.data.collection import XMLCollection
from xmlview.core.data.pending import PendingCast, PendingTransform
from xmlview.core.errors import (
    CoercionFailure,
    InvalidPolicy,
    KeyNotFound,
    PendingOperationError,
)


class _JoinWithPipe:
    @staticmethod
    def apply(values):
        return "|".join(values)


class _Suffix:
    def __init__(self, suffix):
        self.suffix = suffix

    def apply(self, value):
        return value + self.suffix


def test_cast_joins_integer_keyed_mapping_values():
    c = XMLCollection({"tags": {"0": "x", "1": "y"}})

    c.cast("tags").to(lambda values: ",".join(values))

    assert c.read("tags") == "x,y"


def test_transform_with_invocable():
    c = XMLCollection({"name": "bob"})

    c.transform("name").to(str.upper)

    assert c.read("name") == "BOB"


def test_cast_returns_same_container_for_chaining():
    c = XMLCollection({"tags": ["a", "b"], "name": "bob"})

    out = c.cast("tags").to("list").transform("name").to("upper")

    assert out is c
    assert c.read("tags") == ["a", "b"]
    assert c.read("name") == "BOB"


def test_expect_is_alias_of_transform():
    c = XMLCollection({"n": " 5 "})

    pending = c.expect("n")
    assert isinstance(pending, PendingTransform)

    assert pending.using("int") is c
    assert c.read("n") == 5


def test_cast_returns_pending_cast_bound_to_normalized_key():
    c = XMLCollection({"0": ["a"]})

    pending = c.cast("0")

    assert isinstance(pending, PendingCast)
    assert pending.key == 0
    assert pending.committed is False
    assert "awaiting policy" in repr(pending)


def test_cast_wraps_single_mapping_into_list():
    c = XMLCollection({"note": {"to": "Tove"}})

    c.cast("note").to("list")

    assert c.read("note") == [{"to": "Tove"}]


def test_cast_wraps_scalar_and_empty_values():
    c = XMLCollection({"one": "x", "none": None})

    c.cast("one").to(list).cast("none").to(list)

    assert c.read("one") == ["x"]
    assert c.read("none") == []


def test_cast_with_static_apply_class():
    c = XMLCollection({"tags": ["a", "b"]})

    c.cast("tags").to(_JoinWithPipe)

    assert c.read("tags") == "a|b"


def test_transform_with_apply_instance():
    c = XMLCollection({"name": "bob"})

    c.transform("name").to(_Suffix("!"))

    assert c.read("name") == "bob!"


def test_transform_passes_raw_value_without_list_coercion():
    seen = []
    c = XMLCollection({"note": {"to": "Tove"}})

    c.transform("note").to(lambda v: seen.append(v) or v)

    assert seen == [{"to": "Tove"}]


def test_pending_operation_cannot_commit_twice():
    c = XMLCollection({"name": "bob"})
    pending = c.transform("name")
    pending.to(str.upper)

    assert pending.committed is True
    with pytest.raises(PendingOperationError):
        pending.to(str.lower)

    assert c.read("name") == "BOB"


def test_invalid_policy_fails_fast_without_mutation():
    c = XMLCollection({"name": "bob", "tags": ["a"]})

    with pytest.raises(InvalidPolicy):
        c.transform("name").to(42)
    with pytest.raises(InvalidPolicy):
        c.cast("tags").to(object())

    assert c.read("name") == "bob"
    assert c.read("tags") == ["a"]


def test_unknown_policy_name_is_invalid_policy():
    c = XMLCollection({"name": "bob"})

    with pytest.raises(InvalidPolicy):
        c.transform("name").to("no-such-transformer")
    with pytest.raises(InvalidPolicy):
        c.cast("name").to("no-such-cast")


def test_builtin_types_are_invocable_policies():
    c = XMLCollection({"n": "7", "tags": ("a", "b")})

    c.transform("n").to(int).cast("tags").to(tuple)

    assert c.read("n") == 7
    assert c.read("tags") == ("a", "b")


def test_cast_on_missing_key_raises_key_not_found():
    c = XMLCollection({"a": 1})

    with pytest.raises(KeyNotFound):
        c.cast("missing").to("list")

    assert not c.exists("missing")


def test_transform_on_missing_key_raises_key_not_found():
    c = XMLCollection({"a": 1})

    with pytest.raises(KeyNotFound):
        c.transform("missing").to(str.upper)


def test_coercion_failure_propagates_and_keeps_value():
    c = XMLCollection({"price": ["12", "abc"]})

    with pytest.raises(CoercionFailure):
        c.cast("price").to("int")

    assert c.read("price") == ["12", "abc"]


def test_policy_may_read_back_into_same_collection():
    c = XMLCollection({"a": "x", "b": "y"})

    c.transform("a").to(lambda v: v + c.read("b"))

    assert c.read("a") == "xy"


def test_missing_key_is_reported_before_policy_resolution():
    c = XMLCollection({"a": 1})

    with pytest.raises(KeyNotFound):
        c.cast("missing").to(42)
    with pytest.raises(KeyNotFound):
        c.transform("missing").to(42)
