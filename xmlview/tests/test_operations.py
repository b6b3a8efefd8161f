import pytest

from xmlview.core.data.collection import XMLCollection
from xmlview.core.operations import (
    apply_field_operations,
    parse_field_operation,
    parse_field_operations,
    split_specs,
)


def test_parse_field_operation():
    op = parse_field_operation("cast", " tags = list ")

    assert (op.kind, op.key, op.policy) == ("cast", "tags", "list")
    assert op.describe() == "cast:tags=list"


@pytest.mark.parametrize("spec", ["", "tags", "=list", "tags="])
def test_parse_field_operation_rejects_malformed(spec):
    with pytest.raises(ValueError):
        parse_field_operation("transform", spec)


def test_parse_field_operation_rejects_unknown_kind():
    with pytest.raises(ValueError):
        parse_field_operation("explode", "a=b")


def test_split_and_apply_in_order():
    c = XMLCollection({"a": "x", "b": "7"})
    ops = parse_field_operations("transform", split_specs("a=upper, ,b=int"))

    out = apply_field_operations(c, ops)

    assert out is c
    assert c.get() == {"a": "X", "b": 7}
