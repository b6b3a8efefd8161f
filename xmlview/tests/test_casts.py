from datetime import datetime

import pytest

from xmlview.core.casts import CASTS, Cast, JoinCast, register_cast
from xmlview.core.casts.builtin import BoolCast, DateCast, FirstCast, FloatCast, IntCast, StrCast
from xmlview.core.errors import CoercionFailure, InvalidPolicy, RegistryError


def test_builtin_cast_names_are_registered():
    assert {"bool", "date", "first", "float", "int", "join", "list", "str"} <= set(CASTS.names())
    assert "Int" in CASTS


def test_scalar_casts_convert_each_element():
    assert IntCast.apply(["1", " 2 ", 3]) == [1, 2, 3]
    assert FloatCast.apply(["1.5"]) == [1.5]
    assert BoolCast.apply(["true", "0", "Yes", ""]) == [True, False, True, False]
    assert StrCast.apply([1, None]) == ["1", ""]


def test_first_cast():
    assert FirstCast.apply(["a", "b"]) == "a"
    assert FirstCast.apply([]) is None


def test_date_cast_parses_iso_strings():
    assert DateCast.apply(["2024-03-01T10:30:00"]) == [datetime(2024, 3, 1, 10, 30)]


def test_join_cast_default_and_custom_separator():
    assert Cast.to(["x", "y"], "join") == "x,y"
    assert Cast.to(["x", None, "z"], JoinCast(" / ")) == "x /  / z"


@pytest.mark.parametrize(
    "policy, values",
    [
        ("int", ["1", "one"]),
        ("int", ["1.5"]),
        ("float", [{"a": 1}]),
        ("bool", ["maybe"]),
        ("date", ["not-a-date"]),
    ],
)
def test_conversion_errors_raise_coercion_failure(policy, values):
    with pytest.raises(CoercionFailure):
        Cast.to(values, policy)


def test_casts_reject_non_list_input():
    with pytest.raises(CoercionFailure):
        IntCast.apply("123")


def test_unknown_cast_name():
    with pytest.raises(InvalidPolicy):
        Cast.to(["a"], "nope")


def test_register_cast_and_reject_duplicates():
    register_cast("reverse-test", lambda values: list(reversed(values)))

    assert Cast.to([1, 2], "reverse-test") == [2, 1]
    with pytest.raises(RegistryError):
        register_cast("reverse-test", list)

    register_cast("reverse-test", list, replace=True)
    assert Cast.to([1, 2], "reverse-test") == [1, 2]


def test_register_rejects_invalid_policy_objects():
    with pytest.raises(InvalidPolicy):
        register_cast("broken-test", 123)
