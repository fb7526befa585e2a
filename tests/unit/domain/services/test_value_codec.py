from __future__ import annotations

import pytest

from knot_cloud.domain.entities.errors import ValidationError
from knot_cloud.domain.entities.sensor import (
    BooleanValue,
    NumberValue,
    OpaqueValue,
    ValueParseError,
)
from knot_cloud.domain.services.value_codec import (
    UNSUPPORTED_VALUE,
    coerce_value,
    parse_value,
)


def test_parse_boolean_literals() -> None:
    assert parse_value("true") == BooleanValue(True)
    assert parse_value("false") == BooleanValue(False)
    assert parse_value("true").to_wire() is True


@pytest.mark.parametrize(
    "raw, expected",
    [("3.14", 3.14), ("-2", -2.0), ("+.5", 0.5), ("1e3", 1000.0), ("1234", 1234.0)],
)
def test_parse_numeric_literals(raw: str, expected: float) -> None:
    result = parse_value(raw)

    assert isinstance(result, NumberValue)
    assert result.value == expected


def test_parse_base64_returns_text_unchanged() -> None:
    assert parse_value("aGVsbG8=") == OpaqueValue("aGVsbG8=")


def test_parse_typed_values_pass_through() -> None:
    assert parse_value(True) == BooleanValue(True)
    assert parse_value(42).to_wire() == 42
    assert parse_value(2.5).to_wire() == 2.5


@pytest.mark.parametrize("raw", ["not-base64-!!", "", "abc", "a=bc", None, [1]])
def test_parse_rejects_unsupported_values(raw) -> None:
    result = parse_value(raw)

    assert isinstance(result, ValueParseError)
    assert result.reason == UNSUPPORTED_VALUE


def test_coerce_raises_validation_error() -> None:
    with pytest.raises(ValidationError) as exc:
        coerce_value("not-base64-!!")

    assert exc.value.message == UNSUPPORTED_VALUE
    assert exc.value.details == {"value": "not-base64-!!"}
