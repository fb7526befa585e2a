"""Domain service coercing caller supplied values into sensor values."""

import binascii
import re
from base64 import b64decode
from typing import Any, Union

from knot_cloud.domain.entities.errors import ValidationError
from knot_cloud.domain.entities.sensor import (
    BooleanValue,
    NumberValue,
    OpaqueValue,
    SensorValue,
    ValueParseError,
)

UNSUPPORTED_VALUE = "supported types are boolean, number, or base64 string"

_NUMERIC_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_BOOLEAN_LITERALS = {"true": True, "false": False}


def _is_base64(raw: str) -> bool:
    if not raw or len(raw) % 4:
        return False
    try:
        b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def parse_value(raw: Any) -> Union[SensorValue, ValueParseError]:
    """Parse ``raw`` into a sensor value.

    The order matters: a string such as ``"1234"`` is both numeric and valid
    base64 and must be read as a number, and ``"true"`` must not be taken as
    an opaque payload.

    Returns:
        The typed value, or a ``ValueParseError`` describing why ``raw``
        cannot be sent. This function never raises.
    """

    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, (int, float)):
        return NumberValue(raw)
    if not isinstance(raw, str):
        return ValueParseError(raw=raw, reason=UNSUPPORTED_VALUE)

    if _NUMERIC_LITERAL.match(raw):
        return NumberValue(float(raw))
    if raw in _BOOLEAN_LITERALS:
        return BooleanValue(_BOOLEAN_LITERALS[raw])
    if _is_base64(raw):
        return OpaqueValue(raw)
    return ValueParseError(raw=raw, reason=UNSUPPORTED_VALUE)


def coerce_value(raw: Any) -> SensorValue:
    """Parse ``raw`` or raise ``ValidationError``.

    Raises:
        ValidationError: If ``raw`` is not a boolean, a number or base64 text.
    """

    result = parse_value(raw)
    if isinstance(result, ValueParseError):
        raise ValidationError(result.reason, details={"value": result.raw})
    return result
