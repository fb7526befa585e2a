"""Domain entities for sensor values exchanged with devices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True, slots=True)
class BooleanValue:
    value: bool

    def to_wire(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class NumberValue:
    value: Union[int, float]

    def to_wire(self) -> Union[int, float]:
        return self.value


@dataclass(frozen=True, slots=True)
class OpaqueValue:
    """Base64 encoded payload, transmitted as-is."""

    value: str

    def to_wire(self) -> str:
        return self.value


SensorValue = Union[BooleanValue, NumberValue, OpaqueValue]


@dataclass(frozen=True, slots=True)
class ValueParseError:
    """Outcome of a value that cannot be sent to a sensor."""

    raw: Any
    reason: str


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single value addressed to one sensor of a device."""

    sensor_id: Union[int, str]
    value: SensorValue

    def to_wire(self) -> Dict[str, Any]:
        return {"sensor_id": self.sensor_id, "value": self.value.to_wire()}
