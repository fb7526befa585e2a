"""
Data DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) for the sensor data
exchanged with devices. They validate caller input before any request
reaches the broker.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class SensorValueInputDTO(BaseModel):
    """DTO for a single value to be written to a device sensor."""

    sensor_id: Union[int, str] = Field(description="Sensor identifier on the device")
    value: Any = Field(description="Raw value, coerced before transmission")

    model_config = ConfigDict(
        json_schema_extra={"example": {"sensor_id": 1, "value": "true"}}
    )


class SensorRequestDTO(BaseModel):
    """DTO for a sensor whose current value is requested from the device."""

    sensor_id: Union[int, str] = Field(description="Sensor identifier on the device")
