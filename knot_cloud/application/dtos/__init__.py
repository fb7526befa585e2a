"""
Data Transfer Objects (DTOs) Package

This package contains DTOs for validating caller input and shaping
the requests sent to the broker.
"""

from .data_dto import SensorRequestDTO, SensorValueInputDTO

__all__ = ["SensorValueInputDTO", "SensorRequestDTO"]
