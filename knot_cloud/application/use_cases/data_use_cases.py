"""
Data Use Cases - Application Layer

This module implements the sensor data protocol: reading the recorded
history of a device, pushing new values to its sensors, asking it to
publish its current values and updating its metadata.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from knot_cloud.application.dtos.data_dto import SensorRequestDTO, SensorValueInputDTO
from knot_cloud.application.use_cases.device_use_cases import AddressResolver
from knot_cloud.application.use_cases.session_use_cases import SessionManager
from knot_cloud.domain.entities.errors import BrokerError, ValidationError
from knot_cloud.domain.entities.sensor import SensorReading
from knot_cloud.domain.gateways.history_gateway import IHistoryGateway
from knot_cloud.domain.services.value_codec import coerce_value
from knot_cloud.shared import get_logger

logger = get_logger(__name__)

HISTORY_RECORD_HIDDEN_FIELDS = ("uuid", "_id")
HISTORY_DATA_HIDDEN_FIELDS = ("uuid", "token")


def _require_sequence(items: Any, field: str) -> Sequence:
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise ValidationError(
            f"{field} must be a sequence", details={"type": type(items).__name__}
        )
    return items


def _strip_history_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    cleaned = {
        key: value
        for key, value in record.items()
        if key not in HISTORY_RECORD_HIDDEN_FIELDS
    }
    data = cleaned.get("data")
    if isinstance(data, Mapping):
        cleaned["data"] = {
            key: value
            for key, value in data.items()
            if key not in HISTORY_DATA_HIDDEN_FIELDS
        }
    return cleaned


def _raise_on_error(reply: Any, operation: str) -> None:
    if isinstance(reply, Mapping) and reply.get("error"):
        raise BrokerError(
            str(reply["error"]), details={"operation": operation, "reply": dict(reply)}
        )


class DataChannel:
    """Use case for reading and writing the sensor data of devices."""

    def __init__(
        self,
        session: SessionManager,
        resolver: AddressResolver,
        history_gateway: IHistoryGateway,
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            session: Session owning the broker connection
            resolver: Resolver of device ids to broker addresses
            history_gateway: Gateway for the recorded sensor data
        """
        self.session = session
        self.resolver = resolver
        self.history_gateway = history_gateway

    async def read_history(
        self, device_id: str, limit: int = 10, start: str = "", finish: str = ""
    ) -> List[Dict[str, Any]]:
        """
        Read the data recorded for a device.

        Args:
            device_id: Caller-facing device id
            limit: Maximum number of records
            start: Lower time bound, empty for unbounded
            finish: Upper time bound, empty for unbounded

        Returns:
            The records in service order, without address or credential fields

        Raises:
            NotConnectedError: If no session is open
            NotFoundError: If the device is unknown
            BrokerError: If the history service fails
        """
        address = await self.resolver.resolve_address(device_id)
        records = await self.history_gateway.fetch_data(
            self.session.credentials, address, limit=limit, start=start, finish=finish
        )

        logger.info("data.history_read", device_id=device_id, count=len(records))
        return [_strip_history_record(record) for record in records]

    async def write_data(self, device_id: str, points: Any) -> None:
        """
        Push values to the sensors of a device.

        Every point is validated and coerced before the broker is contacted,
        so a single malformed point fails the whole call without side effects.

        Args:
            device_id: Caller-facing device id
            points: Sequence of ``{"sensor_id": ..., "value": ...}`` mappings

        Raises:
            ValidationError: If ``points`` is malformed or a value is unsupported
            NotConnectedError: If no session is open
            NotFoundError: If the device is unknown
            BrokerError: If the broker rejects the write
        """
        readings = [self._to_reading(point) for point in _require_sequence(points, "data")]

        address = await self.resolver.resolve_address(device_id)
        reply = await self.session.require_connection().update(
            {"uuid": address, "set_data": [reading.to_wire() for reading in readings]}
        )
        _raise_on_error(reply, "set_data")

        logger.info("data.written", device_id=device_id, count=len(readings))

    async def request_data(self, device_id: str, sensor_ids: Any) -> None:
        """
        Ask a device to publish the current values of its sensors.

        The values are not returned here; they arrive later as events for
        subscribed devices.

        Raises:
            ValidationError: If ``sensor_ids`` is not a sequence of ids
            NotConnectedError: If no session is open
            NotFoundError: If the device is unknown
            BrokerError: If the broker rejects the request
        """
        requests = []
        for sensor_id in _require_sequence(sensor_ids, "sensors"):
            try:
                requests.append(SensorRequestDTO(sensor_id=sensor_id).model_dump())
            except PydanticValidationError as exc:
                raise ValidationError(
                    "invalid sensor id", details={"errors": exc.errors()}
                ) from exc

        address = await self.resolver.resolve_address(device_id)
        reply = await self.session.require_connection().update(
            {"uuid": address, "get_data": requests}
        )
        _raise_on_error(reply, "get_data")

        logger.info("data.requested", device_id=device_id, count=len(requests))

    async def set_metadata(self, device_id: str, metadata: Any) -> None:
        """Replace the metadata of a device."""
        address = await self.resolver.resolve_address(device_id)
        reply = await self.session.require_connection().update(
            {"uuid": address, "metadata": metadata}
        )
        _raise_on_error(reply, "metadata")

        logger.info("data.metadata_updated", device_id=device_id)

    @staticmethod
    def _to_reading(point: Any) -> SensorReading:
        if not isinstance(point, Mapping):
            raise ValidationError(
                "data items must be mappings", details={"type": type(point).__name__}
            )
        try:
            dto = SensorValueInputDTO.model_validate(dict(point))
        except PydanticValidationError as exc:
            raise ValidationError(
                "data items need sensor_id and value", details={"errors": exc.errors()}
            ) from exc
        return SensorReading(sensor_id=dto.sensor_id, value=coerce_value(dto.value))
