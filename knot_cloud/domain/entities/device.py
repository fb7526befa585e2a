"""Domain entities for devices registered in the broker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Device:
    """
    Public view of a broker device.

    Only the fields listed here ever leave the SDK. Anything else the broker
    stores on a device record (address, owner, tokens, whitelists, pending
    sensor commands...) is dropped when the record is projected.
    """

    id: str
    name: str
    schema: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def is_registered(record: Mapping[str, Any]) -> bool:
        """A device is registered once it carries a schema list, an id and a name."""
        schema = record.get("schema")
        return (
            isinstance(schema, (list, tuple))
            and bool(schema)
            and bool(record.get("id"))
            and bool(record.get("name"))
        )

    @staticmethod
    def id_matches(record_id: Any, device_id: str) -> bool:
        """Compare ids case-insensitively, reading non-string ids as text."""
        if record_id is None:
            return False
        return str(record_id).lower() == str(device_id).lower()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Optional["Device"]:
        """Project a raw broker record, or return None when it is unregistered."""
        if not cls.is_registered(record):
            return None
        metadata = record.get("metadata")
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            schema=list(record["schema"]),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        )

    def matches(self, device_id: str) -> bool:
        return self.id_matches(self.id, device_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "schema": list(self.schema),
            "metadata": dict(self.metadata),
        }
