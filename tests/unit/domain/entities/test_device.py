from __future__ import annotations

from knot_cloud.domain.entities.device import Device


def test_from_record_keeps_only_public_fields(raw_devices) -> None:
    device = Device.from_record(raw_devices[0])

    assert device is not None
    assert device.to_dict() == {
        "id": "Sensor-1",
        "name": "Thermometer",
        "schema": raw_devices[0]["schema"],
        "metadata": {"room": "lab"},
    }


def test_from_record_skips_unregistered_devices(raw_devices) -> None:
    assert Device.from_record(raw_devices[1]) is None
    assert Device.from_record({"id": "x", "schema": [{"sensor_id": 1}]}) is None


def test_from_record_defaults_missing_metadata() -> None:
    device = Device.from_record({"id": "d", "name": "n", "schema": [{"sensor_id": 1}]})

    assert device is not None
    assert device.metadata == {}


def test_matches_ignores_case() -> None:
    device = Device(id="Sensor-1", name="Thermometer")

    assert device.matches("sensor-1")
    assert not device.matches("sensor-2")


def test_credentials_repr_hides_secrets(credentials) -> None:
    text = repr(credentials)

    assert "user-token" not in text
    assert "user-uuid" not in text


def test_from_record_requires_list_schema() -> None:
    assert Device.from_record({"id": "d", "name": "n", "schema": {"a": 1}}) is None
    assert Device.from_record({"id": "d", "name": "n", "schema": "temp"}) is None


def test_id_matches_reads_non_string_ids_as_text() -> None:
    assert Device.id_matches(7, "7")
    assert Device.id_matches("ABC", "abc")
    assert not Device.id_matches(None, "None")
