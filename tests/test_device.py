from __future__ import annotations

from schoolbus.models import DeviceStatus

TELEMETRY = {
    "temperature": 31.2,
    "humidity": 48,
    "gasSensor": 1,
    "latitude": 2.0469,
    "longitude": 45.3182,
}


def test_device_record_is_created_with_defaults(client):
    response = client.get("/api/device")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["id"] == 1
    assert data["temperature"] == 25.5
    assert data["humidity"] == 60
    assert data["gasSensor"] == 0
    assert data["latitude"] == 24.7136
    assert data["longitude"] == 46.6753


def test_device_update_overwrites_single_record(client):
    first = client.put("/api/device", json=TELEMETRY)
    second = client.put("/api/device", json=dict(TELEMETRY, temperature=20.0, gasSensor=0))

    assert first.status_code == 200
    assert first.get_json()["message"] == "Device data updated successfully"
    data = second.get_json()["data"]
    assert data["temperature"] == 20.0
    assert data["gasSensor"] == 0
    assert data["latitude"] == 2.0469
    assert DeviceStatus.query.count() == 1


def test_get_or_create_is_idempotent(app):
    DeviceStatus.get_or_create()
    DeviceStatus.get_or_create()

    assert DeviceStatus.query.count() == 1


def test_device_update_rejects_out_of_range(client):
    response = client.put("/api/device", json=dict(TELEMETRY, humidity=140))

    assert response.status_code == 400
    assert response.get_json()["message"] == "humidity must be between 0 and 100"


def test_device_update_rejects_fractional_gas_reading(client):
    response = client.put("/api/device", json=dict(TELEMETRY, gasSensor=0.5))

    assert response.status_code == 400


def test_device_update_requires_all_fields(client):
    response = client.put("/api/device", json={"temperature": 22})

    assert response.status_code == 400
    assert response.get_json()["message"] == "humidity must be a number"
