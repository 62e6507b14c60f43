from flask import Blueprint, jsonify
from schoolbus.errors import ValidationError
from schoolbus.models import DeviceStatus
from schoolbus.utils.serialization import serialize
from schoolbus.utils.validators import get_json_body, require_number

device_bp = Blueprint("device", __name__)

# (json field, column, min, max)
TELEMETRY_FIELDS = [
    ("temperature", "temperature", -50, 100),
    ("humidity", "humidity", 0, 100),
    ("gasSensor", "gas_sensor", 0, 1),
    ("latitude", "latitude", -90, 90),
    ("longitude", "longitude", -180, 180),
]


@device_bp.route('', methods=['GET'])
def get_device_data():
    device = DeviceStatus.get_or_create()
    return jsonify({"success": True, "data": serialize(device.to_dict())}), 200


@device_bp.route('', methods=['PUT'])
def update_device_data():
    data = get_json_body()
    values = {
        column: require_number(data, field, minimum, maximum)
        for field, column, minimum, maximum in TELEMETRY_FIELDS
    }
    if values["gas_sensor"] not in (0, 1):
        raise ValidationError("gasSensor must be 0 or 1")
    values["gas_sensor"] = int(values["gas_sensor"])

    device = DeviceStatus.upsert(values)
    return jsonify({
        "success": True,
        "data": serialize(device.to_dict()),
        "message": "Device data updated successfully",
    }), 200
