from flask import Blueprint, jsonify
from schoolbus import attendance as attendance_service
from schoolbus.fingerprint import current_mailbox
from schoolbus.utils.validators import get_json_body, require_int

esp32_bp = Blueprint("esp32", __name__)


@esp32_bp.route('/fingerprint/poll', methods=['GET'])
def poll_fingerprint_command():
    return jsonify(current_mailbox().drain()), 200


@esp32_bp.route('/fingerprint/attendance', methods=['POST'])
def create_fingerprint_attendance():
    data = get_json_body()
    fingerprint_id = require_int(data, "fingerprintId", label="Fingerprint ID")

    record = attendance_service.record_scan(fingerprint_id)
    return jsonify({
        "success": True,
        "message": f"Attendance recorded: {record.type.value}",
        "data": record.to_dict(),
    }), 201
