from __future__ import annotations

import pytest

from schoolbus.extensions import db
from schoolbus.models import AttendanceRecord, Student

from conftest import school_time


@pytest.fixture
def student(app, parent):
    student = Student(name="Omar", fingerprint_id=5, parent=parent)
    db.session.add(student)
    db.session.commit()
    return student


def test_poll_without_pending_command(client):
    response = client.get("/api/esp32/fingerprint/poll")

    assert response.status_code == 200
    assert response.get_json() == {"success": False, "message": "No pending commands", "code": 0}


def test_poll_returns_deposited_command_once(client, mailbox):
    mailbox.deposit({"success": True, "code": 1, "fingerprintId": 5, "studentName": "Omar"})

    first = client.get("/api/esp32/fingerprint/poll").get_json()
    second = client.get("/api/esp32/fingerprint/poll").get_json()

    assert first == {"success": True, "code": 1, "fingerprintId": 5, "studentName": "Omar"}
    assert second["success"] is False
    assert second["code"] == 0


def test_scan_in_morning_records_enter(client, student, fixed_clock):
    fixed_clock(school_time(7, 15, 3))

    response = client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": 5})

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Attendance recorded: enter"
    assert body["data"]["type"] == "enter"
    assert body["data"]["time"] == "07:15:03"
    assert body["data"]["student"] == {"id": student.id, "name": "Omar", "fingerprintId": 5}


def test_scan_accepts_string_id(client, student, fixed_clock):
    fixed_clock(school_time(15))

    response = client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": "5"})

    assert response.status_code == 201
    assert response.get_json()["data"]["type"] == "leave"


def test_scan_accepts_form_body(client, student, fixed_clock):
    response = client.post("/api/esp32/fingerprint/attendance", data={"fingerprintId": "5"})

    assert response.status_code == 201


def test_duplicate_scan_is_rejected(client, student, fixed_clock):
    fixed_clock(school_time(7))
    client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": 5})
    fixed_clock(school_time(8))

    response = client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": 5})

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "Attendance record for enter already exists for this student today",
    }
    assert AttendanceRecord.query.count() == 1


def test_unknown_fingerprint_returns_404(client, student, fixed_clock):
    response = client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": 99})

    assert response.status_code == 404
    assert response.get_json()["message"] == "Student not found with this fingerprint ID"
    assert AttendanceRecord.query.count() == 0


@pytest.mark.parametrize("body", [{}, {"fingerprintId": ""}, {"fingerprintId": None}])
def test_missing_fingerprint_id_returns_400(client, body):
    response = client.post("/api/esp32/fingerprint/attendance", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": "Fingerprint ID is required"}


def test_non_numeric_fingerprint_id_returns_400(client):
    response = client.post("/api/esp32/fingerprint/attendance", json={"fingerprintId": "abc"})

    assert response.status_code == 400


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Route not found"}


def test_home_and_health(client):
    assert client.get("/").get_json()["message"] == "School Bus Fingerprint Management API"
    assert client.get("/api/health").get_json()["success"] is True
