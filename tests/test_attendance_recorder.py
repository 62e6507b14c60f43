from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

import schoolbus.attendance as attendance
from schoolbus.errors import DuplicateRecord, NotFound
from schoolbus.extensions import db
from schoolbus.models import AttendanceRecord, AttendanceTypeEnum, Student

from conftest import school_time


@pytest.fixture
def student(app, parent):
    student = Student(name="Omar", fingerprint_id=5, parent=parent)
    db.session.add(student)
    db.session.commit()
    return student


def test_morning_scan_records_enter(student):
    record = attendance.record_scan(5, now=school_time(9))

    assert record.type == AttendanceTypeEnum.enter
    assert record.time == "09:00:00"
    assert record.day == date(2026, 10, 19)
    assert record.student_id == student.id


def test_afternoon_scan_records_leave(student):
    record = attendance.record_scan(5, now=school_time(15, 30, 12))

    assert record.type == AttendanceTypeEnum.leave
    assert record.time == "15:30:12"


def test_noon_is_leave(student):
    assert attendance.record_scan(5, now=school_time(12)).type == AttendanceTypeEnum.leave


def test_time_is_derived_for_fixed_offset_not_host_zone(student):
    # 06:30 UTC is 09:30 in Mogadishu
    record = attendance.record_scan(5, now=datetime(2026, 10, 19, 6, 30, tzinfo=timezone.utc))

    assert record.type == AttendanceTypeEnum.enter
    assert record.time == "09:30:00"
    assert record.date == datetime(2026, 10, 19, 9, 30)


def test_utc_evening_belongs_to_next_local_day(student):
    # 22:00 UTC on the 18th is 01:00 on the 19th locally
    record = attendance.record_scan(5, now=datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc))

    assert record.day == date(2026, 10, 19)
    assert record.type == AttendanceTypeEnum.enter


def test_second_scan_same_type_same_day_is_duplicate(student):
    attendance.record_scan(5, now=school_time(7, 45))

    with pytest.raises(DuplicateRecord) as exc:
        attendance.record_scan(5, now=school_time(11, 59))

    assert "enter already exists" in exc.value.message
    assert AttendanceRecord.query.count() == 1


def test_other_type_same_day_succeeds(student):
    attendance.record_scan(5, now=school_time(7, 45))
    attendance.record_scan(5, now=school_time(14, 10))

    types = sorted(r.type.value for r in AttendanceRecord.query.all())
    assert types == ["enter", "leave"]


def test_same_type_next_day_succeeds(student):
    attendance.record_scan(5, now=school_time(8, day=19))
    attendance.record_scan(5, now=school_time(8, day=20))

    assert AttendanceRecord.query.count() == 2


def test_leave_without_enter_is_permitted(student):
    record = attendance.record_scan(5, now=school_time(16))

    assert record.type == AttendanceTypeEnum.leave
    assert AttendanceRecord.query.count() == 1


def test_unknown_fingerprint_is_not_found_and_writes_nothing(student):
    with pytest.raises(NotFound) as exc:
        attendance.record_scan(42, now=school_time(9))

    assert exc.value.status_code == 404
    assert AttendanceRecord.query.count() == 0


def test_unique_constraint_blocks_duplicate_that_skips_precheck(student, monkeypatch):
    attendance.record_scan(5, now=school_time(8))
    # simulate a concurrent request that read before the first insert committed
    monkeypatch.setattr(attendance, "find_existing", lambda *args: None)

    with pytest.raises(DuplicateRecord):
        attendance.record_scan(5, now=school_time(10))

    assert AttendanceRecord.query.count() == 1


def test_record_serializes_with_student_summary(student):
    record = attendance.record_scan(5, now=school_time(9, 5))

    data = record.to_dict()

    assert data["type"] == "enter"
    assert data["time"] == "09:05:00"
    assert data["date"] == "2026-10-19T09:05:00"
    assert data["student"] == {"id": student.id, "name": "Omar", "fingerprintId": 5}


def test_day_window_is_half_open():
    start, end = attendance.day_window(school_time(23, 59, 59))

    assert start == datetime(2026, 10, 19)
    assert end == datetime(2026, 10, 20)


def test_school_now_treats_naive_as_local(app):
    moment = attendance.school_now(datetime(2026, 10, 19, 10, 0))

    assert moment.hour == 10
    assert moment.utcoffset().total_seconds() == 3 * 3600


def test_today_summary_groups_per_student(student, parent):
    second = Student(name="Hodan", fingerprint_id=6, parent=parent)
    db.session.add(second)
    db.session.commit()
    attendance.record_scan(5, now=school_time(7))
    attendance.record_scan(5, now=school_time(13))
    attendance.record_scan(6, now=school_time(7, 30))
    attendance.record_scan(6, now=school_time(7, 30, day=18))

    summary = attendance.today_summary(now=school_time(18))

    by_name = {entry["student"]["name"]: entry for entry in summary}
    assert set(by_name) == {"Omar", "Hodan"}
    assert by_name["Omar"]["enter"]["time"] == "07:00:00"
    assert by_name["Omar"]["leave"]["time"] == "13:00:00"
    assert by_name["Hodan"]["leave"] is None
