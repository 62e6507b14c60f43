"""
Attendance recording for fingerprint scans and administrative inserts.

Times are derived for the school's fixed UTC offset (UTC+3 by default),
never from the host's local time zone. A scan before noon is an ``enter``,
anything later a ``leave``; each student gets at most one of each per
calendar day.
"""
from datetime import datetime, timedelta, timezone
from flask import current_app
from sqlalchemy.exc import IntegrityError
from schoolbus.extensions import db
from schoolbus.errors import DuplicateRecord, NotFound, ValidationError
from schoolbus.models import AttendanceRecord, AttendanceTypeEnum, Student
from schoolbus.utils.pagination import paginate

NOON = 12


def school_timezone():
    hours = current_app.config.get("SCHOOL_UTC_OFFSET_HOURS", 3)
    return timezone(timedelta(hours=hours))


def school_now(now=None):
    """Current (or given) moment on the school's wall clock.

    A naive ``now`` is taken to already be school-local time.
    """
    tz = school_timezone()
    if now is None:
        return datetime.now(timezone.utc).astimezone(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def classify(moment):
    return AttendanceTypeEnum.enter if moment.hour < NOON else AttendanceTypeEnum.leave


def day_window(moment):
    """[midnight, next midnight) around ``moment``, as naive local datetimes."""
    start = moment.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    return start, start + timedelta(days=1)


def find_existing(student_id, moment, attendance_type):
    start, end = day_window(moment)
    return AttendanceRecord.query.filter(
        AttendanceRecord.student_id == student_id,
        AttendanceRecord.date >= start,
        AttendanceRecord.date < end,
        AttendanceRecord.type == attendance_type,
    ).first()


def create_attendance(student, moment, attendance_type, time_string=None, when="today"):
    """Insert a record unless (student, day, type) is already taken.

    The pre-check gives the friendly error; the unique constraint catches
    a concurrent insert that slipped past it.
    """
    duplicate_message = (
        f"Attendance record for {attendance_type.value} already exists for this student {when}"
    )
    if find_existing(student.id, moment, attendance_type) is not None:
        raise DuplicateRecord(duplicate_message)

    record = AttendanceRecord(
        student=student,
        date=moment.replace(tzinfo=None),
        day=moment.date(),
        time=time_string or moment.strftime("%H:%M:%S"),
        type=attendance_type,
    )
    db.session.add(record)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateRecord(duplicate_message)
    return record


def record_scan(fingerprint_id, now=None):
    """Record the attendance implied by a fingerprint scan right now."""
    student = Student.query.filter_by(fingerprint_id=fingerprint_id).first()
    if student is None:
        raise NotFound("Student not found with this fingerprint ID")

    moment = school_now(now)
    attendance_type = classify(moment)
    record = create_attendance(student, moment, attendance_type)

    current_app.logger.info(
        "Fingerprint attendance: student %s (fingerprint %s) %s at %s on %s",
        student.name, student.fingerprint_id, attendance_type.value,
        record.time, moment.date().isoformat(),
    )
    return record


def record_manual(student_id, attendance_type, time_string, date_string=None):
    """Administrative insert. ``date_string`` is ISO 8601; defaults to now."""
    student = db.session.get(Student, student_id)
    if student is None:
        raise ValidationError("Student not found")

    if date_string:
        try:
            moment = school_now(datetime.fromisoformat(date_string))
        except ValueError:
            raise ValidationError("Invalid date format")
    else:
        moment = school_now()

    return create_attendance(student, moment, attendance_type, time_string=time_string,
                             when="on this date")


def _parse_day(value, field):
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"Invalid {field} format, expected YYYY-MM-DD")


def filter_attendance(query, date=None, start_date=None, end_date=None, attendance_type=None):
    if date:
        start = _parse_day(date, "date")
        query = query.filter(AttendanceRecord.date >= start,
                             AttendanceRecord.date < start + timedelta(days=1))

    # a range wins over a single date, as it is applied last
    if start_date and end_date:
        start = _parse_day(start_date, "startDate")
        end = _parse_day(end_date, "endDate") + timedelta(days=1)
        query = query.filter(AttendanceRecord.date >= start, AttendanceRecord.date < end)

    if attendance_type:
        try:
            query = query.filter(AttendanceRecord.type == AttendanceTypeEnum(attendance_type))
        except ValueError:
            raise ValidationError("type must be 'enter' or 'leave'")
    return query


def list_attendance(student_id=None, page=1, limit=50, **filters):
    query = AttendanceRecord.query
    if student_id is not None:
        query = query.filter(AttendanceRecord.student_id == student_id)
    query = filter_attendance(query, **filters)
    query = query.order_by(AttendanceRecord.date.desc(), AttendanceRecord.time.desc())
    return paginate(query, page, limit)


def student_history(student_id, page=1, limit=50, **filters):
    if db.session.get(Student, student_id) is None:
        raise NotFound("Student not found")
    return list_attendance(student_id=student_id, page=page, limit=limit, **filters)


def today_summary(now=None):
    """Today's records grouped per student as {student, enter, leave}."""
    start, end = day_window(school_now(now))
    records = AttendanceRecord.query.filter(
        AttendanceRecord.date >= start,
        AttendanceRecord.date < end,
    ).order_by(AttendanceRecord.time).all()

    grouped = {}
    for record in records:
        entry = grouped.setdefault(record.student_id, {
            "student": record.student.summary(),
            "enter": None,
            "leave": None,
        })
        entry[record.type.value] = record.to_dict(include_student=False)
    return list(grouped.values())
