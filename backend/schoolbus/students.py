"""
Student lifecycle. Creating or deleting a student queues the matching
enroll/delete instruction for the fingerprint device.
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError
from schoolbus.extensions import db
from schoolbus.errors import Conflict, FingerprintSlotsExhausted, NotFound, ValidationError
from schoolbus.fingerprint import delete_command, enroll_command
from schoolbus.models import Student, User
from schoolbus.utils.pagination import apply_search

FINGERPRINT_ID_MIN = 1
FINGERPRINT_ID_MAX = 127


def allocate_fingerprint_id():
    """Lowest sensor slot not assigned to any student."""
    used = {fid for (fid,) in db.session.query(Student.fingerprint_id).all()}
    for candidate in range(FINGERPRINT_ID_MIN, FINGERPRINT_ID_MAX + 1):
        if candidate not in used:
            return candidate
    raise FingerprintSlotsExhausted()


def get_student(student_id):
    student = db.session.get(Student, student_id)
    if student is None:
        raise NotFound("Student not found")
    return student


def get_parent(parent_id):
    parent = db.session.get(User, parent_id)
    if parent is None:
        raise ValidationError("Parent not found")
    return parent


def list_students(search=None):
    query = apply_search(Student.query, Student, search, ["name"])
    return query.order_by(Student.created_at.desc(), Student.id.desc()).all()


def list_students_for_parent(parent_id):
    return Student.query.filter_by(parent_id=parent_id).order_by(Student.id).all()


def create_student(name, parent_id, mailbox):
    # one retry covers a concurrent create grabbing the same slot
    for attempt in range(2):
        parent = get_parent(parent_id)
        student = Student(name=name, parent=parent, fingerprint_id=allocate_fingerprint_id())
        db.session.add(student)
        try:
            db.session.commit()
            break
        except IntegrityError:
            db.session.rollback()
            if attempt:
                raise Conflict("Could not assign a fingerprint ID, please retry")

    mailbox.deposit(enroll_command(student))
    current_app.logger.info(
        "Student created: %s (fingerprint %s, parent %s)",
        student.name, student.fingerprint_id, parent.phone,
    )
    return student


def update_student(student_id, name=None, parent_id=None):
    student = get_student(student_id)
    if parent_id is not None:
        student.parent = get_parent(parent_id)
    if name is not None:
        student.name = name
    db.session.commit()
    return student


def delete_student(student_id, mailbox):
    student = get_student(student_id)
    fingerprint_id, student_name = student.fingerprint_id, student.name

    db.session.delete(student)
    db.session.commit()

    mailbox.deposit(delete_command(fingerprint_id, student_name, student_id))
    current_app.logger.info("Student deleted: %s (fingerprint %s)", student_name, fingerprint_id)
