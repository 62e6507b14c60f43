from datetime import datetime, timezone
from schoolbus.extensions import db
import enum


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

class RoleEnum(enum.Enum):
    admin = "admin"
    parent = "parent"

class AttendanceTypeEnum(enum.Enum):
    enter = "enter"
    leave = "leave"
