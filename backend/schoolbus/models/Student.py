from schoolbus.extensions import db
from schoolbus.utils.serialization import isoformat
from .base import TimestampMixin

class Student(db.Model, TimestampMixin):
    __tablename__ = 'students'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    fingerprint_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    parent_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    parent = db.relationship('User', back_populates='students')
    attendance_records = db.relationship('AttendanceRecord', back_populates='student', lazy=True,
                                         cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint('fingerprint_id BETWEEN 1 AND 127', name='ck_student_fingerprint_range'),
    )

    def summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "fingerprintId": self.fingerprint_id,
        }

    def to_dict(self, include_parent=True):
        data = {
            "id": self.id,
            "name": self.name,
            "fingerprintId": self.fingerprint_id,
            "parentId": self.parent_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_parent and self.parent is not None:
            data["parent"] = {
                "id": self.parent.id,
                "phone": self.parent.phone,
                "role": self.parent.role.value,
            }
        return data
