from schoolbus.extensions import db
from schoolbus.utils.serialization import isoformat
from .base import TimestampMixin, AttendanceTypeEnum

class AttendanceRecord(db.Model, TimestampMixin):
    __tablename__ = 'attendance_records'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False, index=True)
    # captured moment, school-local wall clock
    date = db.Column(db.DateTime, nullable=False, index=True)
    # calendar day of `date`, carries the uniqueness key
    day = db.Column(db.Date, nullable=False)
    time = db.Column(db.String(8), nullable=False)
    type = db.Column(db.Enum(AttendanceTypeEnum), nullable=False)

    student = db.relationship('Student', back_populates='attendance_records')

    __table_args__ = (
        db.UniqueConstraint('student_id', 'day', 'type', name='uq_attendance_student_day_type'),
    )

    def to_dict(self, include_student=True):
        data = {
            "id": self.id,
            "date": isoformat(self.date),
            "time": self.time,
            "type": self.type.value,
            "student": self.student_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_student and self.student is not None:
            data["student"] = self.student.summary()
        return data
