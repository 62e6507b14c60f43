from werkzeug.security import generate_password_hash, check_password_hash
from schoolbus.extensions import db
from schoolbus.utils.serialization import isoformat
from .base import TimestampMixin, RoleEnum, utcnow

class User(db.Model, TimestampMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(15), unique=True, nullable=False)
    password_hash = db.Column(db.String(512), nullable=False)
    role = db.Column(db.Enum(RoleEnum), nullable=False, default=RoleEnum.parent, index=True)

    # deleting a parent removes their students and, through them, attendance
    students = db.relationship('Student', back_populates='parent', lazy=True,
                               cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == RoleEnum.admin

    def to_dict(self):
        return {
            "id": self.id,
            "phone": self.phone,
            "role": self.role.value if self.role else None,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class TokenBlocklist(db.Model):
    __tablename__ = 'token_blocklist'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), nullable=False, index=True)
    token_type = db.Column(db.String(10), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete="CASCADE"))
    created_at = db.Column(db.DateTime, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)
