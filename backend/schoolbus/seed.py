from flask import current_app
from sqlalchemy.dialects import postgresql, sqlite
from werkzeug.security import generate_password_hash
from schoolbus.extensions import db
from schoolbus.models import DeviceStatus, RoleEnum, User
from schoolbus.models.base import utcnow


def ensure_default_admin():
    """Create the default admin unless some admin already exists.

    Returns True when a user was inserted.
    """
    if User.query.filter_by(role=RoleEnum.admin).first():
        return False

    phone = current_app.config["DEFAULT_ADMIN_PHONE"]
    insert = postgresql.insert if db.engine.dialect.name == "postgresql" else sqlite.insert
    now = utcnow()
    stmt = insert(User.__table__).values(
        phone=phone,
        password_hash=generate_password_hash(current_app.config["DEFAULT_ADMIN_PASSWORD"]),
        role=RoleEnum.admin,
        created_at=now,
        updated_at=now,
    ).on_conflict_do_nothing(index_elements=["phone"])
    result = db.session.execute(stmt)
    db.session.commit()

    created = result.rowcount == 1
    if created:
        current_app.logger.info("Default admin user created: phone %s", phone)
    return created


def initialize_device():
    device = DeviceStatus.get_or_create()
    current_app.logger.info("Device telemetry record ready (updated %s)", device.updated_at)
    return device


def bootstrap():
    ensure_default_admin()
    initialize_device()
