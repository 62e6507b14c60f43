from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from schoolbus import create_app
from schoolbus.config import TestingConfig
from schoolbus.extensions import db
from schoolbus.models import RoleEnum, User
from schoolbus.routes.auth import generate_token

SCHOOL_TZ = timezone(timedelta(hours=3))


def school_time(hour, minute=0, second=0, day=19):
    return datetime(2026, 10, day, hour, minute, second, tzinfo=SCHOOL_TZ)


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        AUDIT_LOG_FILE = str(tmp_path / "logs" / "audit.log")

    app = create_app(Config)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mailbox(app):
    return app.extensions["fingerprint_mailbox"]


@pytest.fixture
def admin(app):
    return User.query.filter_by(role=RoleEnum.admin).one()


@pytest.fixture
def parent(app):
    user = User(phone="0611111111", role=RoleEnum.parent)
    user.set_password("parent123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def other_parent(app):
    user = User(phone="0622222222", role=RoleEnum.parent)
    user.set_password("parent456")
    db.session.add(user)
    db.session.commit()
    return user


def bearer(user):
    return {"Authorization": f"Bearer {generate_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def parent_headers(parent):
    return bearer(parent)


@pytest.fixture
def fixed_clock(monkeypatch):
    """Pin the school clock used by the attendance module."""
    import schoolbus.attendance as attendance

    real_school_now = attendance.school_now
    state = {"now": school_time(9)}

    def fake_school_now(now=None):
        return real_school_now(now if now is not None else state["now"])

    monkeypatch.setattr(attendance, "school_now", fake_school_now)

    def set_clock(moment):
        state["now"] = moment

    return set_clock
