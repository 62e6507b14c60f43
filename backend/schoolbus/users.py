from flask import current_app
from schoolbus.extensions import db
from schoolbus.errors import NotFound, ValidationError
from schoolbus.models import User, RoleEnum


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def list_users():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def create_user(phone, password, role=RoleEnum.parent):
    if User.query.filter_by(phone=phone).first():
        raise ValidationError("Phone already in use")

    user = User(phone=phone, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def update_user(user_id, phone=None, password=None, role=None):
    user = get_user(user_id)
    if phone is not None and phone != user.phone:
        if User.query.filter_by(phone=phone).first():
            raise ValidationError("Phone already in use")
        user.phone = phone
    if password is not None:
        user.set_password(password)
    if role is not None:
        user.role = role
    db.session.commit()
    return user


def delete_user(user_id):
    """Delete a user; a parent's students and their attendance go with them."""
    user = get_user(user_id)
    student_count = len(user.students)
    db.session.delete(user)
    db.session.commit()
    current_app.logger.info(
        "User %s deleted with %d student(s)", user_id, student_count
    )
    return student_count
