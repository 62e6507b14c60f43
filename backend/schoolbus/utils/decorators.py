from functools import wraps
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from schoolbus.extensions import db
from schoolbus.errors import Forbidden, Unauthorized
from schoolbus.models import User


def current_user():
    user_id = get_jwt_identity()
    if not user_id:
        raise Unauthorized("Missing or invalid JWT token")

    user = db.session.get(User, int(user_id))
    if not user:
        raise Unauthorized("User not found")
    return user


def role_required(*allowed_roles):
    """
    Restrict access to users with specific roles.
    Usage: @role_required("admin")
    """
    allowed_roles = set(role.lower() for role in allowed_roles)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = current_user()
            if user.role.value not in allowed_roles:
                raise Forbidden()
            return fn(*args, **kwargs)
        return wrapper
    return decorator
