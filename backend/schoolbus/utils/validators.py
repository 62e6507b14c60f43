from flask import request
from schoolbus.errors import ValidationError
from schoolbus.models import AttendanceTypeEnum, RoleEnum


def get_json_body():
    data = request.get_json(silent=True)
    # the device firmware may post form-encoded bodies
    if data is None and request.form:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def require_string(data, field, min_length=1, max_length=255, label=None, required=True):
    label = label or field.capitalize()
    value = data.get(field)
    if value is None:
        if required:
            raise ValidationError(f"{label} is required")
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    value = value.strip()
    if len(value) < min_length:
        raise ValidationError(f"{label} must be at least {min_length} characters")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return value


def require_int(data, field, label=None, required=True, minimum=None, maximum=None):
    label = label or field
    value = data.get(field)
    if value is None or value == "":
        if required:
            raise ValidationError(f"{label} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer")
    if isinstance(value, float) and number != value:
        raise ValidationError(f"{label} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{label} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{label} must be at most {maximum}")
    return number


def require_number(data, field, minimum, maximum):
    value = data.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    if value < minimum or value > maximum:
        raise ValidationError(f"{field} must be between {minimum} and {maximum}")
    return value


def phone_field(data, required=True):
    return require_string(data, "phone", min_length=10, max_length=15,
                          label="Phone number", required=required)


def password_field(data, required=True):
    return require_string(data, "password", min_length=6, max_length=100,
                          label="Password", required=required)


def role_field(data, default=RoleEnum.parent):
    value = data.get("role")
    if value is None:
        return default
    try:
        return RoleEnum(value)
    except ValueError:
        raise ValidationError("Role must be 'admin' or 'parent'")


def attendance_type_field(data):
    value = data.get("type")
    try:
        return AttendanceTypeEnum(value)
    except ValueError:
        raise ValidationError("Type must be 'enter' or 'leave'")
