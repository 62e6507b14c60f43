from datetime import datetime, timezone
from flask import Blueprint, request, jsonify, current_app, make_response
from flask_jwt_extended import create_access_token, jwt_required, get_jwt
from schoolbus.extensions import db, limiter
from schoolbus.errors import Unauthorized
from schoolbus.models import User, TokenBlocklist
from schoolbus.utils.audit import log_event
from schoolbus.utils.decorators import current_user
from schoolbus.utils.validators import get_json_body, phone_field, password_field

auth_bp = Blueprint('auth', __name__)


def generate_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role.value},
    )


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute", override_defaults=False)
def login():
    data = get_json_body()
    phone = phone_field(data)
    password = password_field(data)
    ip = request.remote_addr

    user = User.query.filter_by(phone=phone).first()
    if not user or not user.check_password(password):
        log_event("LOGIN_FAILED", ip=ip, description=f"Failed login attempt for {phone}")
        raise Unauthorized("Invalid phone or password")

    token = generate_token(user)
    response = make_response(jsonify({
        "success": True,
        "data": {"user": user.to_dict(), "token": token},
    }))
    response.set_cookie(
        "access_token_cookie",
        token,
        max_age=int(current_app.config["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds()),
        httponly=True,
        secure=current_app.config["JWT_COOKIE_SECURE"],
        samesite=current_app.config["JWT_COOKIE_SAMESITE"],
        path="/"
    )

    log_event("LOGIN_SUCCESS", user_id=user.id, ip=ip, description=f"{phone} logged in")
    return response


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    user = current_user()
    return jsonify({"success": True, "data": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    claims = get_jwt()
    user = current_user()
    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc).replace(tzinfo=None)

    token_block = TokenBlocklist(jti=claims["jti"], token_type=claims["type"],
                                 user_id=user.id, expires_at=expires)
    db.session.add(token_block)
    db.session.commit()

    response = make_response(jsonify({"success": True, "message": "Successfully logged out"}))
    response.delete_cookie("access_token_cookie", path="/")

    log_event("LOGOUT", user_id=user.id, ip=request.remote_addr)
    return response
