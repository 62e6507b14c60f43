from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from schoolbus import users as user_service
from schoolbus.utils.audit import log_event
from schoolbus.utils.decorators import current_user, role_required
from schoolbus.utils.validators import get_json_body, phone_field, password_field, role_field

users_bp = Blueprint('users', __name__)


@users_bp.route('', methods=['GET'])
@jwt_required()
@role_required('admin')
def list_users():
    users = user_service.list_users()
    return jsonify({"success": True, "data": [u.to_dict() for u in users]}), 200


@users_bp.route('/<int:user_id>', methods=['GET'])
@jwt_required()
@role_required('admin')
def get_user(user_id):
    user = user_service.get_user(user_id)
    return jsonify({"success": True, "data": user.to_dict()}), 200


@users_bp.route('', methods=['POST'])
@jwt_required()
@role_required('admin')
def create_user():
    data = get_json_body()
    user = user_service.create_user(
        phone=phone_field(data),
        password=password_field(data),
        role=role_field(data),
    )
    return jsonify({"success": True, "data": user.to_dict()}), 201


@users_bp.route('/<int:user_id>', methods=['PUT'])
@jwt_required()
@role_required('admin')
def update_user(user_id):
    data = get_json_body()
    user = user_service.update_user(
        user_id,
        phone=phone_field(data, required=False),
        password=password_field(data, required=False),
        role=role_field(data, default=None),
    )
    return jsonify({"success": True, "data": user.to_dict()}), 200


@users_bp.route('/<int:user_id>', methods=['DELETE'])
@jwt_required()
@role_required('admin')
def delete_user(user_id):
    removed_students = user_service.delete_user(user_id)
    log_event(
        "USER_DELETED",
        user_id=current_user().id,
        ip=request.remote_addr,
        description=f"user {user_id} removed with {removed_students} student(s)",
    )
    return jsonify({"success": True, "message": "User and related data deleted successfully"}), 200
