from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from schoolbus import students as student_service
from schoolbus.errors import Forbidden
from schoolbus.fingerprint import current_mailbox
from schoolbus.utils.audit import log_event
from schoolbus.utils.decorators import current_user, role_required
from schoolbus.utils.validators import get_json_body, require_int, require_string

students_bp = Blueprint("students", __name__)


def name_field(data, required=True):
    return require_string(data, "name", min_length=2, max_length=255, required=required)


@students_bp.route('', methods=['GET'])
@jwt_required()
@role_required("admin")
def list_students():
    search_term = request.args.get("search", type=str)
    students = student_service.list_students(search_term)
    return jsonify({"success": True, "data": [s.to_dict() for s in students]}), 200


@students_bp.route('/<int:student_id>', methods=['GET'])
@jwt_required()
@role_required("admin")
def get_student(student_id):
    student = student_service.get_student(student_id)
    return jsonify({"success": True, "data": student.to_dict()}), 200


@students_bp.route('', methods=['POST'])
@jwt_required()
@role_required("admin")
def create_student():
    data = get_json_body()
    student = student_service.create_student(
        name=name_field(data),
        parent_id=require_int(data, "parent", label="Parent ID"),
        mailbox=current_mailbox(),
    )
    return jsonify({"success": True, "data": student.to_dict()}), 201


@students_bp.route('/<int:student_id>', methods=['PUT'])
@jwt_required()
@role_required("admin")
def update_student(student_id):
    data = get_json_body()
    student = student_service.update_student(
        student_id,
        name=name_field(data, required=False),
        parent_id=require_int(data, "parent", label="Parent ID", required=False),
    )
    return jsonify({"success": True, "data": student.to_dict()}), 200


@students_bp.route('/<int:student_id>', methods=['DELETE'])
@jwt_required()
@role_required("admin")
def delete_student(student_id):
    student_service.delete_student(student_id, current_mailbox())
    log_event("STUDENT_DELETED", user_id=current_user().id, ip=request.remote_addr,
              description=f"student {student_id}")
    return jsonify({"success": True, "message": "Student deleted successfully"}), 200


@students_bp.route('/parent/<int:parent_id>', methods=['GET'])
@jwt_required()
def get_students_by_parent(parent_id):
    user = current_user()
    # parents only see their own children
    if not user.is_admin and user.id != parent_id:
        raise Forbidden("Not authorized to view these students")

    students = student_service.list_students_for_parent(parent_id)
    return jsonify({"success": True, "data": [s.to_dict() for s in students]}), 200
