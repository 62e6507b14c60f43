from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from schoolbus import attendance as attendance_service
from schoolbus import students as student_service
from schoolbus.errors import Forbidden
from schoolbus.utils.decorators import current_user, role_required
from schoolbus.utils.pagination import pagination_meta
from schoolbus.utils.validators import (
    attendance_type_field, get_json_body, require_int, require_string,
)

attendance_bp = Blueprint("attendance", __name__)


def _filters():
    return {
        "date": request.args.get("date"),
        "start_date": request.args.get("startDate"),
        "end_date": request.args.get("endDate"),
        "attendance_type": request.args.get("type"),
    }


def _paginated_response(paginated):
    return jsonify({
        "success": True,
        "data": [record.to_dict() for record in paginated.items],
        "pagination": pagination_meta(paginated),
    }), 200


@attendance_bp.route('', methods=['POST'])
@jwt_required()
@role_required("admin")
def create_attendance():
    data = get_json_body()
    record = attendance_service.record_manual(
        student_id=require_int(data, "student", label="Student ID"),
        attendance_type=attendance_type_field(data),
        time_string=require_string(data, "time", max_length=8, label="Time"),
        date_string=require_string(data, "date", max_length=40, label="Date", required=False),
    )
    return jsonify({"success": True, "data": record.to_dict()}), 201


@attendance_bp.route('', methods=['GET'])
@jwt_required()
@role_required("admin")
def list_attendance():
    paginated = attendance_service.list_attendance(
        student_id=request.args.get("student", type=int),
        page=request.args.get("page", 1, type=int),
        limit=request.args.get("limit", 50, type=int),
        **_filters(),
    )
    return _paginated_response(paginated)


@attendance_bp.route('/today', methods=['GET'])
@jwt_required()
@role_required("admin")
def today_attendance():
    return jsonify({"success": True, "data": attendance_service.today_summary()}), 200


@attendance_bp.route('/student/<int:student_id>', methods=['GET'])
@jwt_required()
def student_attendance(student_id):
    user = current_user()
    student = student_service.get_student(student_id)
    if not user.is_admin and student.parent_id != user.id:
        raise Forbidden("Not authorized to view this student")

    paginated = attendance_service.student_history(
        student_id,
        page=request.args.get("page", 1, type=int),
        limit=request.args.get("limit", 50, type=int),
        **_filters(),
    )
    return _paginated_response(paginated)
