from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from schoolbus.extensions import db

base_bp = Blueprint("base", __name__)

@base_bp.route("/")
def home():
    return jsonify({
        "success": True,
        "message": "School Bus Fingerprint Management API",
        "version": "1.0.0",
    })

@base_bp.route("/api/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
        return jsonify({"success": True, "database": "ok"})
    except Exception as e:
        current_app.logger.error("Health check failed: %s", e)
        return jsonify({"success": False, "message": "Database unavailable"}), 503
