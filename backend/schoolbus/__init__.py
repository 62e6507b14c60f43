from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from .config import Config
from schoolbus.extensions import db, jwt, limiter, migrate
from schoolbus.errors import ApiError, InternalError
from schoolbus.fingerprint import FingerprintCommandMailbox
from schoolbus.models import TokenBlocklist
from schoolbus.routes import register_routes
from schoolbus.seed import bootstrap


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    jwt.init_app(app)
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    limiter.init_app(app)
    migrate.init_app(app, db)

    # one mailbox per application; handed to the student routes and the device poll
    app.extensions["fingerprint_mailbox"] = FingerprintCommandMailbox()

    register_routes(app)
    register_error_handlers(app)
    register_jwt_callbacks()

    with app.app_context():
        db.create_all()
        bootstrap()

    return app


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.error("Database error: %s", error, exc_info=True)
        error = InternalError()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = "Route not found" if error.code == 404 else error.description
        return jsonify({"success": False, "message": message}), error.code


def register_jwt_callbacks():
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        token = db.session.query(TokenBlocklist).filter_by(jti=jti).first()
        return token is not None

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"success": False, "message": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"success": False, "message": reason}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token has expired"}), 401

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token has been revoked"}), 401
