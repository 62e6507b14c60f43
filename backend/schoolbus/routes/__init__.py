from .auth import auth_bp
from .users import users_bp
from .students import students_bp
from .attendance import attendance_bp
from .device import device_bp
from .esp32 import esp32_bp
from .base_route import base_bp


def register_routes(app):
    app.register_blueprint(base_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(students_bp, url_prefix='/api/students')
    app.register_blueprint(device_bp, url_prefix='/api/device')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    # polled by the ESP32 on the bus, no auth
    app.register_blueprint(esp32_bp, url_prefix='/api/esp32')
