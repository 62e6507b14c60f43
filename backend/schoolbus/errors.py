"""
Error types surfaced to HTTP callers.

Every error renders as ``{"success": false, "message": ...}`` with the
status code carried by the class.
"""


class ApiError(Exception):
    """Base class for errors reported to the client."""

    status_code = 500
    default_message = "Server error occurred"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(ApiError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid request data"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Access forbidden: insufficient permissions"


class NotFound(ApiError):
    """Unknown fingerprint, student, user or other reference."""
    status_code = 404
    default_message = "Resource not found"


class DuplicateRecord(ApiError):
    """An attendance record already exists for (student, day, type)."""
    status_code = 400
    default_message = "Attendance record already exists"


class Conflict(ApiError):
    status_code = 409
    default_message = "Request conflicts with current state"


class FingerprintSlotsExhausted(Conflict):
    """All sensor enrollment slots are assigned."""
    default_message = "No available fingerprint IDs (all 1-127 are in use)"


class InternalError(ApiError):
    """Storage or backing-service failure."""
    status_code = 500
