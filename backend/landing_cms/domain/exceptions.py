from typing import Any, Dict, Optional


class CMSError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    error = "Internal"

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.error)
        self.message = message or self.error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(CMSError):
    status_code = 400
    error = "ValidationError"

    def __init__(self, message: str = "Validation error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class Unauthorized(CMSError):
    status_code = 401
    error = "Unauthorized"


class Forbidden(CMSError):
    status_code = 403
    error = "Forbidden"


class NotFound(CMSError):
    # Also raised for records owned by another tenant.
    status_code = 404
    error = "NotFound"


class Conflict(CMSError):
    status_code = 409
    error = "Conflict"


class PayloadTooLarge(CMSError):
    status_code = 413
    error = "PayloadTooLarge"


class UnsupportedMediaType(CMSError):
    status_code = 415
    error = "UnsupportedMediaType"
