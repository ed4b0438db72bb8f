# telemetry/errors.py
# Tagged error types mapped to HTTP responses at the app boundary

from typing import Optional


class TelemetryError(Exception):
    """Base error. `kind` selects the response code, never the message text."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_body(self) -> dict:
        body = {"message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


class ValidationError(TelemetryError):
    """Client-caused: malformed, missing or out-of-range fields"""

    kind = "validation"
    status_code = 400


class PersistenceError(TelemetryError):
    """Any failure coming back from the store"""

    kind = "persistence"
    status_code = 500


class MethodError(TelemetryError):
    """Wrong HTTP verb for the endpoint"""

    kind = "method"
    status_code = 405

    def __init__(self, allow: str, message: str = "Method Not Allowed"):
        super().__init__(message)
        self.allow = allow
