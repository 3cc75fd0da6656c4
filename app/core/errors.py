"""
Error hierarchy for the Jobly API.

Every error carries a code and the HTTP status the API layer answers with.
Errors are raised at the repository / auth boundary and handled once, by the
global handlers in app.api.error_handlers.
"""


class JoblyError(Exception):
    """Base exception for all expected, caller-correctable failures."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.http_status,
            }
        }


class BadRequestError(JoblyError):
    """Caller supplied no data, bad filters or an immutable field."""
    def __init__(self, message: str = "Bad Request"):
        super().__init__(message, "BAD_REQUEST", 400)


class ConflictError(JoblyError):
    """Creation would violate a uniqueness constraint."""
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 400)


class ReferenceValidationError(JoblyError):
    """Creation references a related record that does not exist."""
    def __init__(self, message: str):
        super().__init__(message, "INVALID_REFERENCE", 400)


class NotFoundError(JoblyError):
    """Lookup, update or delete matched no record."""
    def __init__(self, message: str = "Not Found"):
        super().__init__(message, "NOT_FOUND", 404)


class UnauthorizedError(JoblyError):
    """Missing/invalid token, wrong credentials or insufficient rights."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, "UNAUTHORIZED", 401)
