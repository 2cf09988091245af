"""
Error taxonomy shared by the service layer, the DAOs and the HTTP API.

Every error carries a human-readable `message`, a stable `kind` used in JSON
error bodies, and the HTTP `status_code` the API maps it to.
"""


class ReviewAppError(Exception):
    """Base class for all application errors."""

    kind = "server_error"
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class NotFound(ReviewAppError):
    """A review, code pair or user identifier has no match."""

    kind = "not_found"
    status_code = 404


class InvalidCredentials(ReviewAppError):
    """Login username/password mismatch."""

    kind = "invalid_credentials"
    status_code = 401


class ValidationFailure(ReviewAppError):
    """A request is structurally valid JSON but violates a domain rule."""

    kind = "validation_failure"
    status_code = 422


class StorageFailure(ReviewAppError):
    """The backing store is unreachable or an operation failed."""

    kind = "storage_failure"
    status_code = 500
