"""
Domain errors raised by the service layer.

Services never raise HTTPException; main.py maps these to JSON responses of
the form {"detail": ..., "code": ...} with the status code carried here.
"""


class CoworkError(Exception):
    """Base class for all expected, user-reportable failures."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CoworkError):
    """Referenced entity does not exist."""

    status_code = 404
    code = "not_found"


class AccessDenied(CoworkError):
    """Caller does not own the workspace the entity belongs to."""

    status_code = 403
    code = "access_denied"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class ValidationError(CoworkError):
    """Request is well-formed JSON but semantically unusable."""

    status_code = 400
    code = "validation_error"


class NotRefreshable(CoworkError):
    """Widget kind has no refresh behavior."""

    status_code = 400
    code = "not_refreshable"


class CollaboratorFailure(CoworkError):
    """An external API or model call failed. Never retried by the core."""

    status_code = 502
    code = "collaborator_failure"


class InsufficientScope(CollaboratorFailure):
    """The collaborator rejected the call for lack of granted permissions."""

    status_code = 403
    code = "INSUFFICIENT_SCOPES"
