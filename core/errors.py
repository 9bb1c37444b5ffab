"""
core/errors.py -- Typed failures shared by every DesignDesk layer.

Each AppError subclass carries the HTTP status and the machine-readable code
it maps to. Domain code (auth/, projects/, catalogue/) raises these; the
exception handler in api/main.py renders them into the ErrorResponse envelope.
Nothing below api/ needs to know about FastAPI or HTTPException.

Layer rule: core/ is the kernel. No imports from other DesignDesk packages.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class Unauthenticated(AppError):
    """No token, an invalid token, or a token for a user that no longer exists."""

    status_code = 403
    code = "unauthenticated"
    message = "Authentication required."


class InvalidToken(Unauthenticated):
    """Raised by SessionTokenCodec.verify() on bad signature, expiry or shape."""

    code = "invalid_token"
    message = "Invalid or expired token."


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    message = "Access denied."


class InvalidCredentials(AppError):
    # Same message for unknown username and wrong password.
    status_code = 400
    code = "invalid_credentials"
    message = "Invalid username or password."


class DuplicateUsername(AppError):
    status_code = 400
    code = "duplicate_username"
    message = "Username already exists."


class InvalidRole(AppError):
    status_code = 400
    code = "invalid_role"
    message = "Role must be one of: client, designer."


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    message = "Resource not found."


class ProjectNotFound(NotFound):
    code = "project_not_found"
    message = "Project not found."


class ClientNotFound(NotFound):
    code = "client_not_found"
    message = "Client not found."


class InternalError(AppError):
    """Unexpected fault. The original exception is logged, never returned."""
