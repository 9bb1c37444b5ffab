"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Both helpers run the AccessGuard held on app.state and either return the
resolved User to the route handler or raise the guard's typed error, which
the AppError handler in api/main.py renders as a JSON error envelope.

require_authenticated() -- any valid token for an existing user.
require_designer()      -- same, and the user must be a designer.

Layer rule: auth/dependencies.py may import from fastapi (for Request)
because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.guard import AccessGuard, GuardResult
from auth.models import User


def _unwrap(result: GuardResult) -> User:
    if not result.ok:
        raise result.error
    return result.user


def require_authenticated(request: Request) -> User:
    """Require a valid session token.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: User = Depends(require_authenticated)): ...
    """
    guard: AccessGuard = request.app.state.guard
    return _unwrap(guard.authenticate(request.headers.get("Authorization")))


def require_designer(request: Request) -> User:
    """Require a valid session token belonging to a designer."""
    guard: AccessGuard = request.app.state.guard
    return _unwrap(guard.authorize_designer(request.headers.get("Authorization")))
