"""
auth/guard.py -- Access control as an ordered pipeline of checks.

A request is authorized by running a list of steps over a shared context:

  extract_token -> verify_token -> resolve_user [-> require_designer]

Each step either fills in part of the context and returns None, or returns
the typed AppError that ends the pipeline. AccessGuard.run() wraps the
outcome in a GuardResult, so callers branch on a value instead of catching.

Failure mapping:
  missing / malformed Authorization header -> Unauthenticated
  bad signature / expired token            -> InvalidToken (an Unauthenticated)
  token for an unknown user id             -> Unauthenticated
  non-designer on a designer-only route    -> Forbidden
  anything unexpected                      -> InternalError (logged here)

Layer rule: no imports from api/ or fastapi. auth/dependencies.py adapts the
guard to FastAPI.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from auth.models import TokenClaims, User
from auth.store import UserStore
from auth.tokens import SessionTokenCodec
from core.errors import AppError, Forbidden, InternalError, InvalidToken, Unauthenticated

logger = logging.getLogger("designdesk.auth")


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a guard run: exactly one of user / error is set."""

    user: User | None = None
    error: AppError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GuardContext:
    authorization: str
    token: str | None = None
    claims: TokenClaims | None = None
    user: User | None = None


Step = Callable[[GuardContext], "AppError | None"]


class AccessGuard:
    """Resolve an Authorization header to a User and enforce role requirements."""

    def __init__(self, codec: SessionTokenCodec, users: UserStore) -> None:
        self._codec = codec
        self._users = users

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def extract_token(self, ctx: GuardContext) -> AppError | None:
        scheme, _, token = ctx.authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return Unauthenticated("No token provided.")
        ctx.token = token
        return None

    def verify_token(self, ctx: GuardContext) -> AppError | None:
        try:
            ctx.claims = self._codec.verify(ctx.token)
        except InvalidToken as exc:
            return exc
        return None

    def resolve_user(self, ctx: GuardContext) -> AppError | None:
        user = self._users.get_by_id(ctx.claims.user_id)
        if user is None:
            return Unauthenticated("Access denied.")
        ctx.user = user
        return None

    def require_designer(self, ctx: GuardContext) -> AppError | None:
        if not ctx.user.is_designer:
            return Forbidden("Designer access required.")
        return None

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    @property
    def authenticated_steps(self) -> list[Step]:
        return [self.extract_token, self.verify_token, self.resolve_user]

    @property
    def designer_steps(self) -> list[Step]:
        return self.authenticated_steps + [self.require_designer]

    def run(self, authorization: str | None, steps: Sequence[Step]) -> GuardResult:
        ctx = GuardContext(authorization=authorization or "")
        try:
            for step in steps:
                error = step(ctx)
                if error is not None:
                    return GuardResult(error=error)
        except Exception:
            logger.exception("Access guard failed unexpectedly")
            return GuardResult(error=InternalError())
        return GuardResult(user=ctx.user)

    def authenticate(self, authorization: str | None) -> GuardResult:
        """Any resolved user passes."""
        return self.run(authorization, self.authenticated_steps)

    def authorize_designer(self, authorization: str | None) -> GuardResult:
        """Resolved user must have the designer role."""
        return self.run(authorization, self.designer_steps)
