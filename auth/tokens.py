"""
auth/tokens.py -- Signed, time-limited session tokens.

JWT via python-jose with HS256. A token carries the user id, the role, the
issue time and the expiry. Tokens are never persisted: every request is
verified on its own.

The signing secret is handed to SessionTokenCodec at construction (the app
lifespan builds one from Settings). There is no module-level secret, so tests
and multiple app instances can each use their own.

Layer rule: no imports from api/, projects/, catalogue/, or storage/.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import TokenClaims
from core.errors import InvalidToken

_ALGORITHM = "HS256"


class SessionTokenCodec:
    """Issue and verify session tokens.

    Usage:
        codec = SessionTokenCodec(settings.secret_key)
        token = codec.issue(user.id, user.role)
        claims = codec.verify(token)   # raises InvalidToken
    """

    def __init__(self, secret_key: str, expire_seconds: int = 3600) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def issue(self, user_id: int, role: str, issued_at: datetime | None = None) -> str:
        """Encode a signed JWT valid for expire_seconds from issued_at (default: now)."""
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.expire_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """Decode and verify a JWT.

        Raises InvalidToken on signature mismatch, elapsed expiry, a malformed
        token, or a payload missing the identity claims.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWTError as exc:
            raise InvalidToken() from exc
        user_id = payload.get("id")
        role = payload.get("role")
        if not isinstance(user_id, int) or not isinstance(role, str):
            raise InvalidToken()
        return TokenClaims(user_id=user_id, role=role)
