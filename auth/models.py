"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in projects/models.py and catalogue/models.py -- dataclasses own domain shape;
stores and routes do the work.

Layer rule: no imports from api/, projects/, catalogue/, or storage/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Closed set of roles accepted at registration."""

    designer = "designer"
    client = "client"


@dataclass
class User:
    """Represents a registered identity in DesignDesk.

    Users are immutable after registration: there is no role change or
    password reset operation.
    """

    username: str
    role: str  # "designer" | "client"
    id: int | None = None
    hashed_password: str | None = None
    created_at: str | None = None

    @property
    def is_designer(self) -> bool:
        return self.role == Role.designer.value


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: int
    role: str
