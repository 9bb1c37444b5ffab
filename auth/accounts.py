"""
auth/accounts.py -- Registration and password login.

register_user() validates the role against the closed Role enumeration,
checks username uniqueness, hashes the password and persists the user.

authenticate_user() always runs bcrypt whether or not the user exists, so
response time does not reveal which usernames are registered. Unknown
username and wrong password raise the same InvalidCredentials error.

Layer rule: no imports from api/, projects/, catalogue/, or storage/.
"""

from __future__ import annotations

import logging

from auth.models import Role, User
from auth.passwords import DEFAULT_ROUNDS, DUMMY_HASH, hash_password, verify_password
from auth.store import UserStore
from auth.tokens import SessionTokenCodec
from core.errors import DuplicateUsername, InvalidCredentials, InvalidRole

logger = logging.getLogger("designdesk.auth")


def parse_role(value: str) -> Role:
    """Return the Role for value, or raise InvalidRole for anything else."""
    try:
        return Role(value)
    except ValueError as exc:
        raise InvalidRole() from exc


def register_user(
    store: UserStore,
    username: str,
    password: str,
    role: str,
    rounds: int = DEFAULT_ROUNDS,
) -> User:
    """Create a new user account and return it with its assigned id.

    Raises InvalidRole for roles outside {designer, client} and
    DuplicateUsername if the username (exact, case-sensitive) is taken.
    """
    parsed = parse_role(role)
    if store.get_by_username(username) is not None:
        raise DuplicateUsername()

    user = User(username=username, role=parsed.value, hashed_password=hash_password(password, rounds))
    user.id = store.create_user(user)
    logger.info("Registered %s %r (id=%s)", user.role, username, user.id)
    return user


def authenticate_user(store: UserStore, username: str, password: str) -> User:
    """Return the user for a valid username/password pair.

    Raises InvalidCredentials on any failure.
    """
    user = store.get_by_username(username)
    if user is None or user.hashed_password is None:
        # Equalize timing -- do NOT return early before running bcrypt
        verify_password(password, DUMMY_HASH)
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    return user


def login(store: UserStore, codec: SessionTokenCodec, username: str, password: str) -> tuple[str, User]:
    """Authenticate and issue a session token. Returns (token, user)."""
    user = authenticate_user(store, username, password)
    token = codec.issue(user.id, user.role)
    logger.info("Login succeeded for %r", username)
    return token, user
