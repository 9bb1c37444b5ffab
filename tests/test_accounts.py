"""
tests/test_accounts.py -- Unit tests for auth/store.py and auth/accounts.py.

Covers:
  - UserStore create / lookup by username and id, case-sensitive usernames
  - duplicate usernames rejected at the store (race path) and in register_user
  - role validation against the closed {designer, client} set
  - login: success issues a token for the same identity; unknown user and
    wrong password raise the same InvalidCredentials error
"""

import pytest

from auth.accounts import authenticate_user, login, parse_role, register_user
from auth.models import Role, User
from auth.store import UserStore
from auth.tokens import SessionTokenCodec
from core.errors import DuplicateUsername, InvalidCredentials, InvalidRole


@pytest.fixture
def store():
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def codec() -> SessionTokenCodec:
    return SessionTokenCodec("accounts-test-secret-0123456789abcdef")


class TestUserStore:
    def test_create_and_lookup(self, store):
        uid = store.create_user(User(username="alice", role="designer", hashed_password="h"))
        by_name = store.get_by_username("alice")
        by_id = store.get_by_id(uid)
        assert by_name is not None and by_id is not None
        assert by_name.id == by_id.id == uid
        assert by_id.role == "designer"
        assert by_id.created_at

    def test_lookup_missing_returns_none(self, store):
        assert store.get_by_username("nobody") is None
        assert store.get_by_id(12345) is None

    def test_username_lookup_is_case_sensitive(self, store):
        store.create_user(User(username="Alice", role="designer", hashed_password="h"))
        assert store.get_by_username("alice") is None

    def test_duplicate_insert_raises_duplicate_username(self, store):
        """The UNIQUE constraint catches registrations that race past the pre-check."""
        store.create_user(User(username="bob", role="client", hashed_password="h"))
        with pytest.raises(DuplicateUsername):
            store.create_user(User(username="bob", role="designer", hashed_password="h2"))


class TestRegisterUser:
    def test_register_persists_hashed_password(self, store):
        user = register_user(store, "carol", "pw1", "designer", rounds=4)
        stored = store.get_by_id(user.id)
        assert stored.username == "carol"
        assert stored.role == "designer"
        assert stored.hashed_password != "pw1"

    def test_register_duplicate_username(self, store):
        register_user(store, "dave", "pw", "client", rounds=4)
        with pytest.raises(DuplicateUsername):
            register_user(store, "dave", "other", "client", rounds=4)

    @pytest.mark.parametrize("role", ["admin", "Designer", "", "superuser"])
    def test_register_rejects_unknown_role(self, store, role):
        with pytest.raises(InvalidRole):
            register_user(store, "erin", "pw", role, rounds=4)
        assert store.get_by_username("erin") is None

    def test_parse_role_accepts_known_roles(self):
        assert parse_role("designer") is Role.designer
        assert parse_role("client") is Role.client


class TestLogin:
    def test_login_issues_token_for_same_identity(self, store, codec):
        user = register_user(store, "frank", "pw1", "client", rounds=4)
        token, logged_in = login(store, codec, "frank", "pw1")
        claims = codec.verify(token)
        assert claims.user_id == user.id == logged_in.id
        assert claims.role == "client"

    def test_wrong_password_and_unknown_user_are_indistinguishable(self, store):
        register_user(store, "grace", "right", "designer", rounds=4)
        with pytest.raises(InvalidCredentials) as wrong_pw:
            authenticate_user(store, "grace", "wrong")
        with pytest.raises(InvalidCredentials) as unknown:
            authenticate_user(store, "no-such-user", "whatever")
        assert wrong_pw.value.message == unknown.value.message
        assert wrong_pw.value.status_code == unknown.value.status_code == 400
