"""
tests/test_tokens.py -- Unit tests for auth/tokens.py and auth/passwords.py.

Covers:
  - issue/verify round trip carries user id and role
  - expiry: a token issued 61 minutes ago is rejected
  - tampered tokens and tokens signed with another secret are rejected
  - bcrypt hash/verify, including malformed stored hashes and the 72-byte cap
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.passwords import hash_password, verify_password
from auth.tokens import SessionTokenCodec
from core.errors import InvalidToken, Unauthenticated

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.fixture
def codec() -> SessionTokenCodec:
    return SessionTokenCodec(SECRET, expire_seconds=3600)


class TestSessionTokenCodec:
    def test_round_trip_returns_same_identity(self, codec):
        claims = codec.verify(codec.issue(42, "designer"))
        assert claims.user_id == 42
        assert claims.role == "designer"

    def test_payload_carries_one_hour_expiry(self, codec):
        """exp - iat must equal the configured lifetime."""
        token = codec.issue(7, "client")
        payload = jwt.get_unverified_claims(token)
        assert payload["exp"] - payload["iat"] == 3600

    def test_token_used_after_61_minutes_is_rejected(self, codec):
        issued = datetime.now(timezone.utc) - timedelta(minutes=61)
        token = codec.issue(1, "designer", issued_at=issued)
        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_token_used_after_59_minutes_is_accepted(self, codec):
        issued = datetime.now(timezone.utc) - timedelta(minutes=59)
        token = codec.issue(1, "designer", issued_at=issued)
        assert codec.verify(token).user_id == 1

    def test_tampered_token_is_rejected(self, codec):
        token = codec.issue(1, "client")
        replacement = "BBBB" if token.endswith("AAAA") else "AAAA"
        forged = token[:-4] + replacement
        with pytest.raises(InvalidToken):
            codec.verify(forged)

    def test_other_secret_is_rejected(self, codec):
        other = SessionTokenCodec("another-secret-key-0123456789abcdefgh")
        with pytest.raises(InvalidToken):
            codec.verify(other.issue(1, "designer"))

    def test_garbage_is_rejected(self, codec):
        with pytest.raises(InvalidToken):
            codec.verify("not-a-jwt")

    def test_missing_identity_claims_are_rejected(self, codec):
        """A correctly signed token without id/role is still not a session token."""
        token = jwt.encode({"sub": "someone"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_invalid_token_is_an_unauthenticated_error(self):
        assert issubclass(InvalidToken, Unauthenticated)
        assert InvalidToken().status_code == 403

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            SessionTokenCodec("")


class TestPasswords:
    def test_hash_verifies_against_original(self):
        hashed = hash_password("pw1", rounds=4)
        assert hashed != "pw1"
        assert verify_password("pw1", hashed)

    def test_wrong_password_fails(self):
        assert not verify_password("pw2", hash_password("pw1", rounds=4))

    def test_hashes_are_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_rounds_are_encoded_in_hash(self):
        assert hash_password("pw", rounds=5).startswith("$2b$05$")

    def test_malformed_hash_does_not_raise(self):
        assert verify_password("pw", "not-a-bcrypt-hash") is False

    def test_surrounding_whitespace_is_significant(self):
        hashed = hash_password(" pw1 ", rounds=4)
        assert verify_password(" pw1 ", hashed)
        assert not verify_password("pw1", hashed)

    def test_72_byte_limit_counts_bytes_not_characters(self):
        # 36 two-byte characters is exactly 72 bytes.
        hashed = hash_password("é" * 36, rounds=4)
        assert verify_password("é" * 36, hashed)
        with pytest.raises(ValueError):
            hash_password("é" * 40, rounds=4)

    def test_over_long_password_never_verifies(self):
        hashed = hash_password("a" * 72, rounds=4)
        assert verify_password("a" * 73, hashed) is False
