"""
tests/conftest.py -- Shared test fixtures for DesignDesk integration tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for users, projects, options
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: ApiHarness with a TestClient and helpers to mint users/tokens

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs route handlers in a thread pool. Plain :memory: DBs
are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process.

Environment must be set before any api/ or core/ import: DEBUG so
get_settings() auto-generates SECRET_KEY, RATE_LIMIT_ENABLED so the login
limit does not trip, BCRYPT_ROUNDS to keep hashing fast, and ALLOWED_HOSTS
so TrustedHostMiddleware accepts TestClient's "testserver" host.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

# CRITICAL: Set before any app import -- Settings is read once at import time.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.guard import AccessGuard
from auth.models import User
from auth.passwords import hash_password
from auth.store import UserStore
from auth.tokens import SessionTokenCodec
from catalogue.store import OptionStore
from projects.registry import ProjectRegistry
from projects.store import ProjectStore
from storage.blob import LocalBlobStore

TEST_SECRET = "test-secret-key-with-at-least-32-characters"


@dataclass
class ApiHarness:
    """Everything an integration test needs: the client plus direct store access."""

    client: TestClient
    user_store: UserStore
    codec: SessionTokenCodec
    upload_dir: Path

    def create_user(self, username: str, role: str, password: str = "secret123") -> tuple[int, str]:
        """Insert a user directly and return (user_id, bearer token)."""
        uid = self.user_store.create_user(
            User(username=username, role=role, hashed_password=hash_password(password, rounds=4))
        )
        return uid, self.codec.issue(uid, role)

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, ProjectStore, OptionStore]:
    """Create stores sharing one named shared-memory SQLite database.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    url = f"sqlite:///file:test_designdesk_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(url), ProjectStore(url), OptionStore(url)


def _patch_lifespan(
    user_store: UserStore,
    project_store: ProjectStore,
    catalogue: OptionStore,
    codec: SessionTokenCodec,
    upload_dir: Path,
):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.project_store = project_store
        app.state.catalogue = catalogue
        app.state.token_codec = codec
        app.state.guard = AccessGuard(codec, user_store)
        app.state.projects = ProjectRegistry(project_store, user_store)
        app.state.blob_store = LocalBlobStore(upload_dir, "/uploads")
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request, tmp_path_factory) -> Generator[ApiHarness, None, None]:
    """Yield an ApiHarness backed by isolated in-memory stores.

    The TestClient uses the real FastAPI app with a patched lifespan so tests
    hit real route handlers, dependencies and exception handlers.
    """
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    user_store, project_store, catalogue = _make_test_stores(suffix)
    codec = SessionTokenCodec(TEST_SECRET, expire_seconds=3600)
    upload_dir = tmp_path_factory.mktemp("uploads")

    app.router.lifespan_context = _patch_lifespan(user_store, project_store, catalogue, codec, upload_dir)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiHarness(client=client, user_store=user_store, codec=codec, upload_dir=upload_dir)

    catalogue.close()
    project_store.close()
    user_store.close()
