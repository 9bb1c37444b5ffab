"""
api/routes/auth.py -- Registration and login endpoints.

Routes:
  POST /api/register  -- create a designer or client account (public)
  POST /api/login     -- password login; returns a bearer token (public)

Security:
  POST /login is rate-limited per client IP (LOGIN_RATE_LIMIT, default 10/minute).
  authenticate_user() provides timing equalization -- use it, never inline.
  Unknown username and wrong password produce the same 400 response.
  Cache-Control: no-store on login responses.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from auth import accounts
from auth.store import UserStore
from auth.tokens import SessionTokenCodec
from core.config import get_settings
from core.errors import Forbidden

_settings = get_settings()

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
def register(request: Request, body: RegisterRequest) -> MessageResponse:
    """Register a new user.

    Fails with invalid_role for roles other than designer/client and with
    duplicate_username when the username is taken.
    """
    if not _settings.self_registration_enabled:
        raise Forbidden("Self-registration is disabled.")

    user_store: UserStore = request.app.state.user_store
    accounts.register_user(
        user_store,
        body.username,
        body.password,
        body.role,
        rounds=_settings.bcrypt_rounds,
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
@limiter.limit(_settings.login_rate_limit)  # below @router so the route registers the limited wrapper
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password and return a session token.

    Failures raise InvalidCredentials, rendered by the AppError handler.
    """
    user_store: UserStore = request.app.state.user_store
    codec: SessionTokenCodec = request.app.state.token_codec
    token, user = accounts.login(user_store, codec, body.username, body.password)
    resp = JSONResponse(content=LoginResponse(token=token, role=user.role).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
