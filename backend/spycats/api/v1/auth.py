"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, g

from spycats.api.deps import (
    auth_service,
    current_claims,
    envelope,
    json_response,
    load_json,
    require_auth,
    timing,
    translate_service_errors,
)
from spycats.schemas import (
    AuthSessionSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from spycats.services.identity.dto import UserAuthIn, UserRegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
session_schema = AuthSessionSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()


@bp.post("/register")
@timing
@translate_service_errors
def register():
    """Create an account and return the user with a fresh token pair."""

    payload = load_json(register_schema)
    session = auth_service().register(UserRegisterIn(**payload))
    return json_response(envelope(session_schema.dump(session)), status=201)


@bp.post("/login")
@timing
@translate_service_errors
def login():
    """Authenticate credentials and issue a token pair."""

    payload = load_json(login_schema)
    session = auth_service().login(UserAuthIn(**payload))
    return json_response(envelope(session_schema.dump(session)))


@bp.post("/refresh")
@timing
@translate_service_errors
def refresh():
    """Rotate the refresh token; the previous one stops working."""

    payload = load_json(refresh_schema)
    pair = auth_service().refresh(payload["refresh_token"])
    return json_response(envelope(token_schema.dump(pair)))


@bp.post("/logout")
@require_auth
@timing
@translate_service_errors
def logout():
    """Revoke the refresh session and blacklist the presented access token."""

    auth_service().logout(current_claims().user_id, g.access_token)
    return json_response(envelope({"message": "Logged out"}))


@bp.get("/me")
@require_auth
@timing
@translate_service_errors
def me():
    """Return the authenticated user profile."""

    user = auth_service().me(current_claims().user_id)
    return json_response(envelope(user_schema.dump(user)))
