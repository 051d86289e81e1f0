"""
Token and password helpers plus the auth hooks used by the routes.

``authenticate_jwt`` runs before every request. When a valid bearer token is
present its claims (``username``, ``isAdmin``) are stored on ``flask.g.user``;
a missing or invalid token is not an error at that point, it only leaves
``g.user`` unset. Routes then declare what they need with ``ensure_logged_in``,
``ensure_admin`` or ``ensure_admin_or_user``.
"""
from __future__ import annotations

import time
from functools import wraps
from typing import Any, Dict

import jwt  # PyJWT
import structlog
from flask import g, request
from werkzeug.security import check_password_hash, generate_password_hash

from jobly.core.config import settings
from jobly.core.errors import UnauthorizedError

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


def create_token(user: Dict[str, Any]) -> str:
    iat = int(time.time())
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": iat,
        "exp": iat + settings.JWT_TTL_SECONDS,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[ALGORITHM],
        options={"require": ["exp", "iat"]},
    )


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def check_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def authenticate_jwt() -> None:
    g.user = None
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return

    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return
    try:
        g.user = verify_token(token.strip())
    except jwt.InvalidTokenError as exc:
        logger.debug("invalid_token_ignored", error=str(exc))


def _current_user():
    return g.get("user")


def ensure_logged_in(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _current_user():
            raise UnauthorizedError()
        return view(*args, **kwargs)

    return wrapper


def ensure_admin(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = _current_user()
        if not user or not user.get("isAdmin"):
            raise UnauthorizedError()
        return view(*args, **kwargs)

    return wrapper


def ensure_admin_or_user(view):
    """Allow admins, or the user named by the route's ``username`` argument."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = _current_user()
        if not user:
            raise UnauthorizedError()
        if not user.get("isAdmin") and user.get("username") != kwargs.get("username"):
            raise UnauthorizedError()
        return view(*args, **kwargs)

    return wrapper
