from __future__ import annotations

from flask import Blueprint, jsonify

from jobly.core import database
from jobly.core.security import create_token
from jobly.schemas import UserAuth, UserRegister, parse_body
from jobly.services.users import User

bp = Blueprint("auth", __name__)


@bp.post("/auth/token")
def get_token():
    creds = parse_body(UserAuth)
    with database.get_db() as db:
        user = User.authenticate(db, creds.username, creds.password)
    return jsonify({"token": create_token(user)})


@bp.post("/auth/register")
def register():
    """Public signup; always creates a non-admin user."""
    data = parse_body(UserRegister)
    with database.get_db() as db:
        user = User.register(db, data.model_dump(by_alias=True))
    return jsonify({"token": create_token(user)}), 201
