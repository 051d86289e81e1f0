from __future__ import annotations

from flask import Blueprint, jsonify

from jobly.core import database
from jobly.core.security import create_token, ensure_admin, ensure_admin_or_user
from jobly.schemas import UserNew, UserUpdate, parse_body
from jobly.services.users import User

bp = Blueprint("users", __name__)


@bp.post("/users")
@ensure_admin
def create_user():
    """Admin-only signup; unlike /auth/register it may create admins."""
    data = parse_body(UserNew)
    with database.get_db() as db:
        user = User.register(db, data.model_dump(by_alias=True))
    return jsonify({"user": user, "token": create_token(user)}), 201


@bp.get("/users")
@ensure_admin
def list_users():
    with database.get_db() as db:
        users = User.find_all(db)
    return jsonify({"users": users})


@bp.get("/users/<username>")
@ensure_admin_or_user
def get_user(username):
    with database.get_db() as db:
        user = User.get(db, username)
    return jsonify({"user": user})


@bp.patch("/users/<username>")
@ensure_admin_or_user
def update_user(username):
    data = parse_body(UserUpdate)
    with database.get_db() as db:
        user = User.update(db, username, data.payload())
    return jsonify({"user": user})


@bp.delete("/users/<username>")
@ensure_admin_or_user
def delete_user(username):
    with database.get_db() as db:
        User.remove(db, username)
    return jsonify({"deleted": username})


@bp.post("/users/<username>/jobs/<int:job_id>")
@ensure_admin_or_user
def apply_to_job(username, job_id):
    with database.get_db() as db:
        User.apply_to_job(db, username, job_id)
    return jsonify({"applied": job_id})
