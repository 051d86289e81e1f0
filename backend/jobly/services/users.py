from __future__ import annotations

from typing import Any, Dict, List, Mapping

import structlog

from jobly.core.database import Database
from jobly.core.entities import USER_COLUMNS
from jobly.core.errors import DuplicateError, NotFoundError, UnauthorizedError
from jobly.core.security import check_password, hash_password
from jobly.core.sql import sql_for_partial_update

logger = structlog.get_logger(__name__)

_RETURNING = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


class User:
    """Data access for users and their job applications."""

    @staticmethod
    def authenticate(db: Database, username: str, password: str) -> Dict[str, Any]:
        """
        Look up a user by credentials.

        Raises:
            UnauthorizedError: unknown user or wrong password.
        """
        rows = db.query(f"SELECT password, {_RETURNING} FROM users WHERE username = $1", [username])
        if rows:
            user = rows[0]
            if check_password(user.pop("password"), password):
                return user

        logger.info("login_failed", username=username)
        raise UnauthorizedError("Invalid username/password")

    @staticmethod
    def register(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a user with a hashed password.

        ``data`` holds username, password, firstName, lastName, email and
        optionally isAdmin.

        Raises:
            DuplicateError: the username is taken.
        """
        duplicate = db.query("SELECT username FROM users WHERE username = $1", [data["username"]])
        if duplicate:
            raise DuplicateError(f"Duplicate username: {data['username']}")

        rows = db.query(
            f"""INSERT INTO users
                (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {_RETURNING}""",
            [
                data["username"],
                hash_password(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )
        logger.info("user_registered", username=data["username"])
        return rows[0]

    @staticmethod
    def find_all(db: Database) -> List[Dict[str, Any]]:
        return db.query(f"SELECT {_RETURNING} FROM users ORDER BY username")

    @staticmethod
    def get(db: Database, username: str) -> Dict[str, Any]:
        """A user plus the ids of the jobs they applied to."""
        rows = db.query(f"SELECT {_RETURNING} FROM users WHERE username = $1", [username])
        if not rows:
            raise NotFoundError(f"No user: {username}")

        user = rows[0]
        applied = db.query(
            "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
            [username],
        )
        user["applications"] = [row["job_id"] for row in applied]
        return user

    @staticmethod
    def update(db: Database, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update; a new ``password`` is hashed before it is stored.

        Raises:
            ValidationError: ``data`` is empty.
            NotFoundError: no such user.
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = hash_password(data["password"])

        set_cols, values = sql_for_partial_update(data, USER_COLUMNS)
        username_idx = len(values) + 1

        rows = db.query(
            f"""UPDATE users
                SET {set_cols}
                WHERE username = ${username_idx}
                RETURNING {_RETURNING}""",
            [*values, username],
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")

        logger.info("user_updated", username=username, fields=sorted(data))
        return rows[0]

    @staticmethod
    def remove(db: Database, username: str) -> None:
        rows = db.query("DELETE FROM users WHERE username = $1 RETURNING username", [username])
        if not rows:
            raise NotFoundError(f"No user: {username}")
        logger.info("user_removed", username=username)

    @staticmethod
    def apply_to_job(db: Database, username: str, job_id: int) -> None:
        """
        Record that ``username`` applied to ``job_id``.

        Raises:
            NotFoundError: no such job or user.
            DuplicateError: already applied.
        """
        if not db.query("SELECT id FROM jobs WHERE id = $1", [job_id]):
            raise NotFoundError(f"No job: {job_id}")
        if not db.query("SELECT username FROM users WHERE username = $1", [username]):
            raise NotFoundError(f"No user: {username}")

        existing = db.query(
            "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
            [username, job_id],
        )
        if existing:
            raise DuplicateError(f"Already applied: {username} to job {job_id}")

        db.query("INSERT INTO applications (username, job_id) VALUES ($1, $2)", [username, job_id])
        logger.info("job_applied", username=username, job_id=job_id)
