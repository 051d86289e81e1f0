"""
Pytest fixtures for Flask-based testing.
Integration tests run inside a transaction that rolls back after each test.
Set DATABASE_URL to a reachable Postgres URL to run them; otherwise they skip.
"""
from collections.abc import Generator
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

import jobly.models.company  # noqa: F401 - registers tables on Base.metadata
import jobly.models.job  # noqa: F401
import jobly.models.user  # noqa: F401
from jobly.core import database as db_module
from jobly.core.config import settings
from jobly.core.database import Base, Database
from jobly.core.security import create_token, hash_password
from jobly.main import app as flask_app


def _is_postgres(url: str) -> bool:
    return "postgresql" in (url or "").split(":")[0].lower()


def _seed(db: Database) -> None:
    db.query("DELETE FROM applications")
    db.query("DELETE FROM jobs")
    db.query("DELETE FROM companies")
    db.query("DELETE FROM users")

    db.query(
        """INSERT INTO companies (handle, name, num_employees, description, logo_url)
           VALUES ('c1', 'C1', 1, 'Desc1', 'http://c1.img'),
                  ('c2', 'C2', 2, 'Desc2', 'http://c2.img'),
                  ('c3', 'C3', 3, 'Desc3', 'http://c3.img')"""
    )
    db.query(
        """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
           VALUES ('u1', $1, 'U1F', 'U1L', 'u1@email.com', false),
                  ('u2', $2, 'U2F', 'U2L', 'u2@email.com', true)""",
        [hash_password("password1"), hash_password("password2")],
    )
    db.query(
        """INSERT INTO jobs (title, salary, equity, company_handle)
           VALUES ('j1', 100000, 0, 'c1'),
                  ('j2', 500000, 0.5, 'c2')"""
    )
    db.query(
        """INSERT INTO applications (username, job_id)
           SELECT 'u1', id FROM jobs WHERE title = 'j2'"""
    )


@pytest.fixture(scope="session")
def engine():
    if not _is_postgres(settings.DATABASE_URL):
        pytest.skip("Integration tests require Postgres DATABASE_URL")
    engine = create_engine(settings.DATABASE_URL)
    try:
        Base.metadata.create_all(engine)
    except OperationalError as exc:
        engine.dispose()
        pytest.skip(f"Postgres not reachable: {exc.orig}")
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Database, None, None]:
    """Database seeded with c1-c3, j1/j2, u1 (user) and u2 (admin); rolled back afterwards."""
    connection = engine.connect()
    transaction = connection.begin()
    database = Database(connection)
    _seed(database)
    yield database
    transaction.rollback()
    connection.close()


@pytest.fixture
def job_ids(db) -> dict:
    rows = db.query("SELECT id, title FROM jobs")
    return {row["title"]: row["id"] for row in rows}


@pytest.fixture
def client(db):
    """Flask test client whose requests share the rolling-back connection.

    Each request runs in a savepoint so a failed statement does not poison
    the rest of the test.
    """
    original_get_db = db_module.get_db

    @contextmanager
    def override_get_db():
        with db.connection.begin_nested():
            yield db

    db_module.get_db = override_get_db
    flask_app.config["TESTING"] = True
    try:
        with flask_app.test_client() as c:
            yield c
    finally:
        db_module.get_db = original_get_db


@pytest.fixture
def client_no_db():
    """Test client without DB override, for routes that fail before touching the database."""
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c


@pytest.fixture
def u1_token() -> str:
    return create_token({"username": "u1", "isAdmin": False})


@pytest.fixture
def u2_token() -> str:
    return create_token({"username": "u2", "isAdmin": True})
