from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Sequence

from psycopg import RawCursor
from psycopg.rows import dict_row
from sqlalchemy import Connection, create_engine
from sqlalchemy.orm import DeclarativeBase

from jobly.core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)


class Database:
    """
    Runs hand-written statements on one SQLAlchemy connection.

    Statements use PostgreSQL's native ``$1, $2, ...`` placeholders, so they
    go straight to psycopg through a RawCursor instead of SQLAlchemy's
    ``text()`` binds. Rows come back as dicts keyed by column (or alias).
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        driver_conn = self.connection.connection.driver_connection
        with RawCursor(driver_conn, row_factory=dict_row) as cur:
            cur.execute(sql, list(params))
            if cur.description is None:
                return []
            return cur.fetchall()


@contextmanager
def get_db() -> Generator[Database, None, None]:
    """One transaction per block: committed on success, rolled back on error."""
    with engine.begin() as connection:
        yield Database(connection)
