from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import structlog

from jobly.core.database import Database
from jobly.core.entities import COMPANY_COLUMNS, COMPANY_FILTERS
from jobly.core.errors import DuplicateError, NotFoundError
from jobly.core.sql import sql_for_filters, sql_for_partial_update
from jobly.services.jobs import Job

logger = structlog.get_logger(__name__)

_RETURNING = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


class Company:
    """Data access for the companies table."""

    @staticmethod
    def create(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a company.

        ``data`` holds handle, name, description, numEmployees, logoUrl.

        Raises:
            DuplicateError: the handle is taken.
        """
        duplicate = db.query(
            "SELECT handle FROM companies WHERE handle = $1",
            [data["handle"]],
        )
        if duplicate:
            raise DuplicateError(f"Duplicate company: {data['handle']}")

        rows = db.query(
            f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_RETURNING}""",
            [
                data["handle"],
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        logger.info("company_created", handle=data["handle"])
        return rows[0]

    @staticmethod
    def find_all(db: Database, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """All companies ordered by name, optionally narrowed by name / employee range."""
        where, values = sql_for_filters(criteria or {}, COMPANY_FILTERS)
        sql = f"SELECT {_RETURNING} FROM companies"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY name"
        return db.query(sql, values)

    @staticmethod
    def get(db: Database, handle: str) -> Dict[str, Any]:
        """
        A company and every one of its jobs.

        Returns { handle, name, description, numEmployees, logoUrl, jobs }
        where jobs is [{ id, title, salary, equity }, ...], possibly empty.
        """
        rows = db.query(f"SELECT {_RETURNING} FROM companies WHERE handle = $1", [handle])
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = rows[0]
        company["jobs"] = [
            {key: job[key] for key in ("id", "title", "salary", "equity")}
            for job in Job.find_for_company(db, handle)
        ]
        return company

    @staticmethod
    def update(db: Database, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the fields present in ``data`` change.

        Raises:
            ValidationError: ``data`` is empty.
            NotFoundError: no such company.
        """
        set_cols, values = sql_for_partial_update(data, COMPANY_COLUMNS)
        handle_idx = len(values) + 1

        rows = db.query(
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {_RETURNING}""",
            [*values, handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        logger.info("company_updated", handle=handle, fields=list(data))
        return rows[0]

    @staticmethod
    def remove(db: Database, handle: str) -> None:
        rows = db.query("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        logger.info("company_removed", handle=handle)
