from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import structlog

from jobly.core.database import Database
from jobly.core.entities import JOB_COLUMNS, JOB_FILTERS
from jobly.core.errors import DuplicateError, NotFoundError
from jobly.core.sql import sql_for_filters, sql_for_partial_update

logger = structlog.get_logger(__name__)

_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


class Job:
    """Data access for the jobs table."""

    @staticmethod
    def create(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a job posting.

        ``data`` holds title, salary, equity, companyHandle.

        Raises:
            DuplicateError: the company already lists a job with this title.
            NotFoundError: the company does not exist.
        """
        company = db.query("SELECT handle FROM companies WHERE handle = $1", [data["companyHandle"]])
        if not company:
            raise NotFoundError(f"No company: {data['companyHandle']}")

        duplicate = db.query(
            "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
            [data["title"], data["companyHandle"]],
        )
        if duplicate:
            raise DuplicateError(f"Duplicate job: {data['title']}")

        rows = db.query(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_RETURNING}""",
            [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
        )
        logger.info("job_created", job_id=rows[0]["id"], company=data["companyHandle"])
        return rows[0]

    @staticmethod
    def find_all(db: Database, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """All jobs ordered by title, optionally filtered by title / minSalary / hasEquity."""
        where, values = sql_for_filters(criteria or {}, JOB_FILTERS)
        sql = f"SELECT {_RETURNING} FROM jobs"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY title, id"
        return db.query(sql, values)

    @staticmethod
    def find_for_company(
        db: Database, handle: str, criteria: Optional[Mapping[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """A company's jobs ordered by id; ``criteria`` narrows them further."""
        where, values = sql_for_filters(criteria or {}, JOB_FILTERS, values=[handle])
        sql = f"SELECT {_RETURNING} FROM jobs WHERE company_handle = $1"
        if where:
            sql += f" AND {where}"
        sql += " ORDER BY id"
        return db.query(sql, values)

    @staticmethod
    def get(db: Database, job_id: int) -> Dict[str, Any]:
        rows = db.query(f"SELECT {_RETURNING} FROM jobs WHERE id = $1", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return rows[0]

    @staticmethod
    def update(db: Database, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the fields present in ``data`` change.

        Raises:
            ValidationError: ``data`` is empty.
            NotFoundError: no such job.
        """
        set_cols, values = sql_for_partial_update(data, JOB_COLUMNS)
        id_idx = len(values) + 1

        rows = db.query(
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {_RETURNING}""",
            [*values, job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("job_updated", job_id=job_id, fields=list(data))
        return rows[0]

    @staticmethod
    def remove(db: Database, job_id: int) -> None:
        rows = db.query("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("job_removed", job_id=job_id)
