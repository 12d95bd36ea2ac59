"""
Job records.

create / find_all / get / update / remove against the jobs table.
Jobs are identified by an integer surrogate id and belong to one company.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text

from jobly.core.errors import NotFoundError
from jobly.db.session import Database
from jobly.schemas.schemas import JobCreate, JobUpdate
from jobly.services.common import (
    equity_to_db, format_equity, reject_fields, reject_nulls, validate_payload,
)
from jobly.utils.filters import JOB_FILTERS, compile_filters
from jobly.utils.sql import BIND, INT_MAX, bind_name, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

JS_TO_SQL = {"companyHandle": "company_handle"}

IMMUTABLE_FIELDS = ("id", "companyHandle")
REQUIRED_FIELDS = ("title",)


def check_job_id(job_id: int) -> None:
    """Ids the id column cannot hold never exist; fail before they reach the driver."""
    if not 1 <= job_id <= INT_MAX:
        raise NotFoundError(f"No job: {job_id}")


def _to_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": format_equity(row["equity"]),
        "companyHandle": row["companyHandle"],
    }


class JobService:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job and return {id, title, salary, equity, companyHandle}.

        Raises NotFoundError if the company does not exist.
        """
        job = validate_payload(JobCreate, data)
        with self.db.session() as s:
            company = s.execute(
                text("SELECT handle FROM companies WHERE handle = :handle"),
                {"handle": job["companyHandle"]},
            ).fetchone()
            if not company:
                raise NotFoundError(f"No company: {job['companyHandle']}")

            row = s.execute(
                text(f"""
                    INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES (:title, :salary, :equity, :company_handle)
                    RETURNING {JOB_COLUMNS}
                """),
                {
                    "title": job["title"],
                    "salary": job.get("salary"),
                    "equity": equity_to_db(job.get("equity")),
                    "company_handle": job["companyHandle"],
                },
            ).mappings().one()

        logger.info("Created job %s for company %s", row["id"], row["companyHandle"])
        return _to_record(row)

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find jobs matching every supplied filter, ordered by id.

        filters: title (substring), minSalary, maxSalary, hasEquity.
        """
        clause = compile_filters(filters, JOB_FILTERS, placeholder=BIND)
        with self.db.session() as s:
            rows = s.execute(
                text(f"SELECT {JOB_COLUMNS} FROM jobs {clause.where} ORDER BY id"),
                clause.params,
            ).mappings().all()
        return [_to_record(r) for r in rows]

    def find_by_company(self, handle: str) -> List[Dict[str, Any]]:
        with self.db.session() as s:
            rows = s.execute(
                text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = :handle ORDER BY id"),
                {"handle": handle},
            ).mappings().all()
        return [_to_record(r) for r in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        check_job_id(job_id)
        with self.db.session() as s:
            row = s.execute(
                text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
                {"id": job_id},
            ).mappings().first()
        if not row:
            raise NotFoundError(f"No job: {job_id}")
        return _to_record(row)

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a job: title, salary and equity only.

        Any id or companyHandle in the payload is rejected, even if unchanged.
        """
        reject_fields(data, IMMUTABLE_FIELDS)
        changes = validate_payload(JobUpdate, data)
        reject_nulls(changes, REQUIRED_FIELDS)
        if "equity" in changes:
            changes["equity"] = equity_to_db(changes["equity"])

        upd = sql_for_partial_update(changes, JS_TO_SQL, placeholder=BIND)
        key = bind_name(upd.next_index)
        check_job_id(job_id)
        with self.db.session() as s:
            row = s.execute(
                text(f"""
                    UPDATE jobs SET {upd.set_cols}
                    WHERE id = :{key}
                    RETURNING {JOB_COLUMNS}
                """),
                {**upd.params, key: job_id},
            ).mappings().first()
        if not row:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("Updated job %s: %s", job_id, ", ".join(changes))
        return _to_record(row)

    def remove(self, job_id: int) -> None:
        check_job_id(job_id)
        with self.db.session() as s:
            row = s.execute(
                text("DELETE FROM jobs WHERE id = :id RETURNING id"),
                {"id": job_id},
            ).fetchone()
        if not row:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Deleted job %s", job_id)
