"""
Company records, keyed by their immutable handle.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.db.session import Database
from jobly.schemas.schemas import CompanyCreate, CompanyUpdate
from jobly.services.common import reject_fields, reject_nulls, validate_payload
from jobly.services.job_service import JobService
from jobly.utils.filters import COMPANY_FILTERS, compile_filters
from jobly.utils.sql import BIND, bind_name, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, num_employees AS "numEmployees", description, logo_url AS "logoUrl"'
)

JS_TO_SQL = {"numEmployees": "num_employees", "logoUrl": "logo_url"}

IMMUTABLE_FIELDS = ("handle",)
REQUIRED_FIELDS = ("name", "description")


class CompanyService:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company and return {handle, name, description, numEmployees, logoUrl}.

        Raises BadRequestError if the handle (or name) is already taken.
        """
        company = validate_payload(CompanyCreate, data)
        with self.db.session() as s:
            duplicates = s.execute(
                text("SELECT handle FROM companies WHERE handle = :handle OR name = :name"),
                {"handle": company["handle"], "name": company["name"]},
            ).fetchall()
            if any(d.handle == company["handle"] for d in duplicates):
                raise BadRequestError(f"Duplicate company: {company['handle']}")
            if duplicates:
                raise BadRequestError(f"Duplicate company name: {company['name']}")

            row = s.execute(
                text(f"""
                    INSERT INTO companies (handle, name, description, num_employees, logo_url)
                    VALUES (:handle, :name, :description, :num_employees, :logo_url)
                    RETURNING {COMPANY_COLUMNS}
                """),
                {
                    "handle": company["handle"],
                    "name": company["name"],
                    "description": company["description"],
                    "num_employees": company.get("numEmployees"),
                    "logo_url": company.get("logoUrl"),
                },
            ).mappings().one()

        logger.info("Created company %s", row["handle"])
        return dict(row)

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find companies matching every supplied filter, ordered by name.

        filters: name (substring), minEmployees, maxEmployees.
        """
        clause = compile_filters(filters, COMPANY_FILTERS, placeholder=BIND)
        with self.db.session() as s:
            rows = s.execute(
                text(f"SELECT {COMPANY_COLUMNS} FROM companies {clause.where} ORDER BY name"),
                clause.params,
            ).mappings().all()
        return [dict(r) for r in rows]

    def get(self, handle: str) -> Dict[str, Any]:
        """Return the company plus its jobs."""
        with self.db.session() as s:
            row = s.execute(
                text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
                {"handle": handle},
            ).mappings().first()
        if not row:
            raise NotFoundError(f"No company: {handle}")

        company = dict(row)
        company["jobs"] = JobService(self.db).find_by_company(handle)
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a company: name, description, numEmployees, logoUrl.

        The handle cannot be changed.
        """
        reject_fields(data, IMMUTABLE_FIELDS)
        changes = validate_payload(CompanyUpdate, data)
        reject_nulls(changes, REQUIRED_FIELDS)

        upd = sql_for_partial_update(changes, JS_TO_SQL, placeholder=BIND)
        key = bind_name(upd.next_index)
        try:
            with self.db.session() as s:
                row = s.execute(
                    text(f"""
                        UPDATE companies SET {upd.set_cols}
                        WHERE handle = :{key}
                        RETURNING {COMPANY_COLUMNS}
                    """),
                    {**upd.params, key: handle},
                ).mappings().first()
        except IntegrityError:
            raise BadRequestError(f"Duplicate company name: {changes.get('name')}") from None
        if not row:
            raise NotFoundError(f"No company: {handle}")

        logger.info("Updated company %s: %s", handle, ", ".join(changes))
        return dict(row)

    def remove(self, handle: str) -> None:
        """Delete a company; its jobs go with it (ON DELETE CASCADE)."""
        with self.db.session() as s:
            row = s.execute(
                text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
                {"handle": handle},
            ).fetchone()
        if not row:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Deleted company %s", handle)
