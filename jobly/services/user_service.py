"""
User accounts and job applications.

Passwords are stored only as bcrypt hashes and never returned.
An application is one (username, job_id) row; duplicates are an error.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.auth import hash_password, verify_password
from jobly.core.config import Settings
from jobly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.db.session import Database
from jobly.schemas.schemas import UserCreate, UserUpdate
from jobly.services.common import reject_fields, reject_nulls, validate_payload
from jobly.services.job_service import check_job_id
from jobly.utils.sql import BIND, bind_name, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

JS_TO_SQL = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}

IMMUTABLE_FIELDS = ("username",)
REQUIRED_FIELDS = ("password", "firstName", "lastName", "email", "isAdmin")


def _to_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    user = dict(row)
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def _ensure_user(s: Session, username: str) -> None:
    if not s.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).fetchone():
        raise NotFoundError(f"No user: {username}")


def _ensure_job(s: Session, job_id: int) -> None:
    check_job_id(job_id)
    if not s.execute(text("SELECT id FROM jobs WHERE id = :id"), {"id": job_id}).fetchone():
        raise NotFoundError(f"No job: {job_id}")


class UserService:
    def __init__(self, db: Database, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """Return the user if the password matches; UnauthorizedError otherwise."""
        with self.db.session() as s:
            row = s.execute(
                text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
                {"username": username},
            ).mappings().first()

        if row and verify_password(password, row["password"], self.settings):
            user = _to_record(row)
            del user["password"]
            return user
        raise UnauthorizedError("Invalid username/password")

    def register(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a user; isAdmin defaults to False.

        Raises BadRequestError on a duplicate username or email.
        """
        user = validate_payload(UserCreate, data)
        with self.db.session() as s:
            duplicate = s.execute(
                text("SELECT username, email FROM users WHERE username = :username OR email = :email"),
                {"username": user["username"], "email": user["email"]},
            ).fetchone()
            if duplicate:
                if duplicate[0] == user["username"]:
                    raise BadRequestError(f"Duplicate username: {user['username']}")
                raise BadRequestError(f"Duplicate email: {user['email']}")

            row = s.execute(
                text(f"""
                    INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                    VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                    RETURNING {USER_COLUMNS}
                """),
                {
                    "username": user["username"],
                    "password": hash_password(user["password"], self.settings),
                    "first_name": user["firstName"],
                    "last_name": user["lastName"],
                    "email": user["email"],
                    "is_admin": user.get("isAdmin", False),
                },
            ).mappings().one()

        logger.info("Registered user %s (admin=%s)", row["username"], bool(row["isAdmin"]))
        return _to_record(row)

    def find_all(self) -> List[Dict[str, Any]]:
        with self.db.session() as s:
            rows = s.execute(
                text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
            ).mappings().all()
        return [_to_record(r) for r in rows]

    def get(self, username: str) -> Dict[str, Any]:
        """Return the user plus the ids of the jobs they applied to."""
        with self.db.session() as s:
            row = s.execute(
                text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
                {"username": username},
            ).mappings().first()
            if not row:
                raise NotFoundError(f"No user: {username}")

            job_ids = s.execute(
                text("SELECT job_id FROM applications WHERE username = :username ORDER BY job_id"),
                {"username": username},
            ).scalars().all()

        user = _to_record(row)
        user["jobs"] = list(job_ids)
        return user

    def update(self, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a user: firstName, lastName, password, email, isAdmin.

        A new password is hashed before it is stored. The username cannot change.
        """
        reject_fields(data, IMMUTABLE_FIELDS)
        changes = validate_payload(UserUpdate, data)
        reject_nulls(changes, REQUIRED_FIELDS)
        if "password" in changes:
            changes["password"] = hash_password(changes["password"], self.settings)

        upd = sql_for_partial_update(changes, JS_TO_SQL, placeholder=BIND)
        key = bind_name(upd.next_index)
        try:
            with self.db.session() as s:
                row = s.execute(
                    text(f"""
                        UPDATE users SET {upd.set_cols}
                        WHERE username = :{key}
                        RETURNING {USER_COLUMNS}
                    """),
                    {**upd.params, key: username},
                ).mappings().first()
        except IntegrityError:
            raise BadRequestError(f"Duplicate email: {changes.get('email')}") from None
        if not row:
            raise NotFoundError(f"No user: {username}")

        logger.info("Updated user %s: %s", username, ", ".join(changes))
        return _to_record(row)

    def remove(self, username: str) -> None:
        with self.db.session() as s:
            row = s.execute(
                text("DELETE FROM users WHERE username = :username RETURNING username"),
                {"username": username},
            ).fetchone()
        if not row:
            raise NotFoundError(f"No user: {username}")
        logger.info("Deleted user %s", username)

    def apply_to_job(self, username: str, job_id: int) -> None:
        """
        Record that username applied to job_id.

        NotFoundError if either side is missing; BadRequestError if the
        application already exists.
        """
        self.apply_many(username, [job_id])

    def apply_many(self, username: str, job_ids: Iterable[int]) -> None:
        """Insert several applications for one user; all or none are stored."""
        job_ids = list(job_ids)
        try:
            with self.db.session() as s:
                _ensure_user(s, username)
                for job_id in job_ids:
                    _ensure_job(s, job_id)
                    s.execute(
                        text("INSERT INTO applications (username, job_id) VALUES (:username, :job_id)"),
                        {"username": username, "job_id": job_id},
                    )
        except IntegrityError:
            raise BadRequestError(
                f"Duplicate application: {username} already applied to {', '.join(map(str, job_ids))}"
            ) from None
        logger.info("User %s applied to jobs %s", username, job_ids)
