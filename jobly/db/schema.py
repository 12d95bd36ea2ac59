"""
Table definitions.

Queries are written as raw SQL; these Core tables only exist to create
(and drop) the schema on PostgreSQL and SQLite alike.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, ForeignKey, Integer, MetaData,
    Numeric, PrimaryKeyConstraint, Table, Text, String, false,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

companies = Table(
    "companies", metadata,
    Column("handle", String(25), primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("num_employees", Integer),
    Column("description", Text, nullable=False),
    Column("logo_url", Text),
    CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("salary", Integer),
    Column("equity", Numeric),
    Column(
        "company_handle", String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    ),
    CheckConstraint("salary >= 0", name="ck_jobs_salary"),
    CheckConstraint("equity <= 1.0 AND equity >= 0", name="ck_jobs_equity"),
)

users = Table(
    "users", metadata,
    Column("username", String(25), primary_key=True),
    Column("password", Text, nullable=False),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("is_admin", Boolean, nullable=False, server_default=false()),
)

applications = Table(
    "applications", metadata,
    Column("username", String(25), ForeignKey("users.username", ondelete="CASCADE")),
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE")),
    PrimaryKeyConstraint("username", "job_id"),
)


def init_schema(engine: Engine) -> None:
    metadata.create_all(engine)


def drop_schema(engine: Engine) -> None:
    metadata.drop_all(engine)
