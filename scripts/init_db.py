#!/usr/bin/env python3
"""
Schema + demo data script

Creates the tables and loads a few companies, jobs and users.
Usage: python scripts/init_db.py [--drop]
"""
import argparse

from jobly.core.config import get_settings
from jobly.core.logging import configure_logging
from jobly.db import Database, drop_schema, init_schema
from jobly.services import CompanyService, JobService, UserService

COMPANIES = [
    {"handle": "anderson-arias-morrow", "name": "Anderson, Arias and Morrow", "numEmployees": 245,
     "description": "Somebody program how I. Face give away discussion view act inside.",
     "logoUrl": "/logos/logo3.png"},
    {"handle": "bauer-gallagher", "name": "Bauer-Gallagher", "numEmployees": 862,
     "description": "Difficult ready trip question produce produce someone.", "logoUrl": None},
    {"handle": "watson-davis", "name": "Watson-Davis", "numEmployees": 819,
     "description": "Year join loss.", "logoUrl": "/logos/logo3.png"},
]

JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": "0", "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": "0.04", "companyHandle": "anderson-arias-morrow"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": "0.08", "companyHandle": "bauer-gallagher"},
    {"title": "Early years teacher", "salary": 55000, "equity": None, "companyHandle": "watson-davis"},
]

USERS = [
    {"username": "testuser", "password": "password", "firstName": "Test", "lastName": "User",
     "email": "testuser@jobly.com", "isAdmin": False},
    {"username": "testadmin", "password": "password", "firstName": "Test", "lastName": "Admin!",
     "email": "testadmin@jobly.com", "isAdmin": True},
]


def main():
    parser = argparse.ArgumentParser(description="Create the Jobly schema and load demo data")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    settings = get_settings()
    logger = configure_logging(settings.log_level)
    db = Database(settings.sqlalchemy_url, echo=settings.debug)

    if args.drop:
        drop_schema(db.engine)
    init_schema(db.engine)

    companies, jobs, users = CompanyService(db), JobService(db), UserService(db, settings)
    for company in COMPANIES:
        companies.create(company)
    job_ids = [jobs.create(job)["id"] for job in JOBS]
    for user in USERS:
        users.register(user)
    users.apply_many("testuser", job_ids[:2])

    logger.info("Loaded %d companies, %d jobs, %d users", len(COMPANIES), len(JOBS), len(USERS))
    db.dispose()


if __name__ == "__main__":
    main()
