"""
Services - per-entity data access (companies, jobs, users/applications).
"""
from jobly.services.company_service import CompanyService
from jobly.services.job_service import JobService
from jobly.services.user_service import UserService

__all__ = ["CompanyService", "JobService", "UserService"]
