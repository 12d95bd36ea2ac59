"""
Job Routes

POST /jobs - Create job (admin only)
GET /jobs - List jobs with filters (public)
GET /jobs/{job_id} - Get job details (public)
PATCH /jobs/{job_id} - Update job (admin only)
DELETE /jobs/{job_id} - Delete job (admin only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from jobly.core.auth import require
from jobly.core.policy import Caller, Policy
from jobly.db.session import Database, get_db
from jobly.schemas.schemas import (
    DeletedJobResponse, JobCreate, JobEnvelope, JobListEnvelope, JobUpdate,
)
from jobly.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def get_job_service(db: Database = Depends(get_db)) -> JobService:
    return JobService(db)


@router.post("", response_model=JobEnvelope, status_code=201)
def create_job(
    job: JobCreate,
    _: Caller = Depends(require(Policy.admin_only)),
    service: JobService = Depends(get_job_service),
):
    """Create a new job. The company must already exist."""
    return {"job": service.create(job.model_dump(by_alias=True, exclude_unset=True))}


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary"),
    max_salary: Optional[int] = Query(None, alias="maxSalary"),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    service: JobService = Depends(get_job_service),
):
    """List jobs matching all supplied filters, ordered by id."""
    filters = {
        "title": title,
        "minSalary": min_salary,
        "maxSalary": max_salary,
        "hasEquity": has_equity,
    }
    return {"jobs": service.find_all(filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, service: JobService = Depends(get_job_service)):
    return {"job": service.get(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    update: JobUpdate,
    _: Caller = Depends(require(Policy.admin_only)),
    service: JobService = Depends(get_job_service),
):
    """Update title, salary or equity. id and companyHandle are rejected."""
    return {"job": service.update(job_id, update.model_dump(by_alias=True, exclude_unset=True))}


@router.delete("/{job_id}", response_model=DeletedJobResponse)
def delete_job(
    job_id: int,
    _: Caller = Depends(require(Policy.admin_only)),
    service: JobService = Depends(get_job_service),
):
    """Delete a job. Cascades to applications."""
    service.remove(job_id)
    return {"deleted": job_id}
