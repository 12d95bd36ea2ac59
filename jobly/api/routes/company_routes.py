"""
Company Routes

POST /companies - Create company (admin only)
GET /companies - List companies with filters (public)
GET /companies/{handle} - Get company with its jobs (public)
PATCH /companies/{handle} - Update company (admin only)
DELETE /companies/{handle} - Delete company and its jobs (admin only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from jobly.core.auth import require
from jobly.core.policy import Caller, Policy
from jobly.db.session import Database, get_db
from jobly.schemas.schemas import (
    CompanyCreate, CompanyDetailEnvelope, CompanyEnvelope, CompanyListEnvelope,
    CompanyUpdate, DeletedResponse,
)
from jobly.services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["Companies"])


def get_company_service(db: Database = Depends(get_db)) -> CompanyService:
    return CompanyService(db)


@router.post("", response_model=CompanyEnvelope, status_code=201)
def create_company(
    company: CompanyCreate,
    _: Caller = Depends(require(Policy.admin_only)),
    service: CompanyService = Depends(get_company_service),
):
    return {"company": service.create(company.model_dump(by_alias=True, exclude_unset=True))}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees"),
    max_employees: Optional[int] = Query(None, alias="maxEmployees"),
    service: CompanyService = Depends(get_company_service),
):
    """List companies matching all supplied filters, ordered by name."""
    filters = {"name": name, "minEmployees": min_employees, "maxEmployees": max_employees}
    return {"companies": service.find_all(filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, service: CompanyService = Depends(get_company_service)):
    return {"company": service.get(handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    update: CompanyUpdate,
    _: Caller = Depends(require(Policy.admin_only)),
    service: CompanyService = Depends(get_company_service),
):
    return {"company": service.update(handle, update.model_dump(by_alias=True, exclude_unset=True))}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    _: Caller = Depends(require(Policy.admin_only)),
    service: CompanyService = Depends(get_company_service),
):
    service.remove(handle)
    return {"deleted": handle}
