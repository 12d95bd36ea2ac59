"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Python attributes are snake_case; JSON uses camelCase aliases.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from jobly.utils.sql import INT_MAX


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    """Request bodies: unknown fields are rejected, not ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(StrictCamelModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    token: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(StrictCamelModel):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    description: str
    logo_url: Optional[str] = None

class CompanyUpdate(StrictCamelModel):
    name: Optional[str] = Field(None, min_length=1)
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    description: Optional[str] = None
    logo_url: Optional[str] = None

class CompanyResponse(CamelModel):
    handle: str
    name: str
    num_employees: Optional[int] = None
    description: str
    logo_url: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(StrictCamelModel):
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)

class JobUpdate(StrictCamelModel):
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

class JobResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

class CompanyDetail(CompanyResponse):
    jobs: List[JobResponse] = []


# ============================================================
# USER SCHEMAS
# ============================================================

class UserRegister(StrictCamelModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

class UserCreate(UserRegister):
    is_admin: bool = False

class UserUpdate(StrictCamelModel):
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None

class UserResponse(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

class UserDetail(UserResponse):
    jobs: List[int] = []


# ============================================================
# ENVELOPES
# ============================================================

class CompanyEnvelope(BaseModel):
    company: CompanyResponse

class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail

class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]

class JobEnvelope(BaseModel):
    job: JobResponse

class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]

class UserEnvelope(BaseModel):
    user: UserResponse

class UserDetailEnvelope(BaseModel):
    user: UserDetail

class UserListEnvelope(BaseModel):
    users: List[UserResponse]

class UserTokenEnvelope(BaseModel):
    user: UserResponse
    token: str

class DeletedResponse(BaseModel):
    deleted: str

class DeletedJobResponse(BaseModel):
    deleted: int

class AppliedResponse(BaseModel):
    applied: int

class HealthResponse(BaseModel):
    status: str
    database: str

