"""
User Routes

POST /users - Create user, possibly an admin (admin only)
GET /users - List users (admin only)
GET /users/{username} - Get user with applied job ids (self or admin)
PATCH /users/{username} - Update user (self or admin)
DELETE /users/{username} - Delete user (self or admin)
POST /users/{username}/jobs/{job_id} - Apply to job (self or admin)
"""

from fastapi import APIRouter, Depends, Request

from jobly.core.auth import create_token, require
from jobly.core.errors import UnauthorizedError
from jobly.core.policy import Caller, Policy
from jobly.db.session import Database, get_db
from jobly.schemas.schemas import (
    AppliedResponse, DeletedResponse, UserCreate, UserDetailEnvelope, UserEnvelope,
    UserListEnvelope, UserTokenEnvelope, UserUpdate,
)
from jobly.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(request: Request, db: Database = Depends(get_db)) -> UserService:
    return UserService(db, request.app.state.settings)


@router.post("", response_model=UserTokenEnvelope, status_code=201)
def create_user(
    request: Request,
    data: UserCreate,
    _: Caller = Depends(require(Policy.admin_only)),
    service: UserService = Depends(get_user_service),
):
    """Admin-only registration; unlike /auth/register it can create admins."""
    user = service.register(data.model_dump(by_alias=True, exclude_unset=True))
    token = create_token(user["username"], user["isAdmin"], request.app.state.settings)
    return {"user": user, "token": token}


@router.get("", response_model=UserListEnvelope)
def list_users(
    _: Caller = Depends(require(Policy.admin_only)),
    service: UserService = Depends(get_user_service),
):
    return {"users": service.find_all()}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    _: Caller = Depends(require(Policy.self_or_admin, "username")),
    service: UserService = Depends(get_user_service),
):
    return {"user": service.get(username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    update: UserUpdate,
    caller: Caller = Depends(require(Policy.self_or_admin, "username")),
    service: UserService = Depends(get_user_service),
):
    """Update profile fields or password. Only admins may change isAdmin."""
    changes = update.model_dump(by_alias=True, exclude_unset=True)
    if "isAdmin" in changes and not caller.is_admin:
        raise UnauthorizedError("Only admins can change admin status")
    return {"user": service.update(username, changes)}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    _: Caller = Depends(require(Policy.self_or_admin, "username")),
    service: UserService = Depends(get_user_service),
):
    service.remove(username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=AppliedResponse, status_code=201)
def apply_to_job(
    username: str,
    job_id: int,
    _: Caller = Depends(require(Policy.self_or_admin, "username")),
    service: UserService = Depends(get_user_service),
):
    service.apply_to_job(username, job_id)
    return {"applied": job_id}
