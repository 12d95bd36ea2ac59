"""
Authentication Routes

POST /auth/token - Exchange username/password for a JWT
POST /auth/register - Self-registration (never admin), returns a JWT
GET /auth/me - Current user profile (any logged-in user)
"""

from fastapi import APIRouter, Depends, Request

from jobly.api.routes.user_routes import get_user_service
from jobly.core.auth import create_token, require
from jobly.core.policy import Caller, Policy
from jobly.schemas.schemas import LoginRequest, TokenResponse, UserDetailEnvelope, UserRegister
from jobly.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse)
def login(request: Request, data: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Login and receive JWT token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = service.authenticate(data.username, data.password)
    return TokenResponse(token=create_token(user["username"], user["isAdmin"], request.app.state.settings))


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(request: Request, data: UserRegister, service: UserService = Depends(get_user_service)):
    """Register a new (non-admin) user account and log them in."""
    user = service.register(data.model_dump(by_alias=True, exclude_unset=True))
    return TokenResponse(token=create_token(user["username"], user["isAdmin"], request.app.state.settings))


@router.get("/me", response_model=UserDetailEnvelope)
def get_me(
    caller: Caller = Depends(require(Policy.authenticated)),
    service: UserService = Depends(get_user_service),
):
    """Get the current user's profile, including applied job ids."""
    return {"user": service.get(caller.username)}
