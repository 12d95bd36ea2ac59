"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies resolving the caller and enforcing route policies
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from jobly.core.config import Settings, get_settings
from jobly.core.policy import Caller, Policy, authorize

# Bearer token extractor; a missing header is not an error here
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    """Hash password with bcrypt."""
    settings = settings or get_settings()
    return _pwd_context(settings.bcrypt_work_factor).hash(password)


def verify_password(plain_password: str, hashed_password: str, settings: Optional[Settings] = None) -> bool:
    """Verify password against hash."""
    settings = settings or get_settings()
    return _pwd_context(settings.bcrypt_work_factor).verify(plain_password, hashed_password)


def create_token(username: str, is_admin: bool = False, settings: Optional[Settings] = None) -> str:
    """Create JWT access token carrying the caller identity."""
    settings = settings or get_settings()
    to_encode = {"username": username, "isAdmin": bool(is_admin)}
    if settings.jwt_expire_minutes:
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Optional[Settings] = None) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def caller_from_token(token: Optional[str], settings: Optional[Settings] = None) -> Caller:
    """Resolve a caller; anything unverifiable is anonymous."""
    if not token:
        return Caller.anonymous()
    payload = decode_token(token, settings)
    if not payload:
        return Caller.anonymous()
    username = payload.get("username")
    if not isinstance(username, str) or not username:
        return Caller.anonymous()
    return Caller(username=username, is_admin=payload.get("isAdmin") is True)


async def get_caller(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Caller:
    """
    FastAPI dependency - Identify the caller from the Authorization header.

    Never fails: no header or a bad token gives the anonymous caller, and the
    route policy decides what that means.
    """
    settings = getattr(request.app.state, "settings", None)
    token = credentials.credentials if credentials else None
    return caller_from_token(token, settings)


def require(policy: Policy, target_param: Optional[str] = None):
    """
    Build a dependency enforcing policy for the current caller.

    Usage:
        @router.get("/{username}")
        async def route(caller: Caller = Depends(require(Policy.self_or_admin, "username"))):
            ...
    """
    async def dependency(request: Request, caller: Caller = Depends(get_caller)) -> Caller:
        target = request.path_params.get(target_param) if target_param else None
        return authorize(caller, policy, target)

    return dependency
