"""
Route authorization policies.

One pure decision function, is_allowed(), replaces per-route role checks.
Routes declare a Policy; jobly.core.auth.require() evaluates it for the
caller extracted from the bearer token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jobly.core.errors import UnauthorizedError


class CallerRole(str, Enum):
    anonymous = "anonymous"
    user = "user"
    admin = "admin"


class Policy(str, Enum):
    admin_only = "admin_only"
    self_or_admin = "self_or_admin"
    authenticated = "authenticated"
    public = "public"


@dataclass(frozen=True)
class Caller:
    username: Optional[str] = None
    is_admin: bool = False

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls()

    @property
    def is_anonymous(self) -> bool:
        return self.username is None

    @property
    def role(self) -> CallerRole:
        if self.is_anonymous:
            return CallerRole.anonymous
        if self.is_admin:
            return CallerRole.admin
        return CallerRole.user


def is_allowed(caller: Caller, policy: Policy, target: Optional[str] = None) -> bool:
    """Decide whether caller may invoke a route guarded by policy."""
    role = caller.role
    if policy == Policy.admin_only:
        return role == CallerRole.admin
    if policy == Policy.self_or_admin:
        if role == CallerRole.admin:
            return True
        return role == CallerRole.user and target is not None and caller.username == target
    if policy == Policy.authenticated:
        return role != CallerRole.anonymous
    if policy == Policy.public:
        return True
    return False


def authorize(caller: Caller, policy: Policy, target: Optional[str] = None) -> Caller:
    """Like is_allowed(), but raise UnauthorizedError on denial."""
    if not is_allowed(caller, policy, target):
        raise UnauthorizedError()
    return caller
