from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from fastapi import Depends, Header, HTTPException, status

from wage_engine.core.logging import bind_request_context


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    USER = "user"  # the worker themself


@dataclass(frozen=True)
class Caller:
    id: str
    role: Role
    organization_id: str
    worker_id: str | None = None

    @property
    def is_worker(self) -> bool:
        return self.role is Role.USER


def get_caller(
    x_caller_id: str | None = Header(default=None),
    x_caller_role: str | None = Header(default=None),
    x_organization_id: str | None = Header(default=None),
    x_worker_id: str | None = Header(default=None),
) -> Caller:
    """Read the identity forwarded by the authenticating gateway."""
    if not x_caller_id or not x_caller_role or not x_organization_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="auth_required")
    try:
        role = Role(x_caller_role.strip().lower())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="auth_required")

    caller = Caller(
        id=x_caller_id.strip(),
        role=role,
        organization_id=x_organization_id.strip(),
        worker_id=(x_worker_id or "").strip() or None,
    )
    bind_request_context(actor_id=caller.id, organization_id=caller.organization_id, role=role.value)
    return caller


def require_roles(*roles: Role) -> Callable[..., Caller]:
    allowed = frozenset(roles)

    def dependency(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="role_forbidden")
        return caller

    return dependency
