from __future__ import annotations

from typing import Iterable

from fastapi import Depends

from todo_api.services.auth import Claim, get_current_claim
from todo_api.utils.base import Permission, Role
from todo_api.utils.errors import AuthzError


# Each permission lists its roles explicitly; admin is not implied anywhere.
PERMISSIONS: dict[Permission, frozenset[Role]] = {
    Permission.TODO_CREATE: frozenset({Role.ADMIN}),
    Permission.TODO_LIST: frozenset({Role.ADMIN, Role.VIEWER}),
    Permission.TODO_READ: frozenset({Role.ADMIN, Role.VIEWER}),
    Permission.TODO_UPDATE: frozenset({Role.ADMIN}),
    Permission.TODO_DELETE: frozenset({Role.ADMIN}),
}


def authorize(claim: Claim, required_roles: Iterable[Role]) -> bool:
    """Allow iff the claim's role is one of `required_roles`."""
    return claim.role in frozenset(required_roles)


def require(permission: Permission):
    """Return a FastAPI dependency that rejects callers whose role lacks `permission`.

    The dependency resolves the caller's claim first, so an unauthenticated
    request fails with 401 before the role is looked at.
    """
    allowed = PERMISSIONS[permission]

    def _dependency(claim: Claim = Depends(get_current_claim)) -> Claim:
        if not authorize(claim, allowed):
            raise AuthzError()
        return claim

    return _dependency
