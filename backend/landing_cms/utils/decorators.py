from dataclasses import dataclass
from functools import wraps
from typing import Optional
from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity
from landing_cms.domain.exceptions import Forbidden, Unauthorized
from landing_cms.models.user import ROLES, ROLE_SUPER_ADMIN, ROLE_VIEWER


@dataclass(frozen=True)
class Principal:
    id: str
    role: str
    tenant_id: Optional[str] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    @property
    def can_edit(self) -> bool:
        return self.role != ROLE_VIEWER


def current_principal() -> Principal:
    claims = get_jwt()
    identity = get_jwt_identity()
    role = claims.get("role")

    if not identity or role not in ROLES:
        raise Unauthorized("Invalid token claims")

    return Principal(id=identity, role=role, tenant_id=claims.get("tenant_id"))


def tenant_required(fn):
    """Bind the JWT principal to the resolved tenant; must follow @jwt_required()."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = getattr(g, "current_tenant", None)
        if tenant is None:
            raise Forbidden("Tenant context missing")

        principal = current_principal()
        if not principal.is_super_admin and principal.tenant_id != tenant.id:
            raise Forbidden("Tenant mismatch")

        g.current_principal = principal
        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            principal = getattr(g, "current_principal", None) or current_principal()

            if principal.role not in allowed_roles:
                raise Forbidden("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator
