# autevo/api/dependencies.py
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from autevo.core.errors import NotFoundError, UnauthenticatedError
from autevo.core.rbac import Role, policy_for
from autevo.core.security import decode_token
from autevo.core.tenant import RequestContext, authorize
from autevo.db.database import get_db
from autevo.db.models.user import User
from autevo.db.repositories.user_repository import UserRepository
from autevo.db.repositories.tenant_repository import TenantRepository

security = HTTPBearer(auto_error=False)

TENANT_HEADER = "X-Tenant-ID"


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials:
        raise UnauthenticatedError("Authentication required")

    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError("Invalid token")

    user = await UserRepository(db).get(user_id)
    if not user or not user.is_active:
        raise UnauthenticatedError("User not found or inactive")

    request.state.user = user
    return user


async def get_request_context(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> RequestContext:
    """
    Build the access context for this request.

    Platform administrators pick the tenant they act on with the X-Tenant-ID
    header; everybody else always acts on their own tenant.
    """
    if current_user.role == Role.PLATFORM_ADMIN.value:
        tenant_id = request.headers.get(TENANT_HEADER) or None
    else:
        tenant_id = current_user.tenant_id

    tenant_status = None
    if tenant_id:
        tenant_status = await TenantRepository(db).get_status(tenant_id)
        if tenant_status is None and current_user.role == Role.PLATFORM_ADMIN.value:
            raise NotFoundError("Tenant not found")

    return RequestContext(
        user_id=current_user.id,
        role=current_user.role,
        tenant_id=tenant_id,
        tenant_status=tenant_status,
        request_id=getattr(request.state, "request_id", None),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def require_operation(operation: str):
    """Dependency authorizing the caller for one named operation"""
    policy_for(operation)

    async def operation_checker(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        return authorize(ctx, operation)

    return operation_checker
