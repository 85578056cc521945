# autevo/core/tenant.py
"""Tenant status gate and the per-request access context."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from autevo.core.errors import (
    AppError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    TenantStatusForbiddenError,
)
from autevo.core.logging import context_extra
from autevo.core.rbac import Role, policy_for, require_tier

logger = logging.getLogger("autevo.access")


class TenantStatus(str, Enum):
    PENDING_ACTIVATION = "pending_activation"
    TRIAL = "trial"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    CANCELED = "canceled"


OPERATIONAL_STATUSES = frozenset({TenantStatus.TRIAL, TenantStatus.ACTIVE})

BLOCKED_STATUS_MESSAGES: Dict[TenantStatus, str] = {
    TenantStatus.PENDING_ACTIVATION: "Account pending activation. Please complete payment.",
    TenantStatus.SUSPENDED: "Account suspended. Please contact support.",
    TenantStatus.CANCELED: "Subscription canceled.",
}

UNKNOWN_STATUS_MESSAGE = "Account unavailable. Please contact support."


@dataclass(frozen=True)
class RequestContext:
    """
    Who is calling and on behalf of which tenant.

    Built once per request by the API layer and passed explicitly into every
    check and service call.
    """

    user_id: str
    role: str
    tenant_id: Optional[str] = None
    # Raw status column value; unknown values are refused by the gate
    tenant_status: Optional[str] = None
    request_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def is_platform_admin(self) -> bool:
        return self.role == Role.PLATFORM_ADMIN.value

    def require_tenant_id(self) -> str:
        if self.tenant_id is None:
            if self.is_platform_admin:
                raise BadRequestError("X-Tenant-ID header is required")
            raise ForbiddenError("No tenant assigned")
        return self.tenant_id


def check_tenant_status(ctx: RequestContext) -> None:
    """
    Reject callers whose tenant is pending activation, suspended or canceled.

    Platform administrators bypass the gate.
    """
    if ctx.is_platform_admin:
        return

    if ctx.tenant_id is None:
        raise ForbiddenError("No tenant assigned")

    if ctx.tenant_status is None:
        raise NotFoundError("Tenant not found")

    try:
        status = TenantStatus(ctx.tenant_status)
    except ValueError:
        raise TenantStatusForbiddenError(ctx.tenant_status, UNKNOWN_STATUS_MESSAGE) from None

    if status in OPERATIONAL_STATUSES:
        return
    raise TenantStatusForbiddenError(status, BLOCKED_STATUS_MESSAGES[status])


def authorize(ctx: RequestContext, operation: str) -> RequestContext:
    """Run the status gate (tenant-scoped operations) then the role tier check"""
    policy = policy_for(operation)
    try:
        if policy.tenant_scoped:
            check_tenant_status(ctx)
            ctx.require_tenant_id()
        require_tier(ctx.role, policy.tier, operation)
    except AppError as e:
        logger.warning(
            f"Access denied for {operation}: {e.message}",
            extra={**context_extra(ctx), "operation": operation},
        )
        raise
    return ctx
