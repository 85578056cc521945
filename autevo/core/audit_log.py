# autevo/core/audit_log.py
"""
Audit trail for tenant and platform-admin mutations.

Entries are added to the caller's session so they commit or roll back
together with the change they describe.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from autevo.core.tenant import RequestContext
from autevo.db.models.audit_log import AuditLog


class AuditEventType(str, Enum):
    USER_INVITED = "user.invite"
    USER_ROLE_CHANGED = "user.update_role"
    USER_DEACTIVATED = "user.deactivate"
    USER_REACTIVATED = "user.reactivate"
    ORDER_STATUS_CHANGED = "order.update_status"
    PAYMENT_RECEIVED = "order.add_payment"
    TENANT_SETUP_UPDATED = "tenant.update_setup"
    TENANT_TRIAL_ACTIVATED = "admin.activate_trial"
    TENANT_TRIAL_EXTENDED = "admin.extend_trial"
    TENANT_SUSPENDED = "admin.suspend_tenant"
    TENANT_REACTIVATED = "admin.reactivate_tenant"


def _jsonable(values: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if values is None:
        return None
    out = {}
    for key, value in values.items():
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        out[key] = value
    return out


class AuditLogger:
    """Writes AuditLog rows within the current unit of work"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def log_event(
        self,
        ctx: RequestContext,
        *,
        event_type: AuditEventType,
        entity_type: str,
        entity_id: Optional[str] = None,
        old_value: Optional[Dict[str, Any]] = None,
        new_value: Optional[Dict[str, Any]] = None,
        tenant_id: Optional[str] = None,
    ) -> AuditLog:
        entry = AuditLog(
            tenant_id=tenant_id or ctx.tenant_id,
            user_id=ctx.user_id,
            action=event_type.value,
            entity_type=entity_type,
            entity_id=entity_id,
            old_value=_jsonable(old_value),
            new_value=_jsonable(new_value),
            ip_address=ctx.ip_address,
            user_agent=ctx.user_agent,
        )
        self.session.add(entry)
        return entry
