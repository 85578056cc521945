# autevo/core/rbac.py
"""
Role-Based Access Control

Roles map onto an ordered set of tiers. Every operation declares the minimum
tier it needs in OPERATION_POLICIES and a single predicate compares the two.
"""
from enum import Enum, IntEnum
from typing import Dict, NamedTuple, Optional, Union

from autevo.core.errors import RoleForbiddenError


class Role(str, Enum):
    PLATFORM_ADMIN = "admin_saas"
    OWNER = "owner"
    MANAGER = "manager"
    MEMBER = "member"


class RoleTier(IntEnum):
    MEMBER = 1
    MANAGER = 2
    OWNER = 3
    PLATFORM_ADMIN = 4

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


ROLE_TIERS: Dict[Role, RoleTier] = {
    Role.MEMBER: RoleTier.MEMBER,
    Role.MANAGER: RoleTier.MANAGER,
    Role.OWNER: RoleTier.OWNER,
    Role.PLATFORM_ADMIN: RoleTier.PLATFORM_ADMIN,
}

# Roles an owner may hand out inside a tenant
ASSIGNABLE_ROLES = (Role.OWNER, Role.MANAGER, Role.MEMBER)


class OperationPolicy(NamedTuple):
    tier: RoleTier
    tenant_scoped: bool = True


def _policies(tier: RoleTier, *names: str, tenant_scoped: bool = True) -> Dict[str, OperationPolicy]:
    return {name: OperationPolicy(tier, tenant_scoped) for name in names}


OPERATION_POLICIES: Dict[str, OperationPolicy] = {
    # Customers
    **_policies(RoleTier.MEMBER, "customer.list", "customer.get", "customer.create", "customer.update", "customer.search"),
    **_policies(RoleTier.MANAGER, "customer.list_all", "customer.delete"),
    # Vehicles
    **_policies(RoleTier.MEMBER, "vehicle.list", "vehicle.get", "vehicle.create", "vehicle.update"),
    **_policies(RoleTier.MANAGER, "vehicle.delete"),
    # Service catalog
    **_policies(RoleTier.MEMBER, "service.list", "service.get", "service.list_active"),
    **_policies(RoleTier.MANAGER, "service.create", "service.update", "service.toggle_active", "service.delete"),
    # Work orders
    **_policies(
        RoleTier.MEMBER,
        "order.list", "order.get", "order.create", "order.update", "order.update_status", "order.add_payment",
    ),
    # Team
    **_policies(RoleTier.OWNER, "user.list", "user.invite", "user.update_role", "user.deactivate", "user.reactivate"),
    # Tenant profile
    **_policies(RoleTier.MEMBER, "tenant.get"),
    **_policies(RoleTier.OWNER, "tenant.update_setup", "audit.list"),
    # Platform admin panel
    **_policies(
        RoleTier.PLATFORM_ADMIN,
        "admin.dashboard_stats", "admin.list_tenants", "admin.get_tenant", "admin.activate_trial",
        "admin.extend_trial", "admin.suspend_tenant", "admin.reactivate_tenant",
        tenant_scoped=False,
    ),
}


def tier_of(role: Union[Role, str, None]) -> Optional[RoleTier]:
    """Tier for a role value; None when the role is not recognised"""
    try:
        return ROLE_TIERS[Role(role)]
    except ValueError:
        return None


def has_tier(role: Union[Role, str, None], required: RoleTier) -> bool:
    tier = tier_of(role)
    return tier is not None and tier >= required


def require_tier(role: Union[Role, str, None], required: RoleTier, operation: Optional[str] = None) -> None:
    """Raise RoleForbiddenError unless `role` reaches `required`"""
    if not has_tier(role, required):
        raise RoleForbiddenError(required, operation)


def policy_for(operation: str) -> OperationPolicy:
    try:
        return OPERATION_POLICIES[operation]
    except KeyError:
        raise LookupError(f"No access policy declared for operation '{operation}'")
