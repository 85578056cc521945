# autevo/core/guards.py
"""
Owner invariants for team mutations.

A user never changes their own role or deactivates their own account, and a
tenant always keeps at least one active owner. The self check runs first.
"""
from typing import Union

from autevo.core.errors import BadRequestError, InvariantViolationError
from autevo.core.rbac import ASSIGNABLE_ROLES, Role


def parse_assignable_role(role: Union[Role, str]) -> Role:
    try:
        parsed = Role(role)
    except ValueError:
        raise BadRequestError("Invalid role")
    if parsed not in ASSIGNABLE_ROLES:
        raise BadRequestError("Invalid role")
    return parsed


def _is_active_owner(target) -> bool:
    return target.role == Role.OWNER.value and target.is_active


def guard_role_change(actor_id: str, target, new_role: Union[Role, str], active_owner_count: int) -> Role:
    """Validate a role change of `target` to `new_role` requested by `actor_id`"""
    new_role = parse_assignable_role(new_role)

    if target.id == actor_id:
        raise InvariantViolationError("You cannot change your own role")

    if _is_active_owner(target) and new_role != Role.OWNER and active_owner_count <= 1:
        raise InvariantViolationError("Cannot remove the last owner of the account")

    return new_role


def guard_deactivation(actor_id: str, target, active_owner_count: int) -> None:
    if target.id == actor_id:
        raise InvariantViolationError("You cannot deactivate yourself")

    if _is_active_owner(target) and active_owner_count <= 1:
        raise InvariantViolationError("Cannot deactivate the last owner of the account")
