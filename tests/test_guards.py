"""
Owner invariants: nobody edits their own role or account status, and a
tenant never loses its last active owner
"""
import pytest
from types import SimpleNamespace

from autevo.core.errors import BadRequestError, InvariantViolationError
from autevo.core.guards import guard_deactivation, guard_role_change, parse_assignable_role
from autevo.core.rbac import Role


def member(user_id: str, role: Role = Role.OWNER, status: str = "active"):
    return SimpleNamespace(id=user_id, role=role.value, status=status, is_active=status == "active")


class TestRoleChangeGuard:

    def test_self_role_change_is_rejected(self):
        with pytest.raises(InvariantViolationError, match="You cannot change your own role"):
            guard_role_change("u1", member("u1"), Role.MANAGER, active_owner_count=3)

    def test_self_check_runs_before_last_owner_check(self):
        with pytest.raises(InvariantViolationError, match="own role"):
            guard_role_change("u1", member("u1"), Role.MEMBER, active_owner_count=1)

    def test_demoting_last_owner_is_rejected(self):
        with pytest.raises(InvariantViolationError, match="last owner"):
            guard_role_change("u2", member("u1"), Role.MEMBER, active_owner_count=1)

    def test_demoting_one_of_two_owners_succeeds(self):
        assert guard_role_change("u1", member("u2"), Role.MEMBER, active_owner_count=2) == Role.MEMBER

    def test_last_owner_blocked_after_other_owner_demoted(self):
        u1, u2 = member("u1"), member("u2")
        guard_role_change("u1", u2, Role.MEMBER, active_owner_count=2)
        u2.role = Role.MEMBER.value

        # u1 is now the only owner
        with pytest.raises(InvariantViolationError, match="last owner"):
            guard_role_change("u2", u1, Role.MANAGER, active_owner_count=1)

    def test_keeping_owner_role_is_allowed_for_last_owner(self):
        assert guard_role_change("u2", member("u1"), Role.OWNER, active_owner_count=1) == Role.OWNER

    def test_promoting_member_is_not_an_owner_removal(self):
        target = member("u3", role=Role.MEMBER)
        assert guard_role_change("u1", target, "manager", active_owner_count=1) == Role.MANAGER

    def test_inactive_owner_does_not_count_as_last_owner(self):
        target = member("u2", status="inactive")
        assert guard_role_change("u1", target, Role.MEMBER, active_owner_count=1) == Role.MEMBER

    @pytest.mark.parametrize("role", ["admin_saas", "superuser", ""])
    def test_unassignable_roles_are_rejected(self, role):
        with pytest.raises(BadRequestError, match="Invalid role"):
            guard_role_change("u1", member("u2"), role, active_owner_count=2)

    def test_parse_assignable_role(self):
        assert parse_assignable_role("owner") == Role.OWNER
        with pytest.raises(BadRequestError):
            parse_assignable_role(Role.PLATFORM_ADMIN)


class TestDeactivationGuard:

    def test_self_deactivation_rejected_even_as_last_owner(self):
        with pytest.raises(InvariantViolationError, match="You cannot deactivate yourself"):
            guard_deactivation("u1", member("u1"), active_owner_count=1)

    def test_last_owner_cannot_be_deactivated(self):
        with pytest.raises(InvariantViolationError, match="Cannot deactivate the last owner"):
            guard_deactivation("u2", member("u1"), active_owner_count=1)

    def test_owner_with_another_owner_can_be_deactivated(self):
        guard_deactivation("u1", member("u2"), active_owner_count=2)

    def test_member_can_be_deactivated(self):
        guard_deactivation("u1", member("u9", role=Role.MEMBER), active_owner_count=1)
