"""The five access-control models.

Every evaluator is a small immutable object with a ``policy_type`` tag and an
``evaluate(user, resource, state)`` method returning a :class:`PolicyResult`.
Evaluators that do not depend on the environment simply ignore ``state``.
"""

from __future__ import annotations

from .decision import PolicyResult
from .model import ResourceType, Resource, Role, SensitivityLevel, SystemState, User
from .permissions import PermissionTable, default_permission_table


class MACEvaluator:
    """Mandatory access control: clearance must dominate sensitivity."""

    policy_type = "MAC"

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult:
        if user.clearance >= resource.sensitivity:
            return PolicyResult(True, "MAC: Clearance sufficient.", self.policy_type)
        return PolicyResult(
            False,
            f"MAC: User clearance ({user.clearance.name}) is lower than "
            f"resource sensitivity ({resource.sensitivity.name}).",
            self.policy_type,
        )


class DACEvaluator:
    """Discretionary access control: ownership or ACL membership."""

    policy_type = "DAC"

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult:
        if user.id == resource.owner_id:
            return PolicyResult(True, "DAC: User is the resource owner.", self.policy_type)
        if user.id in resource.acl:
            return PolicyResult(
                True,
                "DAC: User is explicitly listed in Access Control List (ACL).",
                self.policy_type,
            )
        return PolicyResult(False, "DAC: User is not owner and not in ACL.", self.policy_type)


class RBACEvaluator:
    """Role-based access control backed by an injected :class:`PermissionTable`."""

    policy_type = "RBAC"

    def __init__(self, permissions: PermissionTable | None = None) -> None:
        self.permissions = permissions if permissions is not None else default_permission_table()

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult:
        role = user.role
        if self.permissions.is_wildcard(role):
            if role is Role.ADMIN:
                return PolicyResult(True, "RBAC: Admin has global access.", self.policy_type)
            return PolicyResult(True, f"RBAC: Role {role.value} has global access.", self.policy_type)
        allowed = self.permissions.allowed_types(role)
        if not allowed:
            return PolicyResult(
                False, f"RBAC: Role {role.value} has no access permissions.", self.policy_type
            )
        if resource.type in allowed:
            return PolicyResult(
                True,
                f"RBAC: Role {role.value} permits access to {resource.type.value}.",
                self.policy_type,
            )
        return PolicyResult(
            False,
            f"RBAC: Role {role.value} restricts access to {resource.type.value}.",
            self.policy_type,
        )


class RuBACEvaluator:
    """Rule-based (environmental) access control.

    Resources at or above ``restricted_from`` are blocked on weekends and
    outside the ``[work_start_hour, work_end_hour]`` window (both ends inclusive).
    """

    policy_type = "RuBAC"

    def __init__(
        self,
        *,
        work_start_hour: int = 8,
        work_end_hour: int = 20,
        restricted_from: SensitivityLevel = SensitivityLevel.CONFIDENTIAL,
    ) -> None:
        if not (0 <= work_start_hour <= work_end_hour <= 23):
            raise ValueError("working hours must satisfy 0 <= start <= end <= 23")
        self.work_start_hour = work_start_hour
        self.work_end_hour = work_end_hour
        self.restricted_from = SensitivityLevel(restricted_from)

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult:
        if resource.sensitivity >= self.restricted_from:
            label = self.restricted_from.name.replace("_", " ").title()
            if state.is_weekend:
                return PolicyResult(
                    False, f"RuBAC: {label} access denied on weekends.", self.policy_type
                )
            if state.current_time < self.work_start_hour or state.current_time > self.work_end_hour:
                return PolicyResult(
                    False,
                    f"RuBAC: {label} access denied outside working hours "
                    f"({self.work_start_hour:02d}:00 - {self.work_end_hour:02d}:00).",
                    self.policy_type,
                )
        return PolicyResult(True, "RuBAC: Environmental conditions met.", self.policy_type)


class ABACEvaluator:
    """Attribute-based access control; the first matching rule wins."""

    policy_type = "ABAC"

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult:
        if resource.sensitivity == SensitivityLevel.PUBLIC:
            return PolicyResult(True, "ABAC: Resource is Public.", self.policy_type)

        # finance reads payroll across departments
        if user.role == Role.FINANCE_MANAGER and resource.type == ResourceType.PAYROLL_RECORD:
            return PolicyResult(True, "ABAC: Finance override for Payroll.", self.policy_type)

        if user.role == Role.RESOURCE_CREATOR and user.department == resource.department:
            return PolicyResult(
                True, "ABAC: Creator access within department.", self.policy_type
            )

        if (
            user.role not in (Role.ADMIN, Role.AUDITOR)
            and user.department != resource.department
            and user.id not in resource.acl
        ):
            return PolicyResult(
                False,
                f"ABAC: User department ({user.department.value}) does not match "
                f"resource department ({resource.department.value}).",
                self.policy_type,
            )

        return PolicyResult(True, "ABAC: Attributes match policy.", self.policy_type)


__all__ = [
    "MACEvaluator",
    "DACEvaluator",
    "RBACEvaluator",
    "RuBACEvaluator",
    "ABACEvaluator",
]
