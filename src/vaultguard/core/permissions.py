from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping

from .model import ResourceType, Role

WILDCARD = "*"


class PermissionTable:
    """Role -> permitted resource types.

    A role mapped to ``"*"`` may access every resource type. Roles missing from
    the table have no permissions.
    """

    def __init__(self, mapping: Mapping[Role, Iterable[ResourceType | str]] | None = None) -> None:
        self._wildcards: FrozenSet[Role] = frozenset()
        self._types: Dict[Role, FrozenSet[ResourceType]] = {}
        wild = set()
        for role, types in (mapping or {}).items():
            allowed = set()
            for t in types:
                if t == WILDCARD:
                    wild.add(Role(role))
                    continue
                allowed.add(ResourceType(t))
            self._types[Role(role)] = frozenset(allowed)
        self._wildcards = frozenset(wild)

    def is_wildcard(self, role: Role) -> bool:
        return role in self._wildcards

    def allowed_types(self, role: Role) -> FrozenSet[ResourceType]:
        return self._types.get(role, frozenset())

    def permits(self, role: Role, resource_type: ResourceType) -> bool:
        return self.is_wildcard(role) or resource_type in self.allowed_types(role)

    def with_role(self, role: Role, types: Iterable[ResourceType | str]) -> "PermissionTable":
        """Return a copy with *role*'s entry replaced."""
        mapping: Dict[Role, Iterable[ResourceType | str]] = {
            r: ([WILDCARD] if r in self._wildcards else []) + sorted(ts, key=lambda t: t.value)
            for r, ts in self._types.items()
        }
        mapping[role] = list(types)
        return PermissionTable(mapping)

    def roles(self) -> FrozenSet[Role]:
        return frozenset(self._types)


DEFAULT_PERMISSIONS: Mapping[Role, tuple] = {
    Role.ADMIN: (WILDCARD,),
    Role.HR_MANAGER: (
        ResourceType.PAYROLL_RECORD,
        ResourceType.PERFORMANCE_REVIEW,
        ResourceType.SYSTEM_CONFIG,
        ResourceType.LEAVE_REQUEST,
    ),
    Role.FINANCE_MANAGER: (ResourceType.PAYROLL_RECORD, ResourceType.SYSTEM_CONFIG),
    Role.RESOURCE_CREATOR: (ResourceType.PAYROLL_RECORD, ResourceType.PERFORMANCE_REVIEW),
    Role.EMPLOYEE: (ResourceType.SYSTEM_CONFIG, ResourceType.PERFORMANCE_REVIEW),
    Role.AUDITOR: (ResourceType.PAYROLL_RECORD, ResourceType.SYSTEM_CONFIG),
    Role.UNASSIGNED: (),
}


def default_permission_table() -> PermissionTable:
    return PermissionTable(DEFAULT_PERMISSIONS)


__all__ = ["WILDCARD", "PermissionTable", "DEFAULT_PERMISSIONS", "default_permission_table"]
