from __future__ import annotations

from typing import Iterable, List

from ..core.model import Resource, Role, SensitivityLevel, User


def visible_resources(user: User, resources: Iterable[Resource]) -> List[Resource]:
    """Resources worth listing for *user*.

    Listing is not access: every open still goes through the guard.
    """
    if user.role in (Role.ADMIN, Role.AUDITOR):
        return list(resources)
    return [
        r
        for r in resources
        if r.sensitivity == SensitivityLevel.PUBLIC
        or r.department == user.department
        or r.owner_id == user.id
        or user.id in r.acl
    ]


__all__ = ["visible_resources"]
