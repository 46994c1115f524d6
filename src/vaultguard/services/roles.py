from __future__ import annotations

import logging
from typing import Optional

from ..core.model import Department, Role, SensitivityLevel, User
from ..core.ports import DocumentStore
from ..errors import NotFoundError, UnauthorizedError

logger = logging.getLogger("vaultguard.roles")

_CLEARANCE_FLOORS = {
    Role.ADMIN: SensitivityLevel.TOP_SECRET,
    Role.HR_MANAGER: SensitivityLevel.CONFIDENTIAL,
    Role.FINANCE_MANAGER: SensitivityLevel.CONFIDENTIAL,
}


def clearance_floor(role: Role) -> SensitivityLevel:
    """Minimum clearance a holder of *role* must have."""
    return _CLEARANCE_FLOORS.get(role, SensitivityLevel.PUBLIC)


def assign_role(
    store: DocumentStore,
    admin_id: str,
    target_id: str,
    role: Role,
    department: Department,
    clearance: Optional[SensitivityLevel] = None,
) -> User:
    """Change a user's role, department and clearance.

    Only an ADMIN may assign roles. A requested clearance below the role's
    floor is raised to the floor.
    """
    admin = store.users.find_one({"_id": admin_id})
    if admin is None or admin.get("role") != Role.ADMIN.value:
        raise UnauthorizedError(f"user {admin_id} may not assign roles")

    target = store.users.find_one({"_id": target_id})
    if target is None:
        raise NotFoundError(f"user {target_id} not found")

    wanted = SensitivityLevel(clearance if clearance is not None else int(target.get("clearance", 0)))
    effective = max(wanted, clearance_floor(role))
    if effective != wanted:
        logger.info(
            "vaultguard: raising clearance of %s from %s to %s for role %s",
            target_id,
            wanted.name,
            effective.name,
            role.value,
        )

    updated = store.users.update_one(
        {"_id": target_id},
        {"role": role.value, "department": department.value, "clearance": int(effective)},
    )
    if updated is None:  # deleted concurrently
        raise NotFoundError(f"user {target_id} not found")
    return User.from_document(updated)


def delete_user(store: DocumentStore, admin_id: str, target_id: str) -> None:
    """Remove a user account. Only an ADMIN may do this, and never to themselves."""
    admin = store.users.find_one({"_id": admin_id})
    if admin is None or admin.get("role") != Role.ADMIN.value:
        raise UnauthorizedError(f"user {admin_id} may not delete users")
    if admin_id == target_id:
        raise UnauthorizedError("administrators cannot delete themselves")
    if not store.users.delete_one({"_id": target_id}):
        raise NotFoundError(f"user {target_id} not found")
    logger.info("vaultguard: %s deleted user %s", admin_id, target_id)


__all__ = ["clearance_floor", "assign_role", "delete_user"]
