from __future__ import annotations

import logging
from typing import List

from ..core.model import (
    Department,
    Resource,
    ResourceStatus,
    ResourceType,
    Role,
    SensitivityLevel,
    User,
)
from ..core.ports import DocumentStore

logger = logging.getLogger("vaultguard.store")

SEED_ADMIN = User(
    id="admin_001",
    name="System Administrator",
    role=Role.ADMIN,
    department=Department.IT,
    clearance=SensitivityLevel.TOP_SECRET,
    email="admin@sentinel.com",
    ip_address="127.0.0.1",
)

SEED_RESOURCES: List[Resource] = [
    Resource(
        id="res_seed_001",
        name="Executive Payroll - Q1 2024",
        type=ResourceType.PAYROLL_RECORD,
        owner_id=SEED_ADMIN.id,
        sensitivity=SensitivityLevel.TOP_SECRET,
        department=Department.EXECUTIVE,
        acl=frozenset({SEED_ADMIN.id}),
        content="Payroll distribution for executive board members. Includes quarterly bonuses.",
        status=ResourceStatus.PAID,
    ),
    Resource(
        id="res_seed_002",
        name="IT Dept Salaries - March",
        type=ResourceType.PAYROLL_RECORD,
        owner_id=SEED_ADMIN.id,
        sensitivity=SensitivityLevel.CONFIDENTIAL,
        department=Department.IT,
        acl=frozenset({SEED_ADMIN.id}),
        content="Standard monthly payroll for IT department staff.",
        status=ResourceStatus.PENDING,
    ),
    Resource(
        id="res_seed_003",
        name="Q2 Budget Forecast",
        type=ResourceType.SYSTEM_CONFIG,
        owner_id=SEED_ADMIN.id,
        sensitivity=SensitivityLevel.INTERNAL,
        department=Department.FINANCE,
        acl=frozenset({SEED_ADMIN.id}),
        content="Preliminary budget allocation for Q2 resources and hiring.",
    ),
    Resource(
        id="res_seed_004",
        name="Employee Handbook 2024",
        type=ResourceType.SYSTEM_CONFIG,
        owner_id=SEED_ADMIN.id,
        sensitivity=SensitivityLevel.PUBLIC,
        department=Department.HR,
        content="Updated policies regarding remote work and benefits.",
    ),
    Resource(
        id="res_seed_005",
        name="Sales Commission Report",
        type=ResourceType.PAYROLL_RECORD,
        owner_id=SEED_ADMIN.id,
        sensitivity=SensitivityLevel.CONFIDENTIAL,
        department=Department.SALES,
        acl=frozenset({SEED_ADMIN.id}),
        content="Commission breakdown for the sales team regarding the Alpha Project.",
        status=ResourceStatus.DRAFT,
    ),
]


def seed_store(store: DocumentStore) -> None:
    """Insert the demo administrator and resources unless already present."""
    if store.users.find_one({"email": SEED_ADMIN.email}) is None:
        logger.info("vaultguard: seeding default admin user")
        store.users.insert_one(SEED_ADMIN.to_document())
    if not store.resources.find():
        logger.info("vaultguard: seeding %d default resources", len(SEED_RESOURCES))
        for res in SEED_RESOURCES:
            store.resources.insert_one(res.to_document())


__all__ = ["SEED_ADMIN", "SEED_RESOURCES", "seed_store"]
