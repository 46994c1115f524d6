from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional


class SensitivityLevel(IntEnum):
    """Ordinal rank used both for resource sensitivity and user clearance."""

    PUBLIC = 0
    INTERNAL = 1
    CONFIDENTIAL = 2
    TOP_SECRET = 3


class Role(str, Enum):
    ADMIN = "ADMIN"
    HR_MANAGER = "HR_MANAGER"
    FINANCE_MANAGER = "FINANCE_MANAGER"
    RESOURCE_CREATOR = "RESOURCE_CREATOR"
    EMPLOYEE = "EMPLOYEE"
    AUDITOR = "AUDITOR"
    UNASSIGNED = "UNASSIGNED"


class Department(str, Enum):
    IT = "IT"
    HR = "HR"
    FINANCE = "FINANCE"
    SALES = "SALES"
    EXECUTIVE = "EXECUTIVE"
    GENERAL = "GENERAL"


class ResourceType(str, Enum):
    PAYROLL_RECORD = "PAYROLL_RECORD"
    PERFORMANCE_REVIEW = "PERFORMANCE_REVIEW"
    LEAVE_REQUEST = "LEAVE_REQUEST"
    SYSTEM_CONFIG = "SYSTEM_CONFIG"


class ResourceStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PAID = "PAID"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class User:
    id: str
    name: str = ""
    role: Role = Role.UNASSIGNED
    department: Department = Department.GENERAL
    clearance: SensitivityLevel = SensitivityLevel.PUBLIC
    email: str = ""
    ip_address: str = ""

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "role": self.role.value,
            "department": self.department.value,
            "clearance": int(self.clearance),
            "email": self.email,
            "ip_address": self.ip_address,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "User":
        return cls(
            id=str(doc["_id"]),
            name=str(doc.get("name", "")),
            role=Role(doc.get("role", Role.UNASSIGNED.value)),
            department=Department(doc.get("department", Department.GENERAL.value)),
            clearance=SensitivityLevel(int(doc.get("clearance", 0))),
            email=str(doc.get("email", "")),
            ip_address=str(doc.get("ip_address", "")),
        )


@dataclass(frozen=True)
class Resource:
    """A protected document.

    ``acl`` is a set of user ids granted access independently of ownership; it
    may or may not contain the owner.
    """

    id: str
    type: ResourceType
    owner_id: str
    name: str = ""
    sensitivity: SensitivityLevel = SensitivityLevel.PUBLIC
    department: Department = Department.GENERAL
    acl: FrozenSet[str] = field(default_factory=frozenset)
    content: str = ""
    status: Optional[ResourceStatus] = None

    def __post_init__(self) -> None:
        # accept any iterable (lists from documents) but always store a frozenset
        if not isinstance(self.acl, frozenset):
            object.__setattr__(self, "acl", frozenset(self.acl))

    def with_acl_member(self, user_id: str) -> "Resource":
        if user_id in self.acl:
            return self
        return replace(self, acl=self.acl | {user_id})

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "type": self.type.value,
            "owner_id": self.owner_id,
            "sensitivity": int(self.sensitivity),
            "department": self.department.value,
            "acl": sorted(self.acl),
            "content": self.content,
            "status": self.status.value if self.status is not None else None,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Resource":
        acl: Iterable[str] = doc.get("acl") or ()
        return cls(
            id=str(doc["_id"]),
            name=str(doc.get("name", "")),
            type=ResourceType(doc["type"]),
            owner_id=str(doc.get("owner_id") or ""),
            sensitivity=SensitivityLevel(int(doc.get("sensitivity", 0))),
            department=Department(doc.get("department", Department.GENERAL.value)),
            acl=frozenset(str(u) for u in acl),
            content=str(doc.get("content", "")),
            status=ResourceStatus(doc["status"]) if doc.get("status") else None,
        )


@dataclass(frozen=True)
class SystemState:
    """Evaluation-time environment: hour of day (0-23) and weekend flag."""

    current_time: int
    is_weekend: bool = False

    @classmethod
    def at(cls, when: datetime) -> "SystemState":
        return cls(current_time=when.hour, is_weekend=when.weekday() >= 5)


__all__ = [
    "SensitivityLevel",
    "Role",
    "Department",
    "ResourceType",
    "ResourceStatus",
    "User",
    "Resource",
    "SystemState",
]
