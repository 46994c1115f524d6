from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping

from ..core.audit import utcnow
from ..core.model import Resource, Role, User
from ..core.ports import DocumentStore
from ..errors import NotFoundError, UnauthorizedError

logger = logging.getLogger("vaultguard.requests")


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class AccessRequest:
    id: str
    user_id: str
    user_name: str
    resource_id: str
    resource_name: str
    status: RequestStatus
    timestamp: datetime

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "resource_id": self.resource_id,
            "resource_name": self.resource_name,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "AccessRequest":
        return cls(
            id=str(doc["id"]),
            user_id=str(doc["user_id"]),
            user_name=str(doc.get("user_name", "")),
            resource_id=str(doc["resource_id"]),
            resource_name=str(doc.get("resource_name", "")),
            status=RequestStatus(doc["status"]),
            timestamp=datetime.fromisoformat(doc["timestamp"]),
        )


class AccessRequestService:
    """Pending ACL requests and their approval.

    Approval appends the requester to the resource ACL inside the store's
    per-resource lock, so concurrent approvals on one resource cannot lose
    each other's update.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def submit(self, user: User, resource: Resource) -> AccessRequest:
        existing = self.store.requests.find_one(
            {
                "user_id": user.id,
                "resource_id": resource.id,
                "status": RequestStatus.PENDING.value,
            }
        )
        if existing is not None:
            return AccessRequest.from_document(existing)
        req = AccessRequest(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            resource_id=resource.id,
            resource_name=resource.name,
            status=RequestStatus.PENDING,
            timestamp=utcnow(),
        )
        self.store.requests.insert_one(req.to_document())
        logger.info("vaultguard: access request %s by %s for %s", req.id, user.id, resource.id)
        return req

    def pending(self) -> List[AccessRequest]:
        docs = self.store.requests.find({"status": RequestStatus.PENDING.value})
        return [AccessRequest.from_document(d) for d in docs]

    def approve(self, admin: User, request_id: str) -> AccessRequest:
        self._require_admin(admin)
        req = self._get(request_id)
        with self.store.lock("resources", req.resource_id):
            doc = self.store.resources.find_one({"_id": req.resource_id})
            if doc is None:
                raise NotFoundError(f"resource {req.resource_id} not found")
            acl = list(doc.get("acl") or [])
            if req.user_id not in acl:
                acl.append(req.user_id)
                self.store.resources.update_one({"_id": req.resource_id}, {"acl": acl})
        return self._set_status(req, RequestStatus.APPROVED)

    def reject(self, admin: User, request_id: str) -> AccessRequest:
        self._require_admin(admin)
        return self._set_status(self._get(request_id), RequestStatus.REJECTED)

    # ----------------------------------------------------------------- helpers

    @staticmethod
    def _require_admin(user: User) -> None:
        if user.role != Role.ADMIN:
            raise UnauthorizedError(f"user {user.id} may not review access requests")

    def _get(self, request_id: str) -> AccessRequest:
        doc = self.store.requests.find_one({"id": request_id})
        if doc is None:
            raise NotFoundError(f"access request {request_id} not found")
        return AccessRequest.from_document(doc)

    def _set_status(self, req: AccessRequest, status: RequestStatus) -> AccessRequest:
        self.store.requests.update_one({"id": req.id}, {"status": status.value})
        logger.info("vaultguard: access request %s %s", req.id, status.value.lower())
        return AccessRequest.from_document({**req.to_document(), "status": status.value})


__all__ = ["RequestStatus", "AccessRequest", "AccessRequestService"]
