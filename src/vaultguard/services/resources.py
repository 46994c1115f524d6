from __future__ import annotations

import logging
import uuid
from typing import Optional

from ..core.model import Resource, ResourceStatus, ResourceType, SensitivityLevel, User
from ..core.ports import DocumentStore
from ..errors import InvalidInputError, UnauthorizedError

logger = logging.getLogger("vaultguard.resources")


def create_resource(
    store: DocumentStore,
    creator: User,
    name: str,
    type: ResourceType,
    sensitivity: SensitivityLevel,
    content: str = "",
    resource_id: Optional[str] = None,
) -> Resource:
    """Create a resource owned by *creator*.

    The creator's department is stamped on the resource and the creator is
    seeded into its ACL. New resources start out ``PENDING``.
    """
    if not creator.id:
        raise UnauthorizedError("anonymous users may not create resources")
    if not name:
        raise InvalidInputError("resource name is required", field="name")
    resource = Resource(
        id=resource_id or f"r_{uuid.uuid4().hex}",
        name=name,
        type=ResourceType(type),
        owner_id=creator.id,
        sensitivity=SensitivityLevel(sensitivity),
        department=creator.department,
        acl=frozenset({creator.id}),
        content=content,
        status=ResourceStatus.PENDING,
    )
    store.resources.insert_one(resource.to_document())
    logger.info("vaultguard: %s created resource %s (%s)", creator.id, resource.id, resource.type.value)
    return resource


__all__ = ["create_resource"]
