from __future__ import annotations

from typing import Optional

from ..core.model import Resource, User
from ..core.ports import DocumentStore
from .file_store import JsonFileDocumentStore, atomic_write
from .memory import InMemoryCollection, InMemoryDocumentStore
from .seed import SEED_ADMIN, SEED_RESOURCES, seed_store


def load_user(store: DocumentStore, user_id: str) -> Optional[User]:
    doc = store.users.find_one({"_id": user_id})
    return User.from_document(doc) if doc is not None else None


def load_resource(store: DocumentStore, resource_id: str) -> Optional[Resource]:
    doc = store.resources.find_one({"_id": resource_id})
    return Resource.from_document(doc) if doc is not None else None


__all__ = [
    "InMemoryCollection",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "atomic_write",
    "SEED_ADMIN",
    "SEED_RESOURCES",
    "seed_store",
    "load_user",
    "load_resource",
]
