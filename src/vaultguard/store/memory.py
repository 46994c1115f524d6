from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger("vaultguard.store")

COLLECTIONS = ("users", "resources", "requests")


def _matches(doc: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in query.items())


class InMemoryCollection:
    """Mongo-style collection of dict documents.

    Documents are deep-copied on the way in and on the way out, so callers can
    never mutate stored state by accident.
    """

    def __init__(self, name: str, on_change: Optional[Callable[[], None]] = None) -> None:
        self.name = name
        self._docs: List[Dict[str, Any]] = []
        self._lock = threading.RLock()
        self._on_change = on_change

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def find(self, query: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        query = query or {}
        with self._lock:
            return [copy.deepcopy(d) for d in self._docs if _matches(d, query)]

    def find_one(self, query: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            for d in self._docs:
                if _matches(d, query):
                    return copy.deepcopy(d)
        return None

    def insert_one(self, doc: Mapping[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(dict(doc))
        with self._lock:
            self._docs.append(stored)
        self._changed()
        return copy.deepcopy(stored)

    def update_one(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Shallow-merge *update* into the first matching document."""
        merged: Optional[Dict[str, Any]] = None
        with self._lock:
            for i, d in enumerate(self._docs):
                if _matches(d, query):
                    merged = {**d, **copy.deepcopy(dict(update))}
                    self._docs[i] = merged
                    break
        if merged is None:
            return None
        self._changed()
        return copy.deepcopy(merged)

    def delete_one(self, query: Mapping[str, Any]) -> bool:
        deleted = False
        with self._lock:
            for i, d in enumerate(self._docs):
                if _matches(d, query):
                    del self._docs[i]
                    deleted = True
                    break
        if deleted:
            self._changed()
        return deleted

    # used by the file-backed store
    def dump(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._docs)

    def replace_all(self, docs: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._docs = copy.deepcopy(docs)


class InMemoryDocumentStore:
    """Document store with ``users``, ``resources`` and ``requests`` collections."""

    def __init__(self) -> None:
        self.users = InMemoryCollection("users", self._persist)
        self.resources = InMemoryCollection("resources", self._persist)
        self.requests = InMemoryCollection("requests", self._persist)
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[Tuple[str, str], List[Any]] = {}
        self._locks_guard = threading.Lock()

    def collection(self, name: str) -> InMemoryCollection:
        if name not in COLLECTIONS:
            raise KeyError(f"unknown collection {name!r}")
        return getattr(self, name)

    @contextmanager
    def lock(self, collection: str, doc_id: str) -> Iterator[None]:
        """Serialize read-modify-write cycles on a single document."""
        key = (collection, doc_id)
        with self._locks_guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def _persist(self) -> None:
        # in-memory store has nothing to flush
        return None


__all__ = ["InMemoryCollection", "InMemoryDocumentStore", "COLLECTIONS"]
