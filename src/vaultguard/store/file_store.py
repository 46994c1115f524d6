from __future__ import annotations

import json
import logging
import os
import tempfile
import threading

from .memory import COLLECTIONS, InMemoryDocumentStore

logger = logging.getLogger("vaultguard.store")


def atomic_write(path: str, data: str, *, encoding: str = "utf-8") -> None:
    """Write data atomically to *path*.

    Uses a temporary file in the same directory followed by os.replace().
    """
    directory = os.path.dirname(path) or "."
    fd, tmp = tempfile.mkstemp(prefix=".vaultguard.tmp.", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(data)
        os.replace(tmp, path)
    finally:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass


class JsonFileDocumentStore(InMemoryDocumentStore):
    """Document store persisted to a single JSON file.

    The file holds ``{"users": [...], "resources": [...], "requests": [...]}``
    and is rewritten atomically after every mutation.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._io_lock = threading.RLock()
        self._loading = True
        super().__init__()
        self._load()
        self._loading = False

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("vaultguard: store file %s not found; starting empty", self.path)
            return
        for name in COLLECTIONS:
            self.collection(name).replace_all(list(data.get(name) or []))

    def _persist(self) -> None:
        if self._loading:
            return
        with self._io_lock:
            data = {name: self.collection(name).dump() for name in COLLECTIONS}
            atomic_write(self.path, json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True))


__all__ = ["atomic_write", "JsonFileDocumentStore"]
