from __future__ import annotations

import threading
from typing import List, Optional

from ..core.audit import AuditRecord, verify_signature
from ..core.ports import Signer


class InMemoryAuditLog:
    """Thread-safe append-only audit sink.

    Records can be read back as a snapshot but never edited or removed.
    """

    def __init__(self, signer: Optional[Signer] = None) -> None:
        self._records: List[AuditRecord] = []
        self._lock = threading.Lock()
        self._signer = signer

    def log(self, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record)

    def records(self) -> tuple[AuditRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def verify_all(self) -> List[AuditRecord]:
        """Return the records whose signature no longer matches their content."""
        return [r for r in self.records() if not verify_signature(r, self._signer)]


__all__ = ["InMemoryAuditLog"]
