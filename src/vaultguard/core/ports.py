from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .decision import PolicyResult
from .model import Resource, SystemState, User

if TYPE_CHECKING:  # pragma: no cover
    from contextlib import AbstractContextManager

    from .audit import AuditRecord


@runtime_checkable
class PolicyEvaluator(Protocol):
    """One access-control model.

    Implementations must be pure: no mutation of inputs, no state across calls.
    """

    policy_type: str

    def evaluate(self, user: User, resource: Resource, state: SystemState) -> PolicyResult: ...


class AuditSink(Protocol):
    """Append-only acceptor of audit records; never read back by the engine."""

    def log(self, record: "AuditRecord") -> None: ...


class MetricsSink(Protocol):
    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None: ...


class MetricsObserve(Protocol):
    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None: ...


class Signer(Protocol):
    """Produces an integrity token over a canonical byte payload."""

    def sign(self, payload: bytes) -> str: ...


class Narrator(Protocol):
    """Explains an audit record in free text. Optional collaborator."""

    def explain(
        self, record: "AuditRecord", user: User, resource: Resource, state: SystemState
    ) -> str: ...


class Collection(Protocol):
    def find(self, query: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]: ...

    def find_one(self, query: Mapping[str, Any]) -> Optional[Dict[str, Any]]: ...

    def insert_one(self, doc: Mapping[str, Any]) -> Dict[str, Any]: ...

    def update_one(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]: ...

    def delete_one(self, query: Mapping[str, Any]) -> bool: ...


class DocumentStore(Protocol):
    users: Collection
    resources: Collection
    requests: Collection

    def lock(self, collection: str, doc_id: str) -> "AbstractContextManager[Any]": ...


__all__ = [
    "PolicyEvaluator",
    "AuditSink",
    "MetricsSink",
    "MetricsObserve",
    "Signer",
    "Narrator",
    "Collection",
    "DocumentStore",
]
