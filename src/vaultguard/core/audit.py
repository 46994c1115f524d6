"""Audit records and their integrity signatures.

The default :class:`ChecksumSigner` is a 32-bit rolling checksum. It is NOT
cryptography: it only detects accidental mutation of a record. Use
:class:`HmacSigner` with a secret key when real tamper evidence is required.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .decision import AccessDecision, EventCategory, Severity
from .model import Resource, User
from .ports import Signer

SYSTEM_ACTOR = "SYSTEM"
SYSTEM_IP = "127.0.0.1"


class ChecksumSigner:
    """Non-cryptographic 32-bit rolling checksum (``h = h * 31 + c``)."""

    prefix = "chk_"

    def sign(self, payload: bytes) -> str:
        h = 0
        for b in payload:
            h = ((h << 5) - h + b) & 0xFFFFFFFF
        # wrap to signed 32-bit
        if h & 0x80000000:
            h -= 0x100000000
        return f"{self.prefix}{abs(h):08x}"


class HmacSigner:
    """Keyed HMAC-SHA256 signer."""

    prefix = "hmac-sha256:"

    def __init__(self, key: bytes | str) -> None:
        if not key:
            raise ValueError("HmacSigner requires a non-empty key")
        self._key = key.encode("utf-8") if isinstance(key, str) else bytes(key)

    def sign(self, payload: bytes) -> str:
        return self.prefix + hmac.new(self._key, payload, hashlib.sha256).hexdigest()


DEFAULT_SIGNER: Signer = ChecksumSigner()


@dataclass(frozen=True)
class AuditRecord:
    id: str
    timestamp: datetime
    user_id: str
    user_name: str
    user_ip: str
    resource_id: Optional[str]
    resource_name: Optional[str]
    action: str
    granted: bool
    reason: str
    policy_type: str
    severity: Severity
    event_category: EventCategory
    signature: str = ""

    @property
    def decision(self) -> AccessDecision:
        return AccessDecision(granted=self.granted, reason=self.reason, policy_type=self.policy_type)

    def content(self) -> Dict[str, Any]:
        """All fields except the signature, JSON-compatible."""
        data = asdict(self)
        data.pop("signature")
        data["timestamp"] = self.timestamp.isoformat()
        data["severity"] = self.severity.value
        data["event_category"] = self.event_category.value
        return data

    def to_dict(self) -> Dict[str, Any]:
        data = self.content()
        data["signature"] = self.signature
        return data


def canonical_payload(record: AuditRecord) -> bytes:
    return json.dumps(record.content(), sort_keys=True, separators=(",", ":")).encode("utf-8")


def sign_record(record: AuditRecord, signer: Signer | None = None) -> AuditRecord:
    signer = signer or DEFAULT_SIGNER
    return replace(record, signature=signer.sign(canonical_payload(record)))


def verify_signature(record: AuditRecord, signer: Signer | None = None) -> bool:
    signer = signer or DEFAULT_SIGNER
    expected = signer.sign(canonical_payload(record))
    return hmac.compare_digest(expected, record.signature)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_audit_record(
    decision: AccessDecision,
    user: User,
    resource: Resource,
    severity: Severity,
    *,
    action: str = "READ",
    signer: Signer | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> AuditRecord:
    """Package a decision into a signed USER_ACTIVITY record."""
    record = AuditRecord(
        id=uuid.uuid4().hex,
        timestamp=clock(),
        user_id=user.id,
        user_name=user.name,
        user_ip=user.ip_address,
        resource_id=resource.id,
        resource_name=resource.name,
        action=action,
        granted=decision.granted,
        reason=decision.reason,
        policy_type=decision.policy_type,
        severity=severity,
        event_category=EventCategory.USER_ACTIVITY,
    )
    return sign_record(record, signer)


def build_system_record(
    action: str,
    details: str,
    severity: Severity = Severity.INFO,
    *,
    signer: Signer | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> AuditRecord:
    """Signed SYSTEM_EVENT record attributed to the system actor."""
    record = AuditRecord(
        id=uuid.uuid4().hex,
        timestamp=clock(),
        user_id=SYSTEM_ACTOR,
        user_name=SYSTEM_ACTOR,
        user_ip=SYSTEM_IP,
        resource_id=None,
        resource_name=None,
        action=action,
        granted=True,
        reason=details,
        policy_type=SYSTEM_ACTOR,
        severity=severity,
        event_category=EventCategory.SYSTEM_EVENT,
    )
    return sign_record(record, signer)


__all__ = [
    "AuditRecord",
    "ChecksumSigner",
    "HmacSigner",
    "DEFAULT_SIGNER",
    "utcnow",
    "build_audit_record",
    "build_system_record",
    "canonical_payload",
    "sign_record",
    "verify_signature",
]
