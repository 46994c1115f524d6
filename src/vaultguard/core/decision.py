from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Severity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class EventCategory(str, Enum):
    USER_ACTIVITY = "USER_ACTIVITY"
    SYSTEM_EVENT = "SYSTEM_EVENT"
    DATA_BACKUP = "DATA_BACKUP"
    AUTH_EVENT = "AUTH_EVENT"


@dataclass(frozen=True)
class PolicyResult:
    """Answer of a single evaluator."""

    granted: bool
    reason: str
    policy_type: str


@dataclass(frozen=True)
class AccessDecision:
    """Final verdict of the pipeline before it is packaged into an audit record.

    Attributes:
        granted: whether access is allowed.
        reason: human-readable explanation from the model that decided.
        policy_type: tag of the deciding model, e.g. ``"ABAC"`` or ``"DAC (Override)"``.
    """

    granted: bool
    reason: str
    policy_type: str

    @classmethod
    def from_result(cls, result: PolicyResult, *, suffix: str = "") -> "AccessDecision":
        return cls(
            granted=result.granted,
            reason=result.reason,
            policy_type=result.policy_type + suffix,
        )


@dataclass(frozen=True)
class PolicyBreakdown:
    """Every model's individual answer alongside the final decision."""

    rubac: PolicyResult
    mac: PolicyResult
    rbac: PolicyResult
    abac: PolicyResult
    dac: PolicyResult
    decision: AccessDecision

    @property
    def final_decision(self) -> bool:
        return self.decision.granted

    def as_dict(self) -> Dict[str, Optional[object]]:
        return {
            "RuBAC": self.rubac,
            "MAC": self.mac,
            "RBAC": self.rbac,
            "ABAC": self.abac,
            "DAC": self.dac,
            "final": self.decision,
        }


__all__ = ["Severity", "EventCategory", "PolicyResult", "AccessDecision", "PolicyBreakdown"]
