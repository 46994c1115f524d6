from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..errors import InvalidInputError
from .audit import AuditRecord, HmacSigner, build_audit_record, utcnow
from .decision import AccessDecision, PolicyBreakdown, PolicyResult
from .evaluators import ABACEvaluator, DACEvaluator, MACEvaluator, RBACEvaluator, RuBACEvaluator
from .model import Department, ResourceType, Resource, Role, SensitivityLevel, SystemState, User
from .permissions import PermissionTable
from .ports import AuditSink, MetricsSink, PolicyEvaluator, Signer
from .severity import classify_severity

logger = logging.getLogger("vaultguard.engine")

OVERRIDE_SUFFIX = " (Override)"


def default_gates(permissions: PermissionTable | None = None) -> tuple[PolicyEvaluator, ...]:
    """Absolute gates in evaluation order: environment, clearance, role eligibility."""
    return (RuBACEvaluator(), MACEvaluator(), RBACEvaluator(permissions))


def validate_inputs(user: User, resource: Resource, state: SystemState) -> None:
    """Reject inputs that break the model invariants.

    Raises:
        InvalidInputError: never a policy denial; the caller handed over bad data.
    """
    if not isinstance(user, User):
        raise InvalidInputError("user must be a User", field="user")
    if not isinstance(resource, Resource):
        raise InvalidInputError("resource must be a Resource", field="resource")
    if not isinstance(state, SystemState):
        raise InvalidInputError("state must be a SystemState", field="state")
    if not user.id:
        raise InvalidInputError("user has no id", field="user.id")
    if not isinstance(user.role, Role):
        raise InvalidInputError(f"unknown role {user.role!r}", field="user.role")
    if not isinstance(user.department, Department):
        raise InvalidInputError(f"unknown department {user.department!r}", field="user.department")
    if not isinstance(user.clearance, SensitivityLevel):
        raise InvalidInputError(f"unknown clearance {user.clearance!r}", field="user.clearance")
    if not resource.id:
        raise InvalidInputError("resource has no id", field="resource.id")
    if not resource.owner_id:
        raise InvalidInputError(f"resource {resource.id} has no owner", field="resource.owner_id")
    if not isinstance(resource.type, ResourceType):
        raise InvalidInputError(f"unknown resource type {resource.type!r}", field="resource.type")
    if not isinstance(resource.sensitivity, SensitivityLevel):
        raise InvalidInputError(
            f"unknown sensitivity {resource.sensitivity!r}", field="resource.sensitivity"
        )
    if not isinstance(resource.department, Department):
        raise InvalidInputError(
            f"unknown department {resource.department!r}", field="resource.department"
        )
    hour = state.current_time
    if isinstance(hour, bool) or not isinstance(hour, int) or not (0 <= hour <= 23):
        raise InvalidInputError(f"current_time must be an hour 0-23, got {hour!r}", field="state.current_time")
    if not isinstance(state.is_weekend, bool):
        raise InvalidInputError(
            f"is_weekend must be a bool, got {state.is_weekend!r}", field="state.is_weekend"
        )


class Guard:
    """Decision pipeline combining RuBAC, MAC, RBAC, ABAC and DAC.

    Evaluation order:
      1. each gate in ``gates`` (default RuBAC, MAC, RBAC); the first denial is final;
      2. ``primary`` (ABAC) grants -> granted;
      3. otherwise ``override`` (DAC) grants -> granted, tagged ``"DAC (Override)"``;
      4. otherwise the primary's denial is final.

    The guard holds only immutable configuration, so a single instance can be
    shared between threads.
    """

    def __init__(
        self,
        *,
        gates: Sequence[PolicyEvaluator] | None = None,
        primary: PolicyEvaluator | None = None,
        override: PolicyEvaluator | None = None,
        permissions: PermissionTable | None = None,
        audit_sink: AuditSink | None = None,
        metrics: MetricsSink | None = None,
        signer: Signer | None = None,
        action: str = "READ",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if gates is not None and permissions is not None:
            raise ValueError("pass either gates or permissions, not both")
        self.gates: tuple[PolicyEvaluator, ...] = (
            tuple(gates) if gates is not None else default_gates(permissions)
        )
        self.primary: PolicyEvaluator = primary if primary is not None else ABACEvaluator()
        self.override: PolicyEvaluator = override if override is not None else DACEvaluator()
        self.audit_sink = audit_sink
        self.metrics = metrics
        self.signer = signer
        self.action = action
        self._clock = clock

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "Guard":
        """Build a guard from an :class:`~vaultguard.config.EngineConfig`."""
        try:
            rubac = RuBACEvaluator(
                work_start_hour=config.work_start_hour,
                work_end_hour=config.work_end_hour,
                restricted_from=config.restricted_from,
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc), field="work_start_hour") from exc
        gates = (rubac, MACEvaluator(), RBACEvaluator(kwargs.pop("permissions", None)))
        signer = kwargs.pop("signer", None)
        if signer is None and config.signing_key:
            signer = HmacSigner(config.signing_key)
        return cls(gates=gates, signer=signer, action=config.default_action, **kwargs)

    # ------------------------------------------------------------------ decide

    def decide(self, user: User, resource: Resource, state: SystemState) -> AccessDecision:
        """Run the pipeline and return the bare verdict, without auditing."""
        validate_inputs(user, resource, state)
        for gate in self.gates:
            result = gate.evaluate(user, resource, state)
            if not result.granted:
                return AccessDecision.from_result(result)

        primary = self.primary.evaluate(user, resource, state)
        override = self.override.evaluate(user, resource, state)
        if primary.granted:
            return AccessDecision.from_result(primary)
        if override.granted:
            return AccessDecision.from_result(override, suffix=OVERRIDE_SUFFIX)
        return AccessDecision.from_result(primary)

    def explain(self, user: User, resource: Resource, state: SystemState) -> PolicyBreakdown:
        """Every model's individual answer next to the final decision."""
        decision = self.decide(user, resource, state)
        results = {
            e.policy_type: e.evaluate(user, resource, state)
            for e in (*self.gates, self.primary, self.override)
        }

        def _get(tag: str) -> PolicyResult:
            return results.get(tag) or PolicyResult(True, f"{tag}: not configured.", tag)

        return PolicyBreakdown(
            rubac=_get("RuBAC"),
            mac=_get("MAC"),
            rbac=_get("RBAC"),
            abac=_get("ABAC"),
            dac=_get("DAC"),
            decision=decision,
        )

    # ---------------------------------------------------------------- evaluate

    def evaluate_sync(
        self,
        user: User,
        resource: Resource,
        state: SystemState,
        *,
        action: Optional[str] = None,
    ) -> AuditRecord:
        start = time.perf_counter()
        decision = self.decide(user, resource, state)
        severity = classify_severity(decision.granted, resource.sensitivity)
        record = build_audit_record(
            decision,
            user,
            resource,
            severity,
            action=action or self.action,
            signer=self.signer,
            clock=self._clock,
        )
        logger.debug(
            "decision user=%s resource=%s granted=%s policy=%s reason=%s",
            user.id,
            resource.id,
            decision.granted,
            decision.policy_type,
            decision.reason,
        )
        self._emit(record, time.perf_counter() - start)
        return record

    async def evaluate_async(
        self,
        user: User,
        resource: Resource,
        state: SystemState,
        *,
        action: Optional[str] = None,
    ) -> AuditRecord:
        # evaluation never blocks, so there is nothing to offload
        return self.evaluate_sync(user, resource, state, action=action)

    def is_allowed_sync(self, user: User, resource: Resource, state: SystemState) -> bool:
        return self.evaluate_sync(user, resource, state).granted

    async def is_allowed_async(self, user: User, resource: Resource, state: SystemState) -> bool:
        record = await self.evaluate_async(user, resource, state)
        return record.granted

    # --------------------------------------------------------------- internals

    def _emit(self, record: AuditRecord, elapsed: float) -> None:
        if self.audit_sink is not None:
            try:
                self.audit_sink.log(record)
            except Exception:
                logger.exception("vaultguard: audit sink failed for record %s", record.id)

        if self.metrics is not None:
            labels = {
                "decision": "grant" if record.granted else "deny",
                "policy": record.policy_type,
            }
            try:
                self.metrics.inc("vaultguard_decisions_total", labels)
            except Exception:
                logger.exception("vaultguard: metrics inc failed")
            observe = getattr(self.metrics, "observe", None)
            if callable(observe):
                try:
                    observe("vaultguard_decision_seconds", elapsed, labels)
                except Exception:
                    logger.exception("vaultguard: metrics observe failed")


_default_guard: Guard | None = None


def evaluate(user: User, resource: Resource, state: SystemState) -> AuditRecord:
    """Evaluate with a shared default :class:`Guard` (no sinks attached)."""
    global _default_guard
    if _default_guard is None:
        _default_guard = Guard()
    return _default_guard.evaluate_sync(user, resource, state)


__all__ = ["Guard", "default_gates", "evaluate", "validate_inputs", "OVERRIDE_SUFFIX"]
