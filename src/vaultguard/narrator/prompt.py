from __future__ import annotations

from ..core.audit import AuditRecord
from ..core.model import Resource, SystemState, User

_TEMPLATE = """\
Act as a Senior Security Auditor for a Payroll System.
Analyze this access attempt event.

Context:
- User: {user_name} ({role} in {department})
- Clearance: {clearance}
- Resource: {resource_name} ({resource_type})
- Sensitivity: {sensitivity}
- Resource Owner: {owner}
- System Time: {hour:02d}:00 hours
- Weekend: {weekend}

Event Result:
- Access Granted: {granted}
- Primary Policy Trigger: {policy}
- Reason: {reason}

Explain to the user clearly why this decision was made, referencing the specific \
security model (MAC, DAC, RBAC, RuBAC, or ABAC) involved.
Keep it concise (max 2 sentences).
"""


def build_prompt(record: AuditRecord, user: User, resource: Resource, state: SystemState) -> str:
    return _TEMPLATE.format(
        user_name=user.name or user.id,
        role=user.role.value,
        department=user.department.value,
        clearance=user.clearance.name,
        resource_name=resource.name or resource.id,
        resource_type=resource.type.value,
        sensitivity=resource.sensitivity.name,
        owner=resource.owner_id,
        hour=state.current_time,
        weekend=state.is_weekend,
        granted=record.granted,
        policy=record.policy_type,
        reason=record.reason or "Access permitted by policy.",
    )


__all__ = ["build_prompt"]
