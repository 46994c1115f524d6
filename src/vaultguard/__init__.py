from .core.audit import AuditRecord, ChecksumSigner, HmacSigner, verify_signature
from .core.decision import AccessDecision, EventCategory, PolicyBreakdown, PolicyResult, Severity
from .core.engine import Guard, evaluate
from .core.evaluators import ABACEvaluator, DACEvaluator, MACEvaluator, RBACEvaluator, RuBACEvaluator
from .core.model import (
    Department,
    Resource,
    ResourceStatus,
    ResourceType,
    Role,
    SensitivityLevel,
    SystemState,
    User,
)
from .core.permissions import PermissionTable, default_permission_table
from .errors import InvalidInputError, NotFoundError, UnauthorizedError, VaultGuardError

__all__ = [
    "Guard",
    "evaluate",
    "User",
    "Resource",
    "SystemState",
    "Role",
    "Department",
    "ResourceType",
    "ResourceStatus",
    "SensitivityLevel",
    "AccessDecision",
    "PolicyResult",
    "PolicyBreakdown",
    "Severity",
    "EventCategory",
    "AuditRecord",
    "ChecksumSigner",
    "HmacSigner",
    "verify_signature",
    "MACEvaluator",
    "DACEvaluator",
    "RBACEvaluator",
    "RuBACEvaluator",
    "ABACEvaluator",
    "PermissionTable",
    "default_permission_table",
    "VaultGuardError",
    "InvalidInputError",
    "UnauthorizedError",
    "NotFoundError",
]
__version__ = "0.1.0"
