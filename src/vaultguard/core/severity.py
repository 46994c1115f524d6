from __future__ import annotations

from .decision import Severity
from .model import SensitivityLevel


def classify_severity(granted: bool, sensitivity: SensitivityLevel) -> Severity:
    """Map a verdict and the resource sensitivity to an audit severity."""
    if granted:
        return Severity.INFO
    if sensitivity == SensitivityLevel.TOP_SECRET:
        return Severity.CRITICAL
    return Severity.WARNING


__all__ = ["classify_severity"]
