from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict, Optional

from ..core.audit import AuditRecord
from ..core.decision import Severity
from .context import get_current_trace_id

_SEVERITY_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.CRITICAL: logging.CRITICAL,
}


class DecisionLogger:
    """Audit sink that writes each record to the ``vaultguard.audit`` logger.

    Args:
        sample_rate: probability in [0, 1] that a record is emitted.
        level: fixed logging level; ``None`` derives it from the record severity.
        as_json: emit a JSON object instead of the ``"decision {...}"`` text form.
        always_log_denies: denials bypass sampling.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        level: Optional[int] = None,
        as_json: bool = False,
        always_log_denies: bool = True,
    ) -> None:
        self.sample_rate = max(0.0, min(1.0, float(sample_rate)))
        self.level = level
        self.as_json = as_json
        self.always_log_denies = always_log_denies
        self.logger = logging.getLogger("vaultguard.audit")

    def _should_log(self, record: AuditRecord) -> bool:
        if self.always_log_denies and not record.granted:
            return True
        if self.sample_rate >= 1.0:
            return True
        if self.sample_rate <= 0.0:
            return False
        return random.random() < self.sample_rate

    def _payload(self, record: AuditRecord) -> Dict[str, Any]:
        payload = record.to_dict()
        trace_id = get_current_trace_id()
        if trace_id:
            payload["trace_id"] = trace_id
        return payload

    def log(self, record: AuditRecord) -> None:
        if not self._should_log(record):
            return
        level = self.level if self.level is not None else _SEVERITY_LEVELS[record.severity]
        payload = self._payload(record)
        if self.as_json:
            self.logger.log(level, json.dumps(payload, ensure_ascii=False))
        else:
            self.logger.log(level, f"decision {payload}")


__all__ = ["DecisionLogger"]
