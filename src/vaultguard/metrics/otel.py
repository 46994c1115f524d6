from __future__ import annotations

from typing import Any, Dict, Optional

from vaultguard.core.ports import MetricsSink

try:
    from opentelemetry.metrics import get_meter  # type: ignore
except Exception:  # pragma: no cover
    get_meter = None  # type: ignore


class OpenTelemetryMetrics(MetricsSink):
    """OpenTelemetry-based MetricsSink.

    Creates:
      - Counter: vaultguard_decisions_total (attributes: decision, policy)
      - Histogram: vaultguard_decision_seconds (unit: s)
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self) -> None:
        self._counter = None
        self._hist = None

        if get_meter is None:
            raise RuntimeError(
                "OpenTelemetryMetrics requires 'opentelemetry-api' installed. "
                "Install with extra: vaultguard[otel]."
            )

        meter = get_meter("vaultguard.metrics")
        self._counter = meter.create_counter(
            name="vaultguard_decisions_total",
            description="Total access decisions by outcome and deciding policy.",
        )
        create_hist = getattr(meter, "create_histogram", None)
        if create_hist is not None:
            self._hist = create_hist(
                name="vaultguard_decision_seconds",
                description="Access decision evaluation duration in seconds.",
                unit="s",
            )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        if self._counter is None:  # pragma: no cover
            return
        labels = labels or {}
        self._counter.add(
            1,
            {"decision": labels.get("decision", "unknown"), "policy": labels.get("policy", "unknown")},
        )

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        self._hist.record(float(value), dict(labels or {}))
