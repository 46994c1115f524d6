from __future__ import annotations

from typing import Any, Dict, Optional

from vaultguard.core.ports import MetricsSink

try:
    from prometheus_client import Counter, Histogram  # type: ignore
except Exception:  # pragma: no cover
    Counter = Histogram = None  # type: ignore


class PrometheusMetrics(MetricsSink):
    """Prometheus-based MetricsSink.

    Exposes:
      - vaultguard_decisions_total{decision="grant|deny", policy="..."}
      - vaultguard_decision_seconds (Histogram)
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self, registry: Any = None) -> None:
        self._counter = None
        self._hist = None

        if Counter is None or Histogram is None:
            raise RuntimeError(
                "PrometheusMetrics requires 'prometheus_client' installed. "
                "Install with extra: vaultguard[metrics]."
            )

        kwargs: Dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry
        self._counter = Counter(
            "vaultguard_decisions_total",
            "Total access decisions by outcome and deciding policy.",
            labelnames=("decision", "policy"),
            **kwargs,
        )
        self._hist = Histogram(
            "vaultguard_decision_seconds",
            "Access decision evaluation duration in seconds.",
            **kwargs,
        )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        """Increment the decisions counter.

        *name* is accepted to satisfy the sink protocol; this sink always
        increments ``vaultguard_decisions_total``.
        """
        if self._counter is None:  # pragma: no cover
            return
        labels = labels or {}
        self._counter.labels(
            decision=labels.get("decision", "unknown"), policy=labels.get("policy", "unknown")
        ).inc()

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:  # pragma: no cover
            return
        self._hist.observe(float(value))
