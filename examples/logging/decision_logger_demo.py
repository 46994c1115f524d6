#!/usr/bin/env python3
"""
DecisionLogger configuration demo.

Run:
  python examples/logging/decision_logger_demo.py

This script shows:
  1) JSON audit lines at severity-derived levels
  2) Sampling that still keeps every denial
  3) HMAC-signed records checked by an in-memory audit trail

It emits lines to stdout via the 'vaultguard.audit' logger.
"""

import logging

from vaultguard import Guard, HmacSigner, SystemState
from vaultguard.logging import DecisionLogger, InMemoryAuditLog
from vaultguard.store import SEED_ADMIN, SEED_RESOURCES


def setup_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        root.addHandler(h)
    root.setLevel(logging.INFO)


def run_guard(guard: Guard, state: SystemState) -> None:
    for res in SEED_RESOURCES:
        guard.evaluate_sync(SEED_ADMIN, res, state)


def main() -> None:
    setup_logging()

    print("\n=== 1) JSON lines, level follows severity ===")
    run_guard(Guard(audit_sink=DecisionLogger(as_json=True)), SystemState(12, False))

    print("\n=== 2) Grants sampled at 0%, denials always logged (weekend) ===")
    run_guard(Guard(audit_sink=DecisionLogger(sample_rate=0.0)), SystemState(12, True))

    print("\n=== 3) Signed trail ===")
    signer = HmacSigner("demo-key")
    trail = InMemoryAuditLog(signer=signer)
    run_guard(Guard(audit_sink=trail, signer=signer), SystemState(12, False))
    print(f"{len(trail)} records, {len(trail.verify_all())} failed verification")


if __name__ == "__main__":
    main()
