"""End-to-end: seeded store, role assignment, access request approval, audit trail."""

import json
import logging

from vaultguard.core.decision import Severity
from vaultguard.core.engine import Guard
from vaultguard.core.model import Department, Role, SensitivityLevel, SystemState, User
from vaultguard.logging import DecisionLogger, InMemoryAuditLog
from vaultguard.services import AccessRequestService, assign_role, visible_resources
from vaultguard.store import SEED_ADMIN, InMemoryDocumentStore, load_resource, load_user, seed_store

WEEKDAY = SystemState(14, False)


class _Fanout:
    def __init__(self, *sinks):
        self.sinks = sinks

    def log(self, record):
        for s in self.sinks:
            s.log(record)


def test_request_approval_turns_abac_denial_into_grant(caplog):
    caplog.set_level(logging.INFO, logger="vaultguard.audit")
    store = InMemoryDocumentStore()
    seed_store(store)
    store.users.insert_one(
        User(id="sam", name="Sam", role=Role.UNASSIGNED, department=Department.SALES).to_document()
    )
    sam = assign_role(store, SEED_ADMIN.id, "sam", Role.EMPLOYEE, Department.SALES, SensitivityLevel.INTERNAL)

    trail = InMemoryAuditLog()
    guard = Guard(audit_sink=_Fanout(trail, DecisionLogger(as_json=True)))

    budget = load_resource(store, "res_seed_003")  # SYSTEM_CONFIG, INTERNAL, FINANCE
    assert budget in visible_resources(load_user(store, SEED_ADMIN.id), [budget])
    assert visible_resources(sam, [budget]) == []

    first = guard.evaluate_sync(sam, budget, WEEKDAY)
    assert first.granted is False and first.policy_type == "ABAC"
    assert first.severity == Severity.WARNING

    svc = AccessRequestService(store)
    req = svc.submit(sam, budget)
    svc.approve(load_user(store, SEED_ADMIN.id), req.id)

    budget = load_resource(store, "res_seed_003")
    second = guard.evaluate_sync(sam, budget, WEEKDAY)
    # ACL membership satisfies the department rule itself
    assert second.granted is True and second.policy_type == "ABAC"

    assert [r.id for r in trail.records()] == [first.id, second.id]
    assert trail.verify_all() == []
    logged = [json.loads(r.getMessage()) for r in caplog.records if r.name == "vaultguard.audit"]
    assert [p["granted"] for p in logged] == [False, True]


def test_top_secret_denial_is_critical_for_seeded_data():
    store = InMemoryDocumentStore()
    seed_store(store)
    hr = User(id="hr", name="H", role=Role.HR_MANAGER, department=Department.HR,
              clearance=SensitivityLevel.CONFIDENTIAL)
    exec_payroll = load_resource(store, "res_seed_001")
    rec = Guard().evaluate_sync(hr, exec_payroll, WEEKDAY)
    assert rec.policy_type == "MAC"
    assert rec.severity == Severity.CRITICAL
