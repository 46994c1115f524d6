import pytest
from builders import WEEKDAY_NOON, make_resource, make_user

from vaultguard.core.evaluators import (
    ABACEvaluator,
    DACEvaluator,
    MACEvaluator,
    RBACEvaluator,
    RuBACEvaluator,
)
from vaultguard.core.model import Department, ResourceType, Role, SensitivityLevel, SystemState
from vaultguard.core.permissions import PermissionTable

S = SensitivityLevel


# --------------------------------------------------------------------- MAC


@pytest.mark.parametrize(
    "clearance,sensitivity,granted",
    [
        (S.PUBLIC, S.PUBLIC, True),
        (S.INTERNAL, S.PUBLIC, True),
        (S.INTERNAL, S.CONFIDENTIAL, False),
        (S.CONFIDENTIAL, S.CONFIDENTIAL, True),
        (S.CONFIDENTIAL, S.TOP_SECRET, False),
        (S.TOP_SECRET, S.TOP_SECRET, True),
    ],
)
def test_mac_ordinal_comparison(clearance, sensitivity, granted):
    r = MACEvaluator().evaluate(
        make_user(clearance=clearance), make_resource(sensitivity=sensitivity), WEEKDAY_NOON
    )
    assert r.granted is granted
    assert r.policy_type == "MAC"


def test_mac_denial_names_both_labels():
    r = MACEvaluator().evaluate(
        make_user(clearance=S.INTERNAL), make_resource(sensitivity=S.TOP_SECRET), WEEKDAY_NOON
    )
    assert "INTERNAL" in r.reason and "TOP_SECRET" in r.reason


# -------------------------------------------------------------------- RuBAC


@pytest.mark.parametrize(
    "sensitivity,hour,weekend,granted",
    [
        (S.PUBLIC, 3, True, True),
        (S.INTERNAL, 23, True, True),
        (S.CONFIDENTIAL, 12, True, False),
        (S.TOP_SECRET, 12, True, False),
        (S.CONFIDENTIAL, 7, False, False),
        (S.CONFIDENTIAL, 8, False, True),
        (S.CONFIDENTIAL, 20, False, True),
        (S.CONFIDENTIAL, 21, False, False),
        (S.TOP_SECRET, 0, False, False),
    ],
)
def test_rubac_time_and_weekend_gate(sensitivity, hour, weekend, granted):
    r = RuBACEvaluator().evaluate(
        make_user(), make_resource(sensitivity=sensitivity), SystemState(hour, weekend)
    )
    assert r.granted is granted
    assert r.policy_type == "RuBAC"


def test_rubac_weekend_checked_before_hours():
    r = RuBACEvaluator().evaluate(make_user(), make_resource(), SystemState(3, True))
    assert r.reason == "RuBAC: Confidential access denied on weekends."


def test_rubac_hours_reason():
    r = RuBACEvaluator().evaluate(make_user(), make_resource(), SystemState(22, False))
    assert r.reason == "RuBAC: Confidential access denied outside working hours (08:00 - 20:00)."


def test_rubac_custom_window_and_threshold():
    ev = RuBACEvaluator(work_start_hour=9, work_end_hour=17, restricted_from=S.TOP_SECRET)
    assert ev.evaluate(make_user(), make_resource(sensitivity=S.CONFIDENTIAL), SystemState(3)).granted
    assert not ev.evaluate(make_user(), make_resource(sensitivity=S.TOP_SECRET), SystemState(8)).granted
    assert ev.evaluate(make_user(), make_resource(sensitivity=S.TOP_SECRET), SystemState(17)).granted


def test_rubac_rejects_inverted_window():
    with pytest.raises(ValueError):
        RuBACEvaluator(work_start_hour=20, work_end_hour=8)


# --------------------------------------------------------------------- RBAC

T = ResourceType

RBAC_TABLE = [
    (Role.HR_MANAGER, {T.PAYROLL_RECORD, T.PERFORMANCE_REVIEW, T.SYSTEM_CONFIG, T.LEAVE_REQUEST}),
    (Role.FINANCE_MANAGER, {T.PAYROLL_RECORD, T.SYSTEM_CONFIG}),
    (Role.RESOURCE_CREATOR, {T.PAYROLL_RECORD, T.PERFORMANCE_REVIEW}),
    (Role.EMPLOYEE, {T.SYSTEM_CONFIG, T.PERFORMANCE_REVIEW}),
    (Role.AUDITOR, {T.PAYROLL_RECORD, T.SYSTEM_CONFIG}),
    (Role.UNASSIGNED, set()),
    (Role.ADMIN, set(T)),
]


@pytest.mark.parametrize("role,allowed", RBAC_TABLE)
@pytest.mark.parametrize("rtype", list(T))
def test_rbac_default_table(role, allowed, rtype):
    r = RBACEvaluator().evaluate(make_user(role=role), make_resource(type=rtype), WEEKDAY_NOON)
    assert r.granted is (rtype in allowed)
    assert r.policy_type == "RBAC"


def test_rbac_reasons():
    ev = RBACEvaluator()
    assert ev.evaluate(make_user(role=Role.ADMIN), make_resource(), WEEKDAY_NOON).reason == (
        "RBAC: Admin has global access."
    )
    assert ev.evaluate(make_user(role=Role.UNASSIGNED), make_resource(), WEEKDAY_NOON).reason == (
        "RBAC: Role UNASSIGNED has no access permissions."
    )
    assert ev.evaluate(make_user(role=Role.EMPLOYEE), make_resource(), WEEKDAY_NOON).reason == (
        "RBAC: Role EMPLOYEE restricts access to PAYROLL_RECORD."
    )


def test_rbac_uses_injected_table_and_fails_closed_for_unmapped_roles():
    table = PermissionTable({Role.EMPLOYEE: [T.LEAVE_REQUEST]})
    ev = RBACEvaluator(table)
    assert ev.evaluate(
        make_user(role=Role.EMPLOYEE), make_resource(type=T.LEAVE_REQUEST), WEEKDAY_NOON
    ).granted
    # ADMIN is not in this table, so it has nothing
    assert not ev.evaluate(make_user(role=Role.ADMIN), make_resource(), WEEKDAY_NOON).granted


# --------------------------------------------------------------------- ABAC


@pytest.mark.parametrize(
    "user_kw,res_kw,granted,reason",
    [
        (
            {"role": Role.EMPLOYEE, "department": Department.IT},
            {"sensitivity": S.PUBLIC, "department": Department.HR},
            True,
            "ABAC: Resource is Public.",
        ),
        (
            {"role": Role.FINANCE_MANAGER, "department": Department.FINANCE},
            {"type": T.PAYROLL_RECORD, "department": Department.SALES},
            True,
            "ABAC: Finance override for Payroll.",
        ),
        (
            {"role": Role.FINANCE_MANAGER, "department": Department.FINANCE},
            {"type": T.SYSTEM_CONFIG, "department": Department.SALES},
            False,
            "ABAC: User department (FINANCE) does not match resource department (SALES).",
        ),
        (
            {"role": Role.RESOURCE_CREATOR, "department": Department.SALES},
            {"department": Department.SALES},
            True,
            "ABAC: Creator access within department.",
        ),
        (
            {"role": Role.RESOURCE_CREATOR, "department": Department.IT},
            {"department": Department.SALES},
            False,
            "ABAC: User department (IT) does not match resource department (SALES).",
        ),
        (
            {"role": Role.AUDITOR, "department": Department.GENERAL},
            {"department": Department.EXECUTIVE},
            True,
            "ABAC: Attributes match policy.",
        ),
        (
            {"role": Role.ADMIN, "department": Department.IT},
            {"department": Department.EXECUTIVE},
            True,
            "ABAC: Attributes match policy.",
        ),
        (
            {"role": Role.EMPLOYEE, "department": Department.FINANCE},
            {"department": Department.FINANCE},
            True,
            "ABAC: Attributes match policy.",
        ),
    ],
)
def test_abac_rule_priority(user_kw, res_kw, granted, reason):
    r = ABACEvaluator().evaluate(make_user(**user_kw), make_resource(**res_kw), WEEKDAY_NOON)
    assert r.granted is granted
    assert r.reason == reason
    assert r.policy_type == "ABAC"


def test_abac_acl_member_passes_department_mismatch():
    user = make_user(id="u9", role=Role.EMPLOYEE, department=Department.IT)
    res = make_resource(department=Department.SALES, acl={"u9"})
    assert ABACEvaluator().evaluate(user, res, WEEKDAY_NOON).granted


# ---------------------------------------------------------------------- DAC


def test_dac_owner_acl_and_stranger():
    ev = DACEvaluator()
    owner = ev.evaluate(make_user(id="o"), make_resource(owner_id="o"), WEEKDAY_NOON)
    listed = ev.evaluate(make_user(id="l"), make_resource(acl={"l"}), WEEKDAY_NOON)
    stranger = ev.evaluate(make_user(id="s"), make_resource(), WEEKDAY_NOON)
    assert owner.granted and owner.reason == "DAC: User is the resource owner."
    assert listed.granted and "ACL" in listed.reason
    assert not stranger.granted and stranger.reason == "DAC: User is not owner and not in ACL."


def test_evaluators_do_not_mutate_inputs():
    user = make_user()
    res = make_resource(acl={"a"})
    for ev in (MACEvaluator(), DACEvaluator(), RBACEvaluator(), RuBACEvaluator(), ABACEvaluator()):
        ev.evaluate(user, res, WEEKDAY_NOON)
    assert res.acl == frozenset({"a"})
    assert user == make_user()


def test_rbac_wildcard_for_custom_role_names_the_role():
    ev = RBACEvaluator(PermissionTable({Role.AUDITOR: ["*"]}))
    r = ev.evaluate(make_user(role=Role.AUDITOR), make_resource(), WEEKDAY_NOON)
    assert r.granted and r.reason == "RBAC: Role AUDITOR has global access."
