from vaultguard import (
    Department,
    Guard,
    Resource,
    ResourceType,
    Role,
    SensitivityLevel,
    SystemState,
    User,
)


def main() -> None:
    g = Guard()
    finance = User(
        id="u1",
        name="Fran",
        role=Role.FINANCE_MANAGER,
        department=Department.FINANCE,
        clearance=SensitivityLevel.CONFIDENTIAL,
    )
    payroll = Resource(
        id="r1",
        name="Sales Commission Report",
        type=ResourceType.PAYROLL_RECORD,
        owner_id="admin_001",
        sensitivity=SensitivityLevel.CONFIDENTIAL,
        department=Department.SALES,
    )
    rec = g.evaluate_sync(finance, payroll, SystemState(current_time=10, is_weekend=False))
    print(rec.granted, rec.policy_type, rec.reason)  # True ABAC ABAC: Finance override for Payroll.

    rec = g.evaluate_sync(finance, payroll, SystemState(current_time=10, is_weekend=True))
    print(rec.granted, rec.policy_type, rec.severity.value)  # False RuBAC WARNING


if __name__ == "__main__":
    main()
