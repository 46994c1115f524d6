import pytest

from vaultguard.core.model import Department, Role, SensitivityLevel, User
from vaultguard.errors import NotFoundError, UnauthorizedError
from vaultguard.services.roles import assign_role, clearance_floor, delete_user
from vaultguard.store import SEED_ADMIN, InMemoryDocumentStore, seed_store

S = SensitivityLevel


@pytest.fixture
def store():
    s = InMemoryDocumentStore()
    seed_store(s)
    s.users.insert_one(User(id="emp", name="E", role=Role.EMPLOYEE).to_document())
    return s


@pytest.mark.parametrize(
    "role,floor",
    [
        (Role.ADMIN, S.TOP_SECRET),
        (Role.HR_MANAGER, S.CONFIDENTIAL),
        (Role.FINANCE_MANAGER, S.CONFIDENTIAL),
        (Role.EMPLOYEE, S.PUBLIC),
        (Role.AUDITOR, S.PUBLIC),
    ],
)
def test_clearance_floor(role, floor):
    assert clearance_floor(role) == floor


def test_promotion_raises_clearance_to_floor(store):
    u = assign_role(store, SEED_ADMIN.id, "emp", Role.FINANCE_MANAGER, Department.FINANCE, S.INTERNAL)
    assert u.role == Role.FINANCE_MANAGER
    assert u.clearance == S.CONFIDENTIAL
    assert store.users.find_one({"_id": "emp"})["clearance"] == int(S.CONFIDENTIAL)


def test_admin_promotion_always_top_secret(store):
    u = assign_role(store, SEED_ADMIN.id, "emp", Role.ADMIN, Department.IT)
    assert u.clearance == S.TOP_SECRET


def test_higher_requested_clearance_is_kept(store):
    u = assign_role(store, SEED_ADMIN.id, "emp", Role.HR_MANAGER, Department.HR, S.TOP_SECRET)
    assert u.clearance == S.TOP_SECRET


def test_unset_clearance_keeps_current_value(store):
    store.users.update_one({"_id": "emp"}, {"clearance": int(S.INTERNAL)})
    u = assign_role(store, SEED_ADMIN.id, "emp", Role.AUDITOR, Department.GENERAL)
    assert u.clearance == S.INTERNAL
    assert u.department == Department.GENERAL


def test_non_admin_cannot_assign(store):
    with pytest.raises(UnauthorizedError):
        assign_role(store, "emp", "emp", Role.ADMIN, Department.IT)


def test_unknown_target(store):
    with pytest.raises(NotFoundError):
        assign_role(store, SEED_ADMIN.id, "ghost", Role.EMPLOYEE, Department.IT)


def test_admin_deletes_user(store):
    delete_user(store, SEED_ADMIN.id, "emp")
    assert store.users.find_one({"_id": "emp"}) is None


def test_admin_cannot_delete_themselves(store):
    with pytest.raises(UnauthorizedError):
        delete_user(store, SEED_ADMIN.id, SEED_ADMIN.id)
    assert store.users.find_one({"_id": SEED_ADMIN.id}) is not None


def test_non_admin_cannot_delete(store):
    store.users.insert_one(User(id="other", name="O").to_document())
    with pytest.raises(UnauthorizedError):
        delete_user(store, "emp", "other")
    assert store.users.find_one({"_id": "other"}) is not None


def test_delete_missing_user_is_not_found(store):
    with pytest.raises(NotFoundError):
        delete_user(store, SEED_ADMIN.id, "ghost")
