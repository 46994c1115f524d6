from concurrent.futures import ThreadPoolExecutor

import pytest

from vaultguard.core.model import Role, User
from vaultguard.errors import NotFoundError, UnauthorizedError
from vaultguard.services.access_requests import AccessRequestService, RequestStatus
from vaultguard.store import SEED_ADMIN, InMemoryDocumentStore, load_resource, seed_store


@pytest.fixture
def store():
    s = InMemoryDocumentStore()
    seed_store(s)
    return s


def _user(i):
    return User(id=f"u{i}", name=f"User {i}", role=Role.EMPLOYEE)


def test_submit_is_idempotent_while_pending(store):
    svc = AccessRequestService(store)
    res = load_resource(store, "res_seed_003")
    a = svc.submit(_user(1), res)
    b = svc.submit(_user(1), res)
    assert a.id == b.id
    assert a.status == RequestStatus.PENDING
    assert [r.id for r in svc.pending()] == [a.id]


def test_approve_appends_to_acl_once(store):
    svc = AccessRequestService(store)
    res = load_resource(store, "res_seed_003")
    req = svc.submit(_user(1), res)
    approved = svc.approve(SEED_ADMIN, req.id)
    assert approved.status == RequestStatus.APPROVED
    assert "u1" in load_resource(store, "res_seed_003").acl
    assert svc.pending() == []

    # approving again does not duplicate the ACL entry
    svc.approve(SEED_ADMIN, req.id)
    assert store.resources.find_one({"_id": "res_seed_003"})["acl"].count("u1") == 1


def test_reject_leaves_acl_untouched(store):
    svc = AccessRequestService(store)
    res = load_resource(store, "res_seed_002")
    req = svc.submit(_user(2), res)
    assert svc.reject(SEED_ADMIN, req.id).status == RequestStatus.REJECTED
    assert "u2" not in load_resource(store, "res_seed_002").acl


def test_only_admin_reviews(store):
    svc = AccessRequestService(store)
    req = svc.submit(_user(3), load_resource(store, "res_seed_002"))
    with pytest.raises(UnauthorizedError):
        svc.approve(_user(4), req.id)
    with pytest.raises(UnauthorizedError):
        svc.reject(_user(4), req.id)


def test_unknown_request(store):
    with pytest.raises(NotFoundError):
        AccessRequestService(store).approve(SEED_ADMIN, "nope")


def test_concurrent_approvals_do_not_lose_updates(store):
    svc = AccessRequestService(store)
    res = load_resource(store, "res_seed_005")
    reqs = [svc.submit(_user(i), res) for i in range(40)]
    with ThreadPoolExecutor(max_workers=8) as ex:
        list(ex.map(lambda r: svc.approve(SEED_ADMIN, r.id), reqs))
    acl = load_resource(store, "res_seed_005").acl
    assert {f"u{i}" for i in range(40)} <= acl
