import threading

import pytest

from vaultguard.core.model import Role
from vaultguard.store import (
    SEED_ADMIN,
    SEED_RESOURCES,
    InMemoryDocumentStore,
    load_resource,
    load_user,
    seed_store,
)


def test_crud_roundtrip():
    store = InMemoryDocumentStore()
    store.users.insert_one({"_id": "u1", "name": "A", "role": "EMPLOYEE"})
    store.users.insert_one({"_id": "u2", "name": "B", "role": "EMPLOYEE"})
    assert len(store.users.find({"role": "EMPLOYEE"})) == 2
    assert store.users.find_one({"_id": "u2"})["name"] == "B"
    assert store.users.find_one({"_id": "nope"}) is None

    updated = store.users.update_one({"_id": "u1"}, {"name": "A2"})
    assert updated == {"_id": "u1", "name": "A2", "role": "EMPLOYEE"}
    assert store.users.update_one({"_id": "nope"}, {"name": "x"}) is None

    assert store.users.delete_one({"_id": "u1"}) is True
    assert store.users.delete_one({"_id": "u1"}) is False
    assert [d["_id"] for d in store.users.find()] == ["u2"]


def test_documents_are_copied_in_and_out():
    store = InMemoryDocumentStore()
    doc = {"_id": "r1", "acl": ["a"]}
    store.resources.insert_one(doc)
    doc["acl"].append("mutated")
    got = store.resources.find_one({"_id": "r1"})
    got["acl"].append("mutated-again")
    assert store.resources.find_one({"_id": "r1"})["acl"] == ["a"]


def test_unknown_collection():
    with pytest.raises(KeyError):
        InMemoryDocumentStore().collection("logs")


def test_seed_is_idempotent_and_loadable():
    store = InMemoryDocumentStore()
    seed_store(store)
    seed_store(store)
    assert len(store.users.find()) == 1
    assert len(store.resources.find()) == len(SEED_RESOURCES)
    admin = load_user(store, SEED_ADMIN.id)
    assert admin == SEED_ADMIN and admin.role == Role.ADMIN
    assert load_resource(store, "res_seed_004") == SEED_RESOURCES[3]
    assert load_user(store, "missing") is None
    assert load_resource(store, "missing") is None


def test_lock_serializes_read_modify_write():
    store = InMemoryDocumentStore()
    store.resources.insert_one({"_id": "r1", "acl": []})

    def add(uid):
        with store.lock("resources", "r1"):
            doc = store.resources.find_one({"_id": "r1"})
            store.resources.update_one({"_id": "r1"}, {"acl": doc["acl"] + [uid]})

    threads = [threading.Thread(target=add, args=(f"u{i}",)) for i in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.resources.find_one({"_id": "r1"})["acl"]) == 50
    assert store._locks == {}


def test_lock_entries_are_released_even_on_error():
    store = InMemoryDocumentStore()
    with store.lock("users", "a"):
        assert ("users", "a") in store._locks
    with pytest.raises(RuntimeError):
        with store.lock("users", "b"):
            raise RuntimeError("boom")
    assert store._locks == {}
