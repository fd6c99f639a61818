"""
Tests for session stores and session helpers.
"""

import json

import pytest

from voice_commands.errors import SessionStoreError
from voice_commands.protocols import SessionStore
from voice_commands.repositories import JsonFileSessionStore, MemorySessionStore
from voice_commands.services import session


@pytest.fixture(params=["memory", "file"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemorySessionStore()
    return JsonFileSessionStore(tmp_path / "session.json")


def test_store_contract(any_store):
    assert isinstance(any_store, SessionStore)
    assert any_store.get("authToken") is None
    assert any_store.get("authToken", "x") == "x"

    any_store.set("authToken", "abc")
    any_store.set("user", {"username": "ana"})
    assert any_store.get("authToken") == "abc"

    any_store.remove("authToken")
    any_store.remove("missing")
    assert any_store.get("authToken") is None

    any_store.clear()
    assert any_store.get("user") is None


def test_memory_store_copies_values():
    store = MemorySessionStore()
    user = {"profile": {"role": "CLIENT"}}
    store.set("user", user)

    user["profile"]["role"] = "ADMIN"
    store.get("user")["profile"]["role"] = "ADMIN"

    assert store.get("user") == {"profile": {"role": "CLIENT"}}


def test_file_store_persists(tmp_path):
    path = tmp_path / "nested" / "session.json"
    JsonFileSessionStore(path).set("authToken", "abc")

    assert json.loads(path.read_text(encoding="utf-8")) == {"authToken": "abc"}
    assert JsonFileSessionStore(path).get("authToken") == "abc"


def test_file_store_missing_file_is_empty(tmp_path):
    store = JsonFileSessionStore(tmp_path / "nope.json")

    assert store.get("authToken") is None
    assert not store.path.exists()


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_file_store_corrupt_file_raises(tmp_path, content):
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SessionStoreError):
        JsonFileSessionStore(path)


def test_login_logout(store):
    session.login(store, "abc", {"username": "ana", "profile": {"role": "ADMIN"}})

    assert session.is_authenticated(store)
    assert session.is_admin(store)
    assert session.current_user(store)["username"] == "ana"

    session.logout(store)

    assert not session.is_authenticated(store)
    assert not session.is_admin(store)
    assert session.current_user(store) is None


def test_login_requires_token(store):
    with pytest.raises(ValueError):
        session.login(store, "")


def test_client_is_not_admin(store):
    session.login(store, "abc", {"profile": {"role": "CLIENT"}})

    assert not session.is_admin(store)


def test_recently_viewed_is_unique_most_recent_first(store):
    for product_id in (1, 2, 3):
        session.remember_recently_viewed(store, {"id": product_id})

    viewed = session.remember_recently_viewed(store, {"id": 1, "name": "Laptop"})

    assert [p["id"] for p in viewed] == [1, 3, 2]
    assert viewed[0]["name"] == "Laptop"
    assert session.recently_viewed(store) == viewed


def test_recently_viewed_is_capped(store):
    for product_id in range(12):
        session.remember_recently_viewed(store, {"id": product_id})

    viewed = session.recently_viewed(store)

    assert len(viewed) == 10
    assert viewed[0]["id"] == 11
    assert viewed[-1]["id"] == 2


def test_clear_recently_viewed(store):
    session.remember_recently_viewed(store, {"id": 1})
    session.clear_recently_viewed(store)

    assert session.recently_viewed(store) == []


def test_remember_requires_id(store):
    with pytest.raises(ValueError):
        session.remember_recently_viewed(store, {"name": "Laptop"})
