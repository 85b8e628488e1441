import asyncio

import pytest

from aijohub.core.errors import AuthError
from aijohub.storage.session_storage import JsonFileKeyValueStore, MemoryKeyValueStore, make_kv_store
from aijohub.v1_0.entities import SessionDTO
from aijohub.v1_0.services import SessionStore

from conftest import VALID_TOKEN


def test_restore_without_persisted_session(api_client, kv):
    store = SessionStore(api_client, kv)
    assert store.restore() is None
    assert store.current is None


def test_login_persists_token_and_username(api_client, kv):
    store = SessionStore(api_client, kv)

    session = asyncio.run(store.login("admin", "rahasia"))

    assert session == SessionDTO(token=VALID_TOKEN, username="admin")
    assert kv.get("aijoHubToken") == VALID_TOKEN
    assert kv.get("aijoHubUser") == "admin"
    # a fresh store over the same slot sees the session
    assert SessionStore(api_client, kv).restore() == session


def test_failed_login_persists_nothing(api_client, kv):
    store = SessionStore(api_client, kv)

    with pytest.raises(AuthError) as exc:
        asyncio.run(store.login("admin", "salah"))

    assert exc.value.message == "Kredensial tidak valid"
    assert kv.get("aijoHubToken") is None
    assert kv.get("aijoHubUser") is None
    assert store.current is None


def test_blank_credentials_rejected_locally(api_client, backend, kv):
    store = SessionStore(api_client, kv)

    with pytest.raises(AuthError):
        asyncio.run(store.login("", ""))

    assert backend.requests == []


def test_logout_clears_slot(api_client, kv):
    store = SessionStore(api_client, kv)
    asyncio.run(store.login("admin", "rahasia"))

    store.logout()

    assert store.current is None
    assert store.restore() is None
    assert kv.get("aijoHubToken") is None


def test_half_written_slot_is_not_a_session(api_client):
    kv = MemoryKeyValueStore({"aijoHubToken": VALID_TOKEN})
    assert SessionStore(api_client, kv).restore() is None


def test_custom_keys(api_client, kv):
    store = SessionStore(api_client, kv, token_key="t", user_key="u")
    asyncio.run(store.login("admin", "rahasia"))
    assert kv.get("t") == VALID_TOKEN and kv.get("u") == "admin"


def test_file_store_survives_restart(api_client, tmp_path):
    path = tmp_path / "session.json"
    asyncio.run(SessionStore(api_client, JsonFileKeyValueStore(path)).login("admin", "rahasia"))

    restored = SessionStore(api_client, JsonFileKeyValueStore(path)).restore()

    assert restored == SessionDTO(token=VALID_TOKEN, username="admin")


def test_file_store_treats_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get("aijoHubToken") is None
    store.set("aijoHubToken", "x")
    assert JsonFileKeyValueStore(path).get("aijoHubToken") == "x"
    store.delete("aijoHubToken")
    assert store.get("aijoHubToken") is None
    assert list(tmp_path.glob("*.tmp")) == []


def test_make_kv_store_picks_backend(tmp_path):
    assert isinstance(make_kv_store(None), MemoryKeyValueStore)
    assert isinstance(make_kv_store(str(tmp_path / "s.json")), JsonFileKeyValueStore)
