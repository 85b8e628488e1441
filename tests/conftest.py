from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from aijohub.storage.session_storage import MemoryKeyValueStore
from aijohub.v1_0.services import ApiClient

BASE_URL = "http://backend.test"
VALID_TOKEN = "tok-123"


class FakeBackend:
    """In-memory stand-in for the /api/supplier-kain backend, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.users: Dict[str, str] = {"admin": "rahasia"}
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.next_id = 1
        self.requests: List[httpx.Request] = []
        # (method, path) -> (status, json body or None)
        self.failures: Dict[Tuple[str, str], Tuple[int, Optional[Any]]] = {}

    def seed(self, **fields: Any) -> Dict[str, Any]:
        row = {"id": self.next_id, "nama": "", "alamat": "", "telepon": "", "email": "", "npwp": ""}
        row.update(fields)
        self.rows[str(row["id"])] = row
        self.next_id += 1
        return row

    def fail(self, method: str, path: str, status: int, body: Optional[Any] = None) -> None:
        self.failures[(method, path)] = (status, body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return httpx.Response(status, json=body) if body is not None else httpx.Response(status)

        if path == "/api/auth/login" and method == "POST":
            creds = json.loads(request.content)
            if self.users.get(creds.get("username")) == creds.get("password"):
                return httpx.Response(200, json={"token": VALID_TOKEN})
            return httpx.Response(401, json={"message": "Kredensial tidak valid"})

        if request.headers.get("Authorization") != f"Bearer {VALID_TOKEN}":
            return httpx.Response(401, json={"message": "Unauthorized"})

        if path == "/api/supplier-kain" and method == "GET":
            return httpx.Response(200, json=list(self.rows.values()))

        if path == "/api/supplier-kain/search" and method == "GET":
            q = request.url.params
            out = [
                r for r in self.rows.values()
                if all(q.get(k, "").lower() in str(r[k]).lower() for k in ("nama", "alamat", "telepon"))
            ]
            return httpx.Response(200, json=out)

        if path == "/api/supplier-kain" and method == "POST":
            row = self.seed(**json.loads(request.content))
            return httpx.Response(201, json=row)

        if path.startswith("/api/supplier-kain/") and method == "PUT":
            sid = path.rsplit("/", 1)[-1]
            if sid not in self.rows:
                return httpx.Response(404, json={"message": "Supplier tidak ditemukan"})
            body = json.loads(request.content)
            body["id"] = self.rows[sid]["id"]
            self.rows[sid] = body
            return httpx.Response(200, json=body)

        return httpx.Response(404, json={"message": "not found"})


@dataclass
class PendingCall:
    op: str
    args: Tuple[Any, ...]
    future: asyncio.Future = field(repr=False)

    def resolve(self, value: Any) -> None:
        self.future.set_result(value)

    def fail(self, exc: BaseException) -> None:
        self.future.set_exception(exc)


class ScriptedApi:
    """ApiClient double whose calls stay pending until the test resolves them, in any order."""

    def __init__(self) -> None:
        self.calls: List[PendingCall] = []

    async def _pending(self, op: str, *args: Any) -> Any:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(op, args, fut))
        return await fut

    async def list_all(self, token: str):
        return await self._pending("list_all", token)

    async def search(self, token: str, filter):
        return await self._pending("search", token, filter)

    async def create(self, token: str, data):
        return await self._pending("create", token, data)

    async def update(self, token: str, supplier_id: str, data):
        return await self._pending("update", token, supplier_id, data)


async def settle() -> None:
    """Let started tasks run up to their next await."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def api_client(backend: FakeBackend) -> ApiClient:
    return ApiClient(BASE_URL, timeout=5, transport=backend.transport())


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def scripted() -> ScriptedApi:
    return ScriptedApi()
