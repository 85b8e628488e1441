from typing import Any, Dict, List, Optional, Type

import httpx

from aijohub.core.errors import ApiError, AuthError, ErrorKind, FetchError, SaveError
from aijohub.core.logger import logger
from aijohub.v1_0.entities import SupplierDTO
from aijohub.v1_0.schemas import SupplierCreate, SupplierSearch, SupplierUpdate


class ApiClient:
    """
    Stateless async facade over the AijoHub backend.

    Every supplier call takes the bearer token from the caller; nothing is
    cached between calls. Failures are raised as the typed errors of
    `aijohub.core.errors`, never as raw httpx exceptions.
    """

    LOGIN_PATH = "/api/auth/login"
    SUPPLIER_PATH = "/api/supplier-kain"

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: Backend origin, e.g. http://api.aijostore.id:8080.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.base = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base, timeout=self.timeout, transport=self.transport)

    @staticmethod
    def _headers(token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _message(r: httpx.Response, default: str) -> str:
        try:
            data = r.json()
        except ValueError:
            return default
        if isinstance(data, dict):
            msg = data.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
        return default

    async def _send(
        self,
        method: str,
        path: str,
        *,
        error_cls: Type[ApiError],
        default_message: str,
        token: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        logger.debug("[ApiClient] %s %s", method, path)
        try:
            async with self._client() as client:
                r = await client.request(method, path, headers=self._headers(token), **kwargs)
        except httpx.RequestError as e:
            logger.warning("[ApiClient] %s %s transport error: %s", method, path, e)
            raise error_cls(
                "Tidak dapat terhubung ke server.",
                kind=ErrorKind.TRANSPORT,
            ) from e

        if not r.is_success:
            logger.warning("[ApiClient] %s %s -> %s", method, path, r.status_code)
            raise error_cls(self._message(r, default_message), status=r.status_code)
        return r

    @staticmethod
    def _json(r: httpx.Response, error_cls: Type[ApiError], default_message: str) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise error_cls(default_message, status=r.status_code, kind=ErrorKind.PAYLOAD) from e

    def _rows(self, r: httpx.Response, default_message: str) -> List[SupplierDTO]:
        data = self._json(r, FetchError, default_message)
        if not isinstance(data, list) or any(not isinstance(x, dict) for x in data):
            logger.error("[ApiClient] unexpected list payload: %s", str(data)[:300])
            raise FetchError(default_message, status=r.status_code, kind=ErrorKind.PAYLOAD)
        return [SupplierDTO.from_dict(x) for x in data]

    # ---------- auth ----------

    async def login(self, username: str, password: str) -> str:
        """
        Exchange credentials for a bearer token.

        Returns:
            The token string.

        Raises:
            AuthError: Non-success status (backend message when given),
                transport failure, or a success body without a token.
        """
        r = await self._send(
            "POST",
            self.LOGIN_PATH,
            error_cls=AuthError,
            default_message="Username atau password salah.",
            json={"username": username, "password": password},
        )
        data = self._json(r, AuthError, "missing token")
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthError("missing token", status=r.status_code, kind=ErrorKind.PAYLOAD)
        return token

    # ---------- supplier-kain ----------

    async def list_all(self, token: str) -> List[SupplierDTO]:
        msg = "Gagal memuat data supplier."
        r = await self._send("GET", self.SUPPLIER_PATH, error_cls=FetchError, default_message=msg, token=token)
        return self._rows(r, msg)

    async def search(self, token: str, filter: SupplierSearch) -> List[SupplierDTO]:
        msg = "Gagal mencari data."
        r = await self._send(
            "GET",
            f"{self.SUPPLIER_PATH}/search",
            error_cls=FetchError,
            default_message=msg,
            token=token,
            params=filter.to_params(),
        )
        return self._rows(r, msg)

    async def create(self, token: str, data: SupplierCreate) -> SupplierDTO:
        """
        Create a supplier. The backend assigns the id.

        Raises:
            SaveError: On any failure.
        """
        msg = "Gagal menyimpan supplier."
        payload = data.model_dump(mode="json")
        r = await self._send(
            "POST", self.SUPPLIER_PATH, error_cls=SaveError, default_message=msg, token=token, json=payload
        )
        return self._saved(r, payload, "")

    async def update(self, token: str, supplier_id: str, data: SupplierUpdate) -> SupplierDTO:
        """
        Replace a supplier with the full record in `data`.

        Raises:
            SaveError: On any failure, or when `data.id` disagrees with `supplier_id`.
        """
        msg = "Gagal memperbarui supplier."
        if data.id != supplier_id:
            raise SaveError(f"{msg} ID tidak cocok.", kind=ErrorKind.PAYLOAD)
        payload = data.model_dump(mode="json")
        r = await self._send(
            "PUT",
            f"{self.SUPPLIER_PATH}/{supplier_id}",
            error_cls=SaveError,
            default_message=msg,
            token=token,
            json=payload,
        )
        return self._saved(r, payload, supplier_id)

    @staticmethod
    def _saved(r: httpx.Response, payload: Dict[str, Any], fallback_id: str) -> SupplierDTO:
        # some deployments answer 201/204 without echoing the record
        try:
            data = r.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            return SupplierDTO.from_dict(data)
        logger.warning("[ApiClient] save response carried no record (status=%s)", r.status_code)
        return SupplierDTO.from_dict({**payload, "id": fallback_id})
