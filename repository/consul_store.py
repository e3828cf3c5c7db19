# repository/consul_store.py
import logging
from typing import List, Optional
from urllib.parse import quote
import httpx
from config.settings import settings
from repository.kv_store import KeyNotFoundError
from util.constants import ConsulURIs
from util.errors import StoreOperationError

logger = logging.getLogger(__name__)


class ConsulKeyValueStore:
    """
    Consul KV over its HTTP API.

    One AsyncClient per store; close with aclose(). Keys are sent as URL paths,
    so '/' keeps its hierarchical meaning.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8500,
        secure: bool = True,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = settings.STORE_TIMEOUT_SECONDS,
    ) -> None:
        scheme = "https" if secure else "http"
        self._base_url = f"{scheme}://{host}:{port}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(
                timeout, connect=settings.STORE_CONNECT_TIMEOUT_SECONDS
            ),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _path(key: str) -> str:
        return f"{ConsulURIs.KV}/{quote(key, safe='/')}"

    async def _request(
        self, op: str, method: str, key: str, **kwargs
    ) -> httpx.Response:
        try:
            res = await self._client.request(method, self._path(key), **kwargs)
        except httpx.RequestError as e:
            logger.error("consul.request_error op=%s key=%s err=%s", op, key, type(e).__name__)
            raise StoreOperationError(op, key, e) from e
        if res.status_code == 404 or res.status_code // 100 == 2:
            return res
        logger.error("consul.bad_status op=%s key=%s status=%d", op, key, res.status_code)
        raise StoreOperationError(op, key, RuntimeError(f"HTTP {res.status_code}"))

    async def keys(self, prefix: str) -> List[str]:
        res = await self._request("keys", "GET", prefix, params={"keys": ""})
        if res.status_code == 404:
            raise KeyNotFoundError(prefix)
        try:
            return [str(k) for k in res.json() or []]
        except ValueError as e:
            raise StoreOperationError("keys", prefix, e) from e

    async def get(self, key: str) -> Optional[str]:
        res = await self._request("get", "GET", key, params={"raw": ""})
        if res.status_code == 404:
            return None
        return res.text

    async def set(self, key: str, value: str) -> None:
        res = await self._request("set", "PUT", key, content=value.encode("utf-8"))
        # Consul answers `false` when a write is rejected (e.g. CAS mismatch)
        if res.text.strip() == "false":
            raise StoreOperationError("set", key, RuntimeError("write rejected"))

    async def delete(self, key: str, recurse: bool = False) -> None:
        params = {"recurse": ""} if recurse else None
        await self._request("delete", "DELETE", key, params=params)

    async def aclose(self) -> None:
        await self._client.aclose()
