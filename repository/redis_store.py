# repository/redis_store.py
import logging
from typing import List, Optional
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from config.settings import settings
from repository.kv_store import KeyNotFoundError
from util.errors import StoreOperationError

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """
    The same hierarchical capability on top of flat Redis strings.

    Prefix listing uses SCAN; recursive delete removes `key` and `key/*`.
    """

    def __init__(self, client: Redis) -> None:
        self._r = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        client = from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=settings.STORE_TIMEOUT_SECONDS,
            socket_connect_timeout=settings.STORE_CONNECT_TIMEOUT_SECONDS,
            socket_keepalive=True,
            health_check_interval=30,
        )
        return cls(client)

    @staticmethod
    def _s(v) -> str:
        return v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)

    @staticmethod
    def _pattern(prefix: str) -> str:
        # SCAN MATCH is glob-style; escape glob metacharacters in the prefix
        escaped = "".join(f"\\{c}" if c in "*?[]\\" else c for c in prefix)
        return f"{escaped}*"

    async def _scan(self, prefix: str) -> List[str]:
        found: List[str] = []
        async for k in self._r.scan_iter(match=self._pattern(prefix), count=500):
            found.append(self._s(k))
        return sorted(found)

    async def keys(self, prefix: str) -> List[str]:
        try:
            found = await self._scan(prefix)
        except RedisError as e:
            logger.error("redis.error op=keys key=%s err=%s", prefix, type(e).__name__)
            raise StoreOperationError("keys", prefix, e) from e
        if not found:
            raise KeyNotFoundError(prefix)
        return found

    async def get(self, key: str) -> Optional[str]:
        try:
            raw = await self._r.get(key)
        except RedisError as e:
            logger.error("redis.error op=get key=%s err=%s", key, type(e).__name__)
            raise StoreOperationError("get", key, e) from e
        return self._s(raw) if raw is not None else None

    async def set(self, key: str, value: str) -> None:
        try:
            await self._r.set(key, value)
        except RedisError as e:
            logger.error("redis.error op=set key=%s err=%s", key, type(e).__name__)
            raise StoreOperationError("set", key, e) from e

    async def delete(self, key: str, recurse: bool = False) -> None:
        try:
            targets = [key]
            if recurse:
                targets += await self._scan(f"{key}/")
            await self._r.delete(*targets)
        except RedisError as e:
            logger.error("redis.error op=delete key=%s err=%s", key, type(e).__name__)
            raise StoreOperationError("delete", key, e) from e

    async def aclose(self) -> None:
        await self._r.aclose()
