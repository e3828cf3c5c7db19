# config/store.py
import logging
from model.options import PluginOptions
from repository.consul_store import ConsulKeyValueStore
from repository.kv_store import KeyValueStore
from repository.redis_store import RedisKeyValueStore
from util.enums import Backend

logger = logging.getLogger(__name__)


def build_store(options: PluginOptions) -> KeyValueStore:
    # backend is already validated against Backend by PluginOptions
    if options.backend == Backend.REDIS:
        logger.info("store.build backend=redis")
        return RedisKeyValueStore.from_url(options.redisUrl)
    logger.info(
        "store.build backend=consul host=%s port=%d secure=%s",
        options.host,
        options.port,
        options.secure,
    )
    return ConsulKeyValueStore(host=options.host, port=options.port, secure=options.secure)


async def close_store(client: KeyValueStore | None) -> None:
    aclose = getattr(client, "aclose", None)
    if aclose is not None:
        await aclose()
