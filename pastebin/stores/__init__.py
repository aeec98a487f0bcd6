"""Storage backends for pastes, and store acquisition at startup."""
import logging

from redis import Redis
from redis.exceptions import RedisError

from pastebin.config import Settings
from pastebin.exceptions import StoreUnavailableError
from pastebin.stores.base import PasteStore
from pastebin.stores.memory import MemoryPasteStore
from pastebin.stores.redis_store import RedisPasteStore

logger = logging.getLogger(__name__)

__all__ = ["MemoryPasteStore", "PasteStore", "RedisPasteStore", "connect_store"]


def connect_store(settings: Settings) -> PasteStore:
    """
    Open the configured Redis store, or fall back to memory.

    Raises:
        StoreUnavailableError: If Redis is unreachable and MEMORY_FALLBACK is off
    """
    # Never log credentials embedded in the URL
    logger.info(f"Attempting to connect to Redis: {settings.REDIS_URL.split('@')[-1]}")
    client = None
    try:
        client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
        client.ping()
    except (RedisError, ValueError) as e:
        # ValueError: REDIS_URL itself could not be parsed
        if client is not None:
            client.close()
        logger.error(f"Error connecting to Redis: {type(e).__name__}: {e}")
        if not settings.MEMORY_FALLBACK:
            raise StoreUnavailableError("Redis is unreachable") from e
        logger.warning("Using in-memory fallback. Data will NOT persist across restarts.")
        return MemoryPasteStore()

    logger.info("Redis connected successfully")
    return RedisPasteStore(client, prefix=settings.PASTE_KEY_PREFIX)
