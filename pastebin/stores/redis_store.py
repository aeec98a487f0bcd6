"""
Redis-backed paste store.
Each paste is a hash under ``<prefix><id>``; store-level expiry uses PEXPIRE.
"""
import logging
from typing import Dict, Optional

from redis import Redis
from redis.exceptions import RedisError

from pastebin.exceptions import StoreUnavailableError
from pastebin.stores.base import PasteStore
from pastebin.stores.fields import UPDATED_AT, VIEW_COUNT

logger = logging.getLogger(__name__)

# KEYS[1] = paste key, ARGV[1] = updatedAt.  HINCRBY alone would recreate
# an evicted paste as a bare counter, hence the EXISTS guard.
INCREMENT_VIEW_SCRIPT = f"""
if redis.call('EXISTS', KEYS[1]) == 0 then
    return nil
end
local count = redis.call('HINCRBY', KEYS[1], '{VIEW_COUNT}', 1)
redis.call('HSET', KEYS[1], '{UPDATED_AT}', ARGV[1])
return count
"""


class RedisPasteStore(PasteStore):
    """Wrapper for Redis operations on pastes."""

    def __init__(self, client: Redis, prefix: str = "paste:"):
        self.redis = client
        self.prefix = prefix
        self._increment_view = client.register_script(INCREMENT_VIEW_SCRIPT)

    def key(self, paste_id: str) -> str:
        return f"{self.prefix}{paste_id}"

    def put(self, paste_id: str, fields: Dict[str, str], ttl_seconds: Optional[int] = None) -> None:
        key = self.key(paste_id)
        try:
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                pipe.hset(key, mapping=fields)
                if ttl_seconds is not None:
                    pipe.pexpire(key, ttl_seconds * 1000)
                pipe.execute()
        except RedisError as e:
            logger.error(f"Error saving paste {paste_id}: {e}")
            raise StoreUnavailableError(f"Failed to save paste {paste_id}") from e

    def get(self, paste_id: str) -> Optional[Dict[str, str]]:
        try:
            fields = self.redis.hgetall(self.key(paste_id))
        except RedisError as e:
            logger.error(f"Error fetching paste {paste_id}: {e}")
            raise StoreUnavailableError(f"Failed to fetch paste {paste_id}") from e

        # HGETALL answers an empty hash for missing keys
        return fields or None

    def delete(self, paste_id: str) -> None:
        try:
            self.redis.delete(self.key(paste_id))
        except RedisError as e:
            logger.error(f"Error deleting paste {paste_id}: {e}")
            raise StoreUnavailableError(f"Failed to delete paste {paste_id}") from e

    def increment_view(self, paste_id: str, updated_at: str) -> Optional[int]:
        try:
            count = self._increment_view(keys=[self.key(paste_id)], args=[updated_at])
        except RedisError as e:
            logger.error(f"Error incrementing views for {paste_id}: {e}")
            raise StoreUnavailableError(f"Failed to record view for {paste_id}") from e

        return int(count) if count is not None else None

    def ping(self) -> bool:
        """Check if database connection is alive."""
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.error(f"Health check failed: {e}")
        return False

    def close(self) -> None:
        self.redis.close()
