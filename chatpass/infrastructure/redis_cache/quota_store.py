from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from chatpass.domain.errors import StorageUnavailable
from chatpass.domain.ports.quota_store import QuotaStorePort


class RedisQuotaStore(QuotaStorePort):
    """
    One plain string per link: key is the full storage key, value the
    decimal remaining count. No TTL, entries live until the store is cleared.
    """

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise StorageUnavailable(f"quota read failed: {e}") from e

    async def set(self, key: str, remaining: int) -> None:
        try:
            await self._redis.set(key, str(remaining))
        except RedisError as e:
            raise StorageUnavailable(f"quota write failed: {e}") from e
