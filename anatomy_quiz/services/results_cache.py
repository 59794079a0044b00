import json
import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

REDIS_PREFIX = "quiz:results:"


class ResultsCache:
    """
    Serialized result lists keyed by quiz id and generation.

    Writes to a quiz or its submissions bump the quiz's generation instead of
    deleting entries. A result list computed before the bump is stored under
    the old generation and is never read again, however late it lands.
    Without a Redis client every call is a miss and nothing is stored.
    """

    def __init__(self, redis: Optional[Redis], ttl_seconds: int) -> None:
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    def k_generation(self, quiz_id: str) -> str:
        return f"{REDIS_PREFIX}gen:{quiz_id}"

    def k_results(self, quiz_id: str, generation: int) -> str:
        return f"{REDIS_PREFIX}{quiz_id}:{generation}"

    async def generation(self, quiz_id: str) -> Optional[int]:
        """Current generation, or None when caching is off for this request."""
        if self.redis is None:
            return None
        try:
            raw = await self.redis.get(self.k_generation(quiz_id))
        except RedisError as e:
            logger.warning("Results cache generation read failed for %s: %s", quiz_id, e)
            return None
        return int(raw) if raw else 0

    async def get(self, quiz_id: str, generation: Optional[int]) -> Optional[list[dict]]:
        if self.redis is None or generation is None:
            return None
        try:
            raw = await self.redis.get(self.k_results(quiz_id, generation))
        except RedisError as e:
            logger.warning("Results cache read failed for %s: %s", quiz_id, e)
            return None
        return json.loads(raw) if raw else None

    async def set(self, quiz_id: str, generation: Optional[int], results: list[dict]) -> None:
        if self.redis is None or generation is None:
            return
        try:
            await self.redis.set(self.k_results(quiz_id, generation), json.dumps(results), ex=self.ttl_seconds)
        except RedisError as e:
            logger.warning("Results cache write failed for %s: %s", quiz_id, e)

    async def invalidate(self, quiz_id: str) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.incr(self.k_generation(quiz_id))
        except RedisError as e:
            logger.warning("Results cache invalidation failed for %s: %s", quiz_id, e)
