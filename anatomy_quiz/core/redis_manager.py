from redis.asyncio import Redis
from anatomy_quiz.core.config import settings

_redis: Redis | None = None

async def get_redis() -> Redis | None:
    """
    Returns the shared Redis client, or None when REDIS_URL is not configured.
    Supports TLS through the rediss:// scheme for managed providers.
    """
    global _redis
    if settings.REDIS_URL is None:
        return None
    if _redis is None:
        _redis = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            health_check_interval=30,
            socket_timeout=3,
            socket_connect_timeout=3,
            retry_on_timeout=True,
            max_connections=50,
        )
    return _redis

async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
