"""
Cache Layer - Redis.

Contains the async Redis client factory and the Redis-backed session registry.
"""

from soconnect.infrastructure.cache.redis_client import (
    close_redis_client,
    create_redis_client,
)
from soconnect.infrastructure.cache.redis_session_repository import (
    RedisSessionRepository,
)

__all__ = [
    "create_redis_client",
    "close_redis_client",
    "RedisSessionRepository",
]
