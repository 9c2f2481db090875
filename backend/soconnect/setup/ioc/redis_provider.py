"""
Provider for the Redis session registry (SESSION_BACKEND=redis).

Imported lazily by create_container().
"""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from redis.asyncio import Redis

from soconnect.config.settings import Config
from soconnect.domain.ports.repositories import SessionRepository
from soconnect.infrastructure.cache import (
    RedisSessionRepository,
    close_redis_client,
    create_redis_client,
)


class RedisSessionProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_redis(self) -> AsyncIterable[Redis]:
        client = await create_redis_client(Config.REDIS_URL)
        yield client
        await close_redis_client(client)

    @provide(scope=Scope.APP)
    def get_session_repository(self, redis: Redis) -> SessionRepository:
        return RedisSessionRepository(redis)
