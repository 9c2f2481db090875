"""
Redis Session Repository - live session registry shared by all API workers.

Redis Data Structure:
- "session:{sid}"        STRING  user code, SETEX with the session TTL
- "session:user:{code}"  SET     session ids of that user, same TTL

A session is live exactly as long as its "session:{sid}" key exists, so
logout and revocation are a DEL and expiry is Redis' own TTL.
"""

import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from soconnect.domain.entities.session import Session
from soconnect.domain.ports.repositories.session_repository import SessionRepository
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.resilience import guarded

logger = logging.getLogger(__name__)

REDIS_TRANSIENT_ERRORS = (RedisConnectionError, RedisTimeoutError)


class RedisSessionRepository(SessionRepository):
    def __init__(self, redis: Redis, prefix: str = "session"):
        self._redis = redis
        self._prefix = prefix

    def _session_key(self, session_id: str) -> str:
        return f"{self._prefix}:{session_id}"

    def _user_key(self, user_code: UserCode) -> str:
        return f"{self._prefix}:user:{user_code.value}"

    async def save(self, session: Session) -> None:
        ttl = session.ttl_seconds
        user_key = self._user_key(session.user_code)
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.setex(self._session_key(session.id), ttl, session.user_code.value)
            pipe.sadd(user_key, session.id)
            pipe.expire(user_key, ttl)
            await guarded("redis.session_save", pipe.execute(), REDIS_TRANSIENT_ERRORS)

    async def get_owner(self, session_id: str) -> Optional[UserCode]:
        value = await guarded(
            "redis.session_get",
            self._redis.get(self._session_key(session_id)),
            REDIS_TRANSIENT_ERRORS,
        )
        return UserCode(value) if value else None

    async def revoke(self, session_id: str) -> None:
        owner = await self.get_owner(session_id)
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._session_key(session_id))
            if owner is not None:
                pipe.srem(self._user_key(owner), session_id)
            await guarded("redis.session_revoke", pipe.execute(), REDIS_TRANSIENT_ERRORS)

    async def revoke_user(self, user_code: UserCode) -> None:
        user_key = self._user_key(user_code)
        session_ids = await guarded(
            "redis.session_members",
            self._redis.smembers(user_key),
            REDIS_TRANSIENT_ERRORS,
        )
        keys = [self._session_key(sid) for sid in session_ids] + [user_key]
        await guarded("redis.session_revoke_user", self._redis.delete(*keys), REDIS_TRANSIENT_ERRORS)
        if session_ids:
            logger.debug(
                f"[Sessions] Revoked {len(session_ids)} session(s) of {user_code.value}"
            )
