"""
Bounded external calls.

Every call to the database, Redis or the disk goes through `guarded`, which
applies STORE_TIMEOUT_SECONDS and turns timeouts and connection failures into
TransientStoreError. Nothing else is translated: constraint violations and
programming errors propagate unchanged.
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from soconnect.config.settings import Config
from soconnect.domain.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def guarded(
    operation: str,
    awaitable: Awaitable[T],
    transient: tuple[type[BaseException], ...] = (),
    timeout: Optional[float] = None,
) -> T:
    timeout = Config.STORE_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"[Store] {operation} timed out after {timeout}s")
        raise TransientStoreError() from e
    except (ConnectionError, *transient) as e:
        logger.warning(f"[Store] {operation} failed: {type(e).__name__}: {e}")
        raise TransientStoreError() from e
