"""Prisma failures that mean "the database is unreachable right now"."""

import httpx
from prisma.engine.errors import EngineConnectionError
from prisma.errors import (
    ClientNotConnectedError,
    HTTPClientClosedError,
    TransactionExpiredError,
)

PRISMA_TRANSIENT_ERRORS = (
    ClientNotConnectedError,
    HTTPClientClosedError,
    TransactionExpiredError,
    EngineConnectionError,
    httpx.TransportError,
)
