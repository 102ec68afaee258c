"""Shared httpx client handling for the geocoding resolvers."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

# Errors from a response body that is not the shape we expect
PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


@asynccontextmanager
async def open_client(
    client: Optional[httpx.AsyncClient], timeout: float
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client* if given, otherwise a short-lived client closed on exit.

    Callers resolving many locations should pass one shared client so
    requests reuse the connection pool. Each request passes its own
    timeout, so *timeout* only covers a client created here.
    """
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
