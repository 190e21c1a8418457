"""aiohttp session helper shared by the outbound HTTP services."""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import aiohttp


@asynccontextmanager
async def session_scope(session: Optional[Any], timeout_seconds: float) -> AsyncIterator[Any]:
    """Yield `session` if one was injected, else a fresh ClientSession closed on exit."""
    if session is not None:
        yield session
        return
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as owned:
        yield owned
