"""Pool lifespan middleware - opens pool on startup, drains and closes on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from motorent.application.events import EventDispatcher

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on startup.

    On shutdown waits for in-flight event deliveries before closing the
    pool, since subscribers still need connections.
    """

    def __init__(
        self, pool: AsyncConnectionPool, dispatcher: EventDispatcher | None = None
    ) -> None:
        self._pool = pool
        self._dispatcher = dispatcher

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool when ASGI server starts."""
        await self._pool.open()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Drain event deliveries, then close pool."""
        if self._dispatcher is not None and self._dispatcher.pending_count:
            logger.info("Waiting for %d event deliveries", self._dispatcher.pending_count)
            await self._dispatcher.drain()
        await self._pool.close()
