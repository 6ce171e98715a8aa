"""Health check endpoints."""

import falcon.asgi

from motorent.application.events import EventDispatcher


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, dispatcher: EventDispatcher | None = None) -> None:
        self._dispatcher = dispatcher

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness; subscribers must be wired."""
        if self._dispatcher is not None and not self._dispatcher.handler_count:
            resp.media = {"status": "not ready", "reason": "no event subscribers registered"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
