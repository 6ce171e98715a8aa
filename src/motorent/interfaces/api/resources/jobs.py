"""Scheduled job trigger endpoints."""

import hmac
import logging

import falcon.asgi

from motorent.application.use_cases.jobs.invoice_pending_payments import (
    InvoicePendingPaymentsUseCase,
)

logger = logging.getLogger(__name__)


class InvoiceSweepResource:
    """POST /v1/jobs/invoice-payments - run the pending-invoice sweep.

    Called by the scheduler with Authorization: Bearer <CRON_SECRET>.
    """

    def __init__(self, sweep: InvoicePendingPaymentsUseCase, cron_secret: str) -> None:
        self._sweep = sweep
        self._cron_secret = cron_secret

    def _authorized(self, req: falcon.asgi.Request) -> bool:
        if not self._cron_secret:
            return False
        auth = req.get_header("Authorization") or ""
        if not auth.startswith("Bearer "):
            return False
        return hmac.compare_digest(auth[7:], self._cron_secret)

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not self._authorized(req):
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        result = await self._sweep.execute()
        resp.media = {"processed": result.processed, "errors": result.errors}
        resp.status = falcon.HTTP_200
