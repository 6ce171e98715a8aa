"""Payment API resources."""

import falcon.asgi

from motorent.application.authorization import PermissionGate
from motorent.application.use_cases.payment.approve_payment import ApprovePaymentUseCase
from motorent.application.use_cases.payment.cancel_payment import CancelPaymentUseCase
from motorent.application.use_cases.payment.get_payment import GetPaymentUseCase
from motorent.application.use_cases.payment.refund_payment import RefundPaymentUseCase
from motorent.application.use_cases.payment.reject_payment import RejectPaymentUseCase
from motorent.domain.entities import Invoice, Payment
from motorent.domain.value_objects import PermissionType


class PaymentResource:
    """GET /v1/payments/{id} and POST /v1/payments/{id}/approve|reject|refund|cancel.

    Transitions respond as soon as the status change is committed;
    invoicing and alerts run after the response in event subscribers.
    """

    def __init__(
        self,
        gate: PermissionGate,
        get_payment: GetPaymentUseCase,
        approve_payment: ApprovePaymentUseCase,
        reject_payment: RejectPaymentUseCase,
        refund_payment: RefundPaymentUseCase,
        cancel_payment: CancelPaymentUseCase,
    ) -> None:
        self._gate = gate
        self._get = get_payment
        self._approve = approve_payment
        self._reject = reject_payment
        self._refund = refund_payment
        self._cancel = cancel_payment

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        await self._gate.require_permission(
            req.context.user, "payment.view", fallback_roles=["ADMIN", "OPERADOR"]
        )
        payment, invoice = await self._get.execute(payment_id)
        resp.media = payment_to_dict(payment, invoice)
        resp.status = falcon.HTTP_200

    async def on_post_approve(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        actor_id = await self._gate.require_permission(
            req.context.user, "payment.approve", PermissionType.EXECUTE, ["ADMIN"]
        )
        body = await _optional_body(req)
        payment = await self._approve.execute(
            actor_id,
            payment_id,
            notes=body.get("notes"),
            method=body.get("method"),
            external_id=body.get("external_id"),
        )
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200

    async def on_post_reject(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        actor_id = await self._gate.require_permission(
            req.context.user, "payment.reject", PermissionType.EXECUTE, ["ADMIN", "OPERADOR"]
        )
        body = await _optional_body(req)
        payment = await self._reject.execute(actor_id, payment_id, notes=body.get("notes"))
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200

    async def on_post_refund(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        actor_id = await self._gate.require_permission(
            req.context.user, "payment.refund", PermissionType.APPROVE, ["ADMIN"]
        )
        body = await _optional_body(req)
        payment = await self._refund.execute(actor_id, payment_id, notes=body.get("notes"))
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200

    async def on_post_cancel(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, payment_id: str
    ) -> None:
        actor_id = await self._gate.require_permission(
            req.context.user, "payment.reject", PermissionType.EXECUTE, ["ADMIN"]
        )
        body = await _optional_body(req)
        payment = await self._cancel.execute(actor_id, payment_id, notes=body.get("notes"))
        resp.media = payment_to_dict(payment)
        resp.status = falcon.HTTP_200


async def _optional_body(req: falcon.asgi.Request) -> dict:
    if not req.content_length:
        return {}
    body = await req.get_media()
    return body if isinstance(body, dict) else {}


def payment_to_dict(p: Payment, invoice: Invoice | None = None) -> dict:
    data = {
        "id": p.id,
        "contract_id": p.contract_id,
        "amount": str(p.amount),
        "status": p.status.value,
        "method": p.method,
        "created_at": p.created_at.isoformat(),
        "paid_at": p.paid_at.isoformat() if p.paid_at else None,
        "notes": p.notes,
    }
    if invoice is not None:
        data["invoice"] = {
            "id": str(invoice.id),
            "number": invoice.number,
            "amount": str(invoice.amount),
            "issued_at": invoice.issued_at.isoformat(),
        }
    return data
