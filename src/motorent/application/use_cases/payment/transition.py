"""Payment status transitions with event emission."""

import logging

from motorent.application.events import EventDispatcher
from motorent.domain.entities import Payment
from motorent.domain.exceptions import NotFound
from motorent.domain.value_objects import PaymentStatus, validate_transition

logger = logging.getLogger(__name__)

ENTITY_TYPE = "Pago"


class PaymentTransitionUseCase:
    """Base for payment transitions: validate, persist, then emit.

    The event is emitted after the unit of work commits; subscriber
    outcome never affects the returned payment.
    """

    target: PaymentStatus
    operation_key: str

    def __init__(self, unit_of_work_factory: type, dispatcher: EventDispatcher) -> None:
        self._uow_factory = unit_of_work_factory
        self._dispatcher = dispatcher

    async def execute(
        self,
        actor_id: str | None,
        payment_id: str,
        *,
        notes: str | None = None,
        **changes,
    ) -> Payment:
        async with self._uow_factory() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if payment is None:
                raise NotFound("Payment", payment_id)
            previous = payment.status
            validate_transition(previous, self.target)
            self.apply(payment, **changes)
            payment.status = self.target
            if notes is not None:
                payment.notes = notes
            await uow.payments.update(payment)

        logger.info("Payment %s %s -> %s by %s", payment.id, previous, self.target, actor_id)
        await self._dispatcher.emit(
            self.operation_key,
            ENTITY_TYPE,
            payment.id,
            self.event_payload(payment, previous),
            actor_id,
        )
        return payment

    def apply(self, payment: Payment, **changes) -> None:
        """Transition-specific field updates."""

    def event_payload(self, payment: Payment, previous: PaymentStatus) -> dict:
        return {
            "previous_status": previous.value,
            "new_status": self.target.value,
            "amount": str(payment.amount),
            "method": payment.method,
            "contract_id": payment.contract_id,
        }
