"""Delinquency alert on repeated payment rejections."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from motorent.domain.entities import Alert, BusinessEvent
from motorent.domain.value_objects import PaymentStatus

logger = logging.getLogger(__name__)

ALERT_KIND = "MOROSIDAD"
REJECTION_THRESHOLD = 3
DEDUP_WINDOW = timedelta(hours=24)


class DelinquencySubscriber:
    """Raises a MOROSIDAD alert once a contract reaches three rejected payments.

    At most one alert per contract per 24 hours.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def __call__(self, event: BusinessEvent) -> None:
        if event.payload.get("new_status") != PaymentStatus.RECHAZADO:
            return
        contract_id = event.payload.get("contract_id")
        if not contract_id:
            return

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            rejected = await uow.payments.count_by_contract(contract_id, PaymentStatus.RECHAZADO)
            if rejected < REJECTION_THRESHOLD:
                return
            if await uow.alerts.find_recent(contract_id, ALERT_KIND, now - DEDUP_WINDOW):
                return
            await uow.alerts.create(
                Alert(
                    id=uuid4(),
                    kind=ALERT_KIND,
                    message=f"[Morosidad] {rejected} pagos rechazados en el contrato. Requiere atención.",
                    created_at=now,
                    contract_id=contract_id,
                )
            )
        logger.info("Delinquency alert raised for contract %s (%d rejections)", contract_id, rejected)
