"""Audit trail - one log line per business event."""

import logging

from motorent.domain.entities import BusinessEvent

logger = logging.getLogger("motorent.audit")


async def audit_event(event: BusinessEvent) -> None:
    logger.info(
        "%s %s=%s by=%s event=%s",
        event.operation_key,
        event.entity_type,
        event.entity_id,
        event.acting_user_id or "-",
        event.id,
    )
