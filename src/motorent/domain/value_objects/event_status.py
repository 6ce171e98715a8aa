"""Delivery status of a business event."""

from enum import StrEnum


class EventStatus(StrEnum):
    """Lifecycle: PENDING -> PROCESSING -> COMPLETED | FAILED."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
