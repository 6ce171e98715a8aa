"""Repository ports."""

from motorent.application.ports.repositories.alert_repository import AlertRepository
from motorent.application.ports.repositories.event_repository import EventRepository
from motorent.application.ports.repositories.invoice_repository import InvoiceRepository
from motorent.application.ports.repositories.payment_repository import PaymentRepository
from motorent.application.ports.repositories.profile_repository import ProfileRepository

__all__ = [
    "AlertRepository",
    "EventRepository",
    "InvoiceRepository",
    "PaymentRepository",
    "ProfileRepository",
]
