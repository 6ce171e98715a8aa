"""Event subscribers and their registration."""

from motorent.application.events import EventDispatcher
from motorent.application.subscribers.anomaly import AnomalySubscriber
from motorent.application.subscribers.audit import audit_event
from motorent.application.subscribers.delinquency import DelinquencySubscriber
from motorent.application.subscribers.invoicing import InvoicingSubscriber


def register_subscribers(dispatcher: EventDispatcher, unit_of_work_factory: type) -> None:
    """Wire the default subscribers. Called once by the composition root."""
    dispatcher.subscribe(
        "payment.approve",
        InvoicingSubscriber(unit_of_work_factory),
        priority=10,
        name="invoicing",
    )
    dispatcher.subscribe(
        "payment.reject",
        DelinquencySubscriber(unit_of_work_factory),
        priority=60,
        name="delinquency",
    )
    anomaly = AnomalySubscriber(unit_of_work_factory)
    dispatcher.subscribe(
        "payment.approve", anomaly.on_payment_approved, priority=500, name="duplicate-payment"
    )
    dispatcher.subscribe(
        "payment.refund", anomaly.on_payment_refunded, priority=500, name="refund-pattern"
    )
    dispatcher.subscribe("*", audit_event, priority=1000, name="audit")


__all__ = [
    "AnomalySubscriber",
    "DelinquencySubscriber",
    "InvoicingSubscriber",
    "audit_event",
    "register_subscribers",
]
