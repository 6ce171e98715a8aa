"""Reject payment use case."""

from motorent.application.use_cases.payment.transition import PaymentTransitionUseCase
from motorent.domain.value_objects import PaymentStatus


class RejectPaymentUseCase(PaymentTransitionUseCase):
    """Reject a pending or expired payment."""

    target = PaymentStatus.RECHAZADO
    operation_key = "payment.reject"
