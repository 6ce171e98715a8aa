"""Cancel payment use case."""

from motorent.application.use_cases.payment.transition import PaymentTransitionUseCase
from motorent.domain.value_objects import PaymentStatus


class CancelPaymentUseCase(PaymentTransitionUseCase):
    """Cancel a payment. Emitted as payment.reject with new_status CANCELADO."""

    target = PaymentStatus.CANCELADO
    operation_key = "payment.reject"
