"""Payment status and its state machine."""

from enum import StrEnum

from motorent.domain.exceptions import InvalidTransition


class PaymentStatus(StrEnum):
    """Payment states. APROBADO only leaves through a refund."""

    PENDIENTE = "PENDIENTE"
    APROBADO = "APROBADO"
    RECHAZADO = "RECHAZADO"
    VENCIDO = "VENCIDO"
    REEMBOLSADO = "REEMBOLSADO"
    CANCELADO = "CANCELADO"


PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDIENTE: frozenset(
        {
            PaymentStatus.APROBADO,
            PaymentStatus.RECHAZADO,
            PaymentStatus.CANCELADO,
            PaymentStatus.VENCIDO,
        }
    ),
    PaymentStatus.APROBADO: frozenset({PaymentStatus.REEMBOLSADO}),
    PaymentStatus.RECHAZADO: frozenset({PaymentStatus.PENDIENTE, PaymentStatus.CANCELADO}),
    PaymentStatus.VENCIDO: frozenset(
        {PaymentStatus.APROBADO, PaymentStatus.PENDIENTE, PaymentStatus.CANCELADO}
    ),
    PaymentStatus.REEMBOLSADO: frozenset(),
    PaymentStatus.CANCELADO: frozenset(),
}


def allowed_transitions(current: PaymentStatus) -> frozenset[PaymentStatus]:
    """Statuses reachable from current."""
    return PAYMENT_TRANSITIONS.get(current, frozenset())


def is_terminal(status: PaymentStatus) -> bool:
    """True when no transition leaves status."""
    return not allowed_transitions(status)


def validate_transition(current: PaymentStatus, target: PaymentStatus) -> None:
    """Raise InvalidTransition unless current -> target is allowed."""
    if target not in allowed_transitions(current):
        raise InvalidTransition(current.value, target.value)
