"""Domain entities."""

from motorent.domain.entities.alert import Alert
from motorent.domain.entities.business_event import BusinessEvent
from motorent.domain.entities.invoice import Invoice
from motorent.domain.entities.operation import Operation, parse_operation_key
from motorent.domain.entities.payment import Payment
from motorent.domain.entities.permission_profile import (
    PermissionGrant,
    PermissionProfile,
    ProfileAssignment,
)

__all__ = [
    "Alert",
    "BusinessEvent",
    "Invoice",
    "Operation",
    "Payment",
    "PermissionGrant",
    "PermissionProfile",
    "ProfileAssignment",
    "parse_operation_key",
]
