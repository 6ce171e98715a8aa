"""Domain value objects."""

from motorent.domain.value_objects.access_rule import AccessRule, GranularRule, RoleListRule
from motorent.domain.value_objects.event_status import EventStatus
from motorent.domain.value_objects.identity import Identity
from motorent.domain.value_objects.operation_pattern import is_pattern, match_pattern
from motorent.domain.value_objects.payment_status import (
    PaymentStatus,
    allowed_transitions,
    is_terminal,
    validate_transition,
)
from motorent.domain.value_objects.permission_type import PermissionType

__all__ = [
    "AccessRule",
    "EventStatus",
    "GranularRule",
    "Identity",
    "PaymentStatus",
    "PermissionType",
    "RoleListRule",
    "allowed_transitions",
    "is_pattern",
    "is_terminal",
    "match_pattern",
    "validate_transition",
]
