"""Operation entity - a named, permission-checked business action."""

import re
from dataclasses import dataclass

from motorent.domain.exceptions import ValidationError
from motorent.domain.value_objects.permission_type import PermissionType

_KEY_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$")


def parse_operation_key(key: str) -> tuple[str, str, str]:
    """Split a dotted key into (family, entity, action).

    "payment.approve" -> ("payment", "payment", "approve")
    "fleet.moto.create" -> ("fleet", "moto", "create")
    """
    if not _KEY_RE.match(key):
        raise ValidationError(f"Invalid operation key: {key!r}")
    parts = key.split(".")
    if len(parts) == 2:
        return parts[0], parts[0], parts[1]
    return parts[0], parts[1], ".".join(parts[2:])


@dataclass(frozen=True)
class Operation:
    """Operation - immutable once registered in the catalog."""

    key: str
    family: str
    entity: str
    action: str
    permission_type: PermissionType
    description: str = ""
    requires_approval: bool = False
    is_view_only: bool = False
    is_custom: bool = False

    @classmethod
    def from_key(
        cls,
        key: str,
        description: str = "",
        *,
        requires_approval: bool = False,
        is_view_only: bool = False,
        permission_type: PermissionType | None = None,
        is_custom: bool = False,
    ) -> "Operation":
        """Build an operation, deriving family/entity/action from the key.

        View-only operations require "view"; everything else "execute"
        unless a type is given.
        """
        family, entity, action = parse_operation_key(key)
        if permission_type is None:
            permission_type = PermissionType.VIEW if is_view_only else PermissionType.EXECUTE
        return cls(
            key=key,
            family=family,
            entity=entity,
            action=action,
            permission_type=permission_type,
            description=description,
            requires_approval=requires_approval,
            is_view_only=is_view_only,
            is_custom=is_custom,
        )
