"""Access rules evaluated by the permission gate.

A protected entry point is described by a sequence of rules; access is
allowed when any rule allows it.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from motorent.domain.value_objects.permission_type import PermissionType


@dataclass(frozen=True)
class GranularRule:
    """Allow when the user's profile grants include permission_type on operation_key."""

    operation_key: str
    permission_type: PermissionType
    kind: str = "granular"


@dataclass(frozen=True)
class RoleListRule:
    """Allow when the user's primitive role is one of roles."""

    roles: frozenset[str]
    kind: str = "role_list"

    @classmethod
    def of(cls, roles: Iterable[str]) -> "RoleListRule":
        return cls(roles=frozenset(roles))


AccessRule = GranularRule | RoleListRule
