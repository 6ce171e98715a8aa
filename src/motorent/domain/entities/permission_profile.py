"""Permission profile, grants and user assignments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from motorent.domain.value_objects.permission_type import PermissionType


@dataclass(frozen=True)
class PermissionGrant:
    """Grant - profile may perform permission_types on operations matching operation_key.

    operation_key is an exact key or a wildcard pattern ("fleet.*", "*").
    """

    profile_id: UUID
    operation_key: str
    permission_types: frozenset[PermissionType]

    def allows(self, permission_type: PermissionType) -> bool:
        return permission_type in self.permission_types


@dataclass
class PermissionProfile:
    """Profile - named set of grants, assigned to users."""

    id: UUID
    name: str
    description: str = ""
    is_system: bool = False
    grants: list[PermissionGrant] = field(default_factory=list)


@dataclass
class ProfileAssignment:
    """User holds profile."""

    user_id: str
    profile_id: UUID
    assigned_at: datetime
    assigned_by: str | None = None
