"""Effective permission DTO."""

from dataclasses import dataclass

from motorent.domain.value_objects import PermissionType


@dataclass(frozen=True)
class EffectivePermission:
    """Merged permission types of a user on one operation, with granting profiles."""

    operation_key: str
    permission_types: frozenset[PermissionType]
    granted_by: tuple[str, ...]

    def allows(self, permission_type: PermissionType) -> bool:
        return permission_type in self.permission_types
