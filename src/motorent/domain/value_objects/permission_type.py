"""Permission types for operation grants."""

from enum import StrEnum


class PermissionType(StrEnum):
    """Granularity of access control on an operation."""

    VIEW = "view"
    CREATE = "create"
    EXECUTE = "execute"
    APPROVE = "approve"
