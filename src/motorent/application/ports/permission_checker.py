"""Permission checker port - granular grant lookup."""

from typing import Protocol

from motorent.domain.value_objects import PermissionType


class PermissionChecker(Protocol):
    """Port for checking a user's profile grants on an operation."""

    async def check(
        self, user_id: str, operation_key: str, permission_type: PermissionType
    ) -> bool: ...
