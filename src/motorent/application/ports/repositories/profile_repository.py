"""Permission profile repository port."""

from typing import Protocol
from uuid import UUID

from motorent.domain.entities import PermissionGrant, PermissionProfile, ProfileAssignment


class ProfileRepository(Protocol):
    """Port for permission profiles, their grants and user assignments."""

    async def get_by_id(self, profile_id: UUID) -> PermissionProfile | None: ...

    async def get_by_name(self, name: str) -> PermissionProfile | None: ...

    async def list_all(self) -> list[PermissionProfile]: ...

    async def list_for_user(self, user_id: str) -> list[PermissionProfile]: ...

    async def upsert(self, profile: PermissionProfile) -> PermissionProfile: ...

    async def replace_grants(self, profile_id: UUID, grants: list[PermissionGrant]) -> None: ...

    async def assign(self, assignment: ProfileAssignment) -> ProfileAssignment: ...

    async def unassign(self, user_id: str, profile_id: UUID) -> bool: ...
