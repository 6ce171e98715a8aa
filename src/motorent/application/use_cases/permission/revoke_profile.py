"""Revoke permission profile use case."""

from uuid import UUID

from motorent.domain.exceptions import NotFound


class RevokeProfileUseCase:
    """Remove a permission profile from a user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, profile_id: UUID) -> None:
        async with self._uow_factory() as uow:
            removed = await uow.profiles.unassign(user_id, profile_id)
            if not removed:
                raise NotFound("Profile assignment", f"{user_id}/{profile_id}")
