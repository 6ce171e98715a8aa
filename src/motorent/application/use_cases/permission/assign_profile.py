"""Assign permission profile use case."""

from datetime import UTC, datetime
from uuid import UUID

from motorent.domain.entities import ProfileAssignment
from motorent.domain.exceptions import NotFound


class AssignProfileUseCase:
    """Assign a permission profile to a user. Re-assigning is a no-op."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, user_id: str, profile_id: UUID) -> ProfileAssignment:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(profile_id)
            if not profile:
                raise NotFound("Profile", profile_id)
            return await uow.profiles.assign(
                ProfileAssignment(
                    user_id=user_id,
                    profile_id=profile.id,
                    assigned_at=datetime.now(UTC),
                    assigned_by=actor_id,
                )
            )
