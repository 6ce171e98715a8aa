"""Permission checker implementation - union of grants over assigned profiles."""

from motorent.domain.value_objects import PermissionType, match_pattern


class ProfilePermissionChecker:
    """Checks user permissions against the grants of every assigned profile."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def check(
        self, user_id: str, operation_key: str, permission_type: PermissionType
    ) -> bool:
        """True if any profile of the user grants permission_type on operation_key."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_for_user(user_id)

        for profile in profiles:
            for grant in profile.grants:
                if match_pattern(grant.operation_key, operation_key) and grant.allows(
                    permission_type
                ):
                    return True
        return False
