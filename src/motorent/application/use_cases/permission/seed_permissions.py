"""Seed the permission system: system profiles, grants and legacy users."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import uuid4

from motorent.application.catalog import OperationCatalog
from motorent.application.catalog.definitions import (
    ROLE_TO_PROFILE,
    SYSTEM_PROFILES,
    ProfileDefinition,
)
from motorent.application.dto.job_results import SeedResult
from motorent.domain.entities import PermissionGrant, PermissionProfile, ProfileAssignment
from motorent.domain.value_objects import Identity

logger = logging.getLogger(__name__)

SEED_ACTOR = "system-migration"


class SeedPermissionsUseCase:
    """Idempotent seed.

    Profiles are upserted by name, their grants replaced with the wildcard
    patterns expanded into one grant per catalog operation, and users with a
    legacy role get the matching profile.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog: OperationCatalog,
        profiles: Iterable[ProfileDefinition] = SYSTEM_PROFILES,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog
        self._profiles = tuple(profiles)

    async def execute(self, legacy_users: Iterable[Identity] = ()) -> SeedResult:
        result = SeedResult(operations=len(self._catalog))
        profile_ids = {}

        async with self._uow_factory() as uow:
            for definition in self._profiles:
                profile = await uow.profiles.upsert(
                    PermissionProfile(
                        id=uuid4(),
                        name=definition.name,
                        description=definition.description,
                        is_system=True,
                    )
                )
                grants = self._expand(profile, definition)
                await uow.profiles.replace_grants(profile.id, grants)
                profile_ids[definition.name] = profile.id
                result.grants_by_profile[definition.name] = len(grants)
                logger.info("Profile %r: %d grants", definition.name, len(grants))

            for user in legacy_users:
                profile_id = profile_ids.get(ROLE_TO_PROFILE.get(user.role or "", ""))
                if profile_id is None:
                    continue
                await uow.profiles.assign(
                    ProfileAssignment(
                        user_id=user.user_id,
                        profile_id=profile_id,
                        assigned_at=datetime.now(UTC),
                        assigned_by=SEED_ACTOR,
                    )
                )
                result.migrated_users += 1

        logger.info("%d users migrated to permission profiles", result.migrated_users)
        return result

    def _expand(
        self, profile: PermissionProfile, definition: ProfileDefinition
    ) -> list[PermissionGrant]:
        merged: dict[str, set] = {}
        for grant in definition.grants:
            for operation in self._catalog.matching(grant.pattern):
                merged.setdefault(operation.key, set()).update(grant.permission_types)
        return [
            PermissionGrant(
                profile_id=profile.id,
                operation_key=key,
                permission_types=frozenset(types),
            )
            for key, types in sorted(merged.items())
        ]
