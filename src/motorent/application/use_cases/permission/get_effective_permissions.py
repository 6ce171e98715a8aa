"""Effective permissions use case."""

from motorent.application.catalog import OperationCatalog
from motorent.application.dto.effective_permission import EffectivePermission
from motorent.domain.value_objects import PermissionType


class GetEffectivePermissionsUseCase:
    """Union of grants over every profile assigned to a user, per operation.

    Wildcard grants are expanded against the catalog.
    """

    def __init__(self, unit_of_work_factory: type, catalog: OperationCatalog) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog

    async def execute(self, user_id: str) -> list[EffectivePermission]:
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_for_user(user_id)

        types: dict[str, set[PermissionType]] = {}
        sources: dict[str, list[str]] = {}
        for profile in profiles:
            for grant in profile.grants:
                for operation in self._catalog.matching(grant.operation_key):
                    types.setdefault(operation.key, set()).update(grant.permission_types)
                    names = sources.setdefault(operation.key, [])
                    if profile.name not in names:
                        names.append(profile.name)

        return [
            EffectivePermission(
                operation_key=key,
                permission_types=frozenset(types[key]),
                granted_by=tuple(sources[key]),
            )
            for key in sorted(types)
        ]
