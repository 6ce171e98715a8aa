"""Register custom operation use case."""

from motorent.application.catalog import OperationCatalog
from motorent.domain.entities import Operation
from motorent.domain.value_objects import PermissionType


class RegisterOperationUseCase:
    """Add a custom operation to the catalog. Duplicate keys are rejected."""

    def __init__(self, catalog: OperationCatalog) -> None:
        self._catalog = catalog

    def execute(
        self,
        key: str,
        description: str = "",
        permission_type: PermissionType | None = None,
        requires_approval: bool = False,
    ) -> Operation:
        operation = Operation.from_key(
            key,
            description,
            requires_approval=requires_approval,
            is_view_only=permission_type == PermissionType.VIEW,
            permission_type=permission_type,
            is_custom=True,
        )
        return self._catalog.register(operation)
