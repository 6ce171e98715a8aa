"""Operation catalog - registry of named business operations."""

import logging
from collections.abc import Iterable, Iterator

from motorent.application.catalog.definitions import OPERATION_DEFINITIONS, OperationDefinition
from motorent.domain.entities import Operation
from motorent.domain.exceptions import DuplicateOperation, UnknownOperation
from motorent.domain.value_objects import match_pattern

logger = logging.getLogger(__name__)


class OperationCatalog:
    """Maps dotted operation keys to Operation metadata.

    Built once at startup and injected where needed. The only mutation
    path is register(), which rejects duplicate keys.
    """

    def __init__(self, operations: Iterable[Operation] = ()) -> None:
        self._operations: dict[str, Operation] = {}
        for operation in operations:
            self.register(operation)

    def register(self, operation: Operation) -> Operation:
        """Add operation; raise DuplicateOperation if the key exists."""
        if operation.key in self._operations:
            raise DuplicateOperation(operation.key)
        self._operations[operation.key] = operation
        if operation.is_custom:
            logger.info("Registered custom operation %s", operation.key)
        return operation

    def get(self, key: str) -> Operation:
        """Lookup by key; raise UnknownOperation if never registered."""
        try:
            return self._operations[key]
        except KeyError:
            raise UnknownOperation(key) from None

    def list_operations(self, family: str | None = None) -> list[Operation]:
        """All operations sorted by key, optionally restricted to a family."""
        ops = sorted(self._operations.values(), key=lambda o: o.key)
        if family:
            ops = [o for o in ops if o.family == family]
        return ops

    def matching(self, pattern: str) -> list[Operation]:
        """Operations covered by an exact key or wildcard pattern."""
        return [o for o in self.list_operations() if match_pattern(pattern, o.key)]

    def __contains__(self, key: object) -> bool:
        return key in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.list_operations())

    def __len__(self) -> int:
        return len(self._operations)


def _to_operation(definition: OperationDefinition) -> Operation:
    return Operation.from_key(
        definition.key,
        definition.description,
        requires_approval=definition.requires_approval,
        is_view_only=definition.is_view_only,
    )


def build_catalog(
    definitions: Iterable[OperationDefinition] = OPERATION_DEFINITIONS,
) -> OperationCatalog:
    """Fresh catalog populated from the static definition."""
    return OperationCatalog(_to_operation(d) for d in definitions)
