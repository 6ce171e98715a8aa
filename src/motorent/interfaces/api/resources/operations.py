"""Operation catalog API resources."""

import falcon.asgi

from motorent.application.authorization import PermissionGate
from motorent.application.use_cases.permission.register_operation import (
    RegisterOperationUseCase,
)
from motorent.domain.entities import Operation
from motorent.domain.value_objects import PermissionType


class OperationsResource:
    """GET/POST /v1/operations - list catalog, register custom operations."""

    def __init__(
        self, gate: PermissionGate, register_operation: RegisterOperationUseCase
    ) -> None:
        self._gate = gate
        self._register = register_operation

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List operations, optionally filtered by ?family=."""
        await self._gate.require_permission(
            req.context.user, "system.config.view", fallback_roles=["ADMIN"]
        )
        family = req.get_param("family")
        operations = self._gate.catalog.list_operations(family)
        resp.media = {"items": [operation_to_dict(o) for o in operations]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Register a custom operation."""
        await self._gate.require_permission(
            req.context.user, "system.config.update", PermissionType.EXECUTE
        )
        try:
            body = await req.get_media()
            if not isinstance(body, dict):
                raise ValueError("Request body must be a JSON object")
            key = body["key"]
            if not isinstance(key, str):
                raise ValueError("Field 'key' must be a string")
            raw_type = body.get("permission_type")
            permission_type = PermissionType(raw_type) if raw_type else None
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        operation = self._register.execute(
            key,
            body.get("description", ""),
            permission_type=permission_type,
            requires_approval=bool(body.get("requires_approval", False)),
        )
        resp.media = operation_to_dict(operation)
        resp.status = falcon.HTTP_201


def operation_to_dict(o: Operation) -> dict:
    return {
        "key": o.key,
        "family": o.family,
        "entity": o.entity,
        "action": o.action,
        "permission_type": o.permission_type.value,
        "description": o.description,
        "requires_approval": o.requires_approval,
        "is_view_only": o.is_view_only,
        "is_custom": o.is_custom,
    }
