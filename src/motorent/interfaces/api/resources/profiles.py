"""Permission profile API resources."""

from uuid import UUID

import falcon.asgi

from motorent.application.authorization import PermissionGate
from motorent.application.use_cases.permission.assign_profile import AssignProfileUseCase
from motorent.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from motorent.application.use_cases.permission.revoke_profile import RevokeProfileUseCase
from motorent.domain.value_objects import PermissionType


class ProfilesResource:
    """GET /v1/profiles - list profiles with their grants."""

    def __init__(self, gate: PermissionGate, unit_of_work_factory: type) -> None:
        self._gate = gate
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await self._gate.require_permission(
            req.context.user, "system.config.view", fallback_roles=["ADMIN"]
        )
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()
        resp.media = {
            "items": [
                {
                    "id": str(p.id),
                    "name": p.name,
                    "description": p.description,
                    "is_system": p.is_system,
                    "grants": [
                        {
                            "operation_key": g.operation_key,
                            "permission_types": sorted(t.value for t in g.permission_types),
                        }
                        for g in p.grants
                    ],
                }
                for p in profiles
            ]
        }
        resp.status = falcon.HTTP_200


class ProfileAssignmentResource:
    """POST/DELETE /v1/profiles/assign - assign or revoke a profile for a user."""

    def __init__(
        self,
        gate: PermissionGate,
        assign_profile: AssignProfileUseCase,
        revoke_profile: RevokeProfileUseCase,
    ) -> None:
        self._gate = gate
        self._assign = assign_profile
        self._revoke = revoke_profile

    async def _read_target(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> tuple[str, UUID] | None:
        try:
            body = await req.get_media()
            if not isinstance(body, dict):
                resp.status = falcon.HTTP_400
                resp.media = {"error": "Request body must be a JSON object"}
                return None
            user_id = body["user_id"]
            if not isinstance(user_id, str) or not user_id:
                resp.status = falcon.HTTP_400
                resp.media = {"error": "Field 'user_id' must be a non-empty string"}
                return None
            return user_id, UUID(str(body["profile_id"]))
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid profile ID"}
        return None

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor_id = await self._gate.require_permission(
            req.context.user, "system.config.update", PermissionType.EXECUTE, ["ADMIN"]
        )
        target = await self._read_target(req, resp)
        if target is None:
            return
        user_id, profile_id = target
        assignment = await self._assign.execute(actor_id, user_id, profile_id)
        resp.media = {
            "user_id": assignment.user_id,
            "profile_id": str(assignment.profile_id),
            "assigned_at": assignment.assigned_at.isoformat(),
            "assigned_by": assignment.assigned_by,
        }
        resp.status = falcon.HTTP_201

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await self._gate.require_permission(
            req.context.user, "system.config.update", PermissionType.EXECUTE, ["ADMIN"]
        )
        target = await self._read_target(req, resp)
        if target is None:
            return
        await self._revoke.execute(*target)
        resp.status = falcon.HTTP_204


class UserPermissionsResource:
    """GET /v1/users/{user_id}/permissions - effective permissions with source profiles."""

    def __init__(
        self, gate: PermissionGate, get_effective_permissions: GetEffectivePermissionsUseCase
    ) -> None:
        self._gate = gate
        self._get_effective = get_effective_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        identity = req.context.user
        # own permissions are always visible
        if identity is None or identity.user_id != user_id:
            await self._gate.require_permission(
                identity, "system.config.view", fallback_roles=["ADMIN"]
            )
        permissions = await self._get_effective.execute(user_id)
        resp.media = {
            "user_id": user_id,
            "items": [
                {
                    "operation_key": p.operation_key,
                    "permission_types": sorted(t.value for t in p.permission_types),
                    "granted_by": list(p.granted_by),
                }
                for p in permissions
            ],
        }
        resp.status = falcon.HTTP_200
