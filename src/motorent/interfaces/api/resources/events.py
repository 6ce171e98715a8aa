"""Business event monitor API resources."""

import falcon.asgi

from motorent.application.authorization import PermissionGate
from motorent.application.events import EventDispatcher
from motorent.domain.entities import BusinessEvent
from motorent.domain.value_objects import EventStatus

MAX_LIMIT = 500


class EventsResource:
    """GET /v1/events?status=&operation=&limit= - recent business events.

    GET /v1/events/handlers - registered subscribers.
    """

    def __init__(
        self, gate: PermissionGate, dispatcher: EventDispatcher, unit_of_work_factory: type
    ) -> None:
        self._gate = gate
        self._dispatcher = dispatcher
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await self._gate.require_permission(
            req.context.user, "monitor.events.view", fallback_roles=["ADMIN"]
        )
        try:
            raw_status = req.get_param("status")
            status = EventStatus(raw_status.upper()) if raw_status else None
            limit = int(req.get_param("limit") or 50)
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        limit = max(1, min(limit, MAX_LIMIT))
        operation_key = req.get_param("operation")

        async with self._uow_factory() as uow:
            events = await uow.events.list(
                status=status, operation_key=operation_key, limit=limit
            )
        resp.media = {"items": [event_to_dict(e) for e in events]}
        resp.status = falcon.HTTP_200

    async def on_get_handlers(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        await self._gate.require_permission(
            req.context.user, "monitor.events.view", fallback_roles=["ADMIN"]
        )
        resp.media = {
            "handler_count": self._dispatcher.handler_count,
            "pending_deliveries": self._dispatcher.pending_count,
            "patterns": self._dispatcher.registered_patterns(),
        }
        resp.status = falcon.HTTP_200


def event_to_dict(e: BusinessEvent) -> dict:
    return {
        "id": str(e.id),
        "operation_key": e.operation_key,
        "entity_type": e.entity_type,
        "entity_id": e.entity_id,
        "payload": e.payload,
        "acting_user_id": e.acting_user_id,
        "parent_event_id": str(e.parent_event_id) if e.parent_event_id else None,
        "status": e.status.value,
        "error": e.error,
        "created_at": e.created_at.isoformat(),
        "processed_at": e.processed_at.isoformat() if e.processed_at else None,
    }
