"""Operation event dispatcher - in-process publish of business events.

Handlers record that an operation happened; subscribers perform the side
effects (invoicing, alerts, audit) in a background task. Delivery is
attempted once per emission; retries belong to the recovery sweeps.
"""

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from motorent.application.catalog import OperationCatalog
from motorent.domain.entities import BusinessEvent
from motorent.domain.exceptions import SubscriberFailure
from motorent.domain.value_objects import EventStatus, is_pattern, match_pattern

logger = logging.getLogger(__name__)

EventHandler = Callable[[BusinessEvent], Awaitable[None]]
FailureListener = Callable[[SubscriberFailure, BusinessEvent], Awaitable[None] | None]

DEFAULT_PRIORITY = 100


@dataclass(frozen=True)
class Subscription:
    """Handler bound to an operation key or wildcard pattern."""

    pattern: str
    handler: EventHandler
    priority: int = DEFAULT_PRIORITY
    name: str = ""

    def matches(self, operation_key: str) -> bool:
        return match_pattern(self.pattern, operation_key)


class EventDispatcher:
    """Publishes BusinessEvents to subscribers.

    When a unit of work factory is given, every event is stored and its
    delivery status tracked (PENDING -> PROCESSING -> COMPLETED | FAILED).
    """

    def __init__(
        self,
        catalog: OperationCatalog,
        unit_of_work_factory: type | None = None,
    ) -> None:
        self._catalog = catalog
        self._uow_factory = unit_of_work_factory
        self._subscriptions: list[Subscription] = []
        self._failure_listeners: list[FailureListener] = []
        self._pending: set[asyncio.Task] = set()

    # --- registration ---

    def subscribe(
        self,
        pattern: str,
        handler: EventHandler,
        *,
        priority: int = DEFAULT_PRIORITY,
        name: str | None = None,
    ) -> Subscription:
        """Register handler for an operation key or pattern ("payment.*", "*").

        Exact keys must be registered in the catalog.
        """
        if not is_pattern(pattern):
            self._catalog.get(pattern)
        subscription = Subscription(
            pattern=pattern,
            handler=handler,
            priority=priority,
            name=name or getattr(handler, "__qualname__", None) or pattern,
        )
        self._subscriptions.append(subscription)
        # stable sort keeps registration order within a priority
        self._subscriptions.sort(key=lambda s: s.priority)
        return subscription

    def on_failure(self, listener: FailureListener) -> None:
        """Register a listener on the subscriber failure channel."""
        self._failure_listeners.append(listener)

    def subscriptions_for(self, operation_key: str) -> list[Subscription]:
        return [s for s in self._subscriptions if s.matches(operation_key)]

    @property
    def handler_count(self) -> int:
        return len(self._subscriptions)

    def registered_patterns(self) -> list[str]:
        return [s.pattern for s in self._subscriptions]

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # --- emission ---

    async def emit(
        self,
        operation_key: str,
        entity_type: str,
        entity_id: str,
        payload: dict[str, Any] | None = None,
        acting_user_id: str | None = None,
        *,
        parent_event_id: UUID | None = None,
    ) -> BusinessEvent:
        """Record the event and schedule delivery without waiting for it.

        Raises UnknownOperation for unregistered keys.
        """
        event = await self._record(
            operation_key, entity_type, entity_id, payload, acting_user_id, parent_event_id
        )
        subscriptions = self.subscriptions_for(event.operation_key)
        if not subscriptions:
            await self._store_status(event.with_status(EventStatus.COMPLETED, processed_at=_now()))
            return event

        task = asyncio.get_running_loop().create_task(
            self._deliver(event, subscriptions),
            name=f"deliver:{event.operation_key}:{event.entity_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_delivery_done)
        return event

    async def emit_sync(
        self,
        operation_key: str,
        entity_type: str,
        entity_id: str,
        payload: dict[str, Any] | None = None,
        acting_user_id: str | None = None,
        *,
        parent_event_id: UUID | None = None,
    ) -> BusinessEvent:
        """Record the event and wait for every subscriber; returns the final event."""
        event = await self._record(
            operation_key, entity_type, entity_id, payload, acting_user_id, parent_event_id
        )
        subscriptions = self.subscriptions_for(event.operation_key)
        if not subscriptions:
            completed = event.with_status(EventStatus.COMPLETED, processed_at=_now())
            await self._store_status(completed)
            return completed
        return await self._deliver(event, subscriptions)

    async def drain(self) -> None:
        """Wait for every in-flight delivery."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # --- internals ---

    async def _record(
        self,
        operation_key: str,
        entity_type: str,
        entity_id: str,
        payload: dict[str, Any] | None,
        acting_user_id: str | None,
        parent_event_id: UUID | None,
    ) -> BusinessEvent:
        operation = self._catalog.get(operation_key)
        event = BusinessEvent(
            id=uuid4(),
            operation_key=operation.key,
            entity_type=entity_type,
            entity_id=str(entity_id),
            created_at=_now(),
            payload=dict(payload or {}),
            acting_user_id=acting_user_id,
            parent_event_id=parent_event_id,
        )
        if self._uow_factory is not None:
            async with self._uow_factory() as uow:
                await uow.events.create(event)
        return event

    async def _store_status(self, event: BusinessEvent) -> None:
        if self._uow_factory is None:
            return
        async with self._uow_factory() as uow:
            await uow.events.update_status(
                event.id, event.status, error=event.error, processed_at=event.processed_at
            )

    async def _deliver(
        self, event: BusinessEvent, subscriptions: list[Subscription]
    ) -> BusinessEvent:
        await self._store_status(event.with_status(EventStatus.PROCESSING))

        failures: list[SubscriberFailure] = []
        for subscription in subscriptions:
            try:
                await subscription.handler(event)
            except Exception as exc:
                logger.exception(
                    "Subscriber %s failed for %s on %s %s",
                    subscription.name,
                    event.operation_key,
                    event.entity_type,
                    event.entity_id,
                )
                failure = SubscriberFailure(
                    subscription.name, event.operation_key, event.entity_id, exc
                )
                failures.append(failure)
                await self._notify_failure(failure, event)

        if failures:
            error = json.dumps(
                [{"subscriber": f.subscriber, "error": str(f.cause)} for f in failures]
            )
            final = event.with_status(EventStatus.FAILED, error=error, processed_at=_now())
        else:
            final = event.with_status(EventStatus.COMPLETED, processed_at=_now())
        await self._store_status(final)
        return final

    async def _notify_failure(self, failure: SubscriberFailure, event: BusinessEvent) -> None:
        for listener in self._failure_listeners:
            try:
                result = listener(failure, event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Failure listener raised for event %s", event.id)

    def _on_delivery_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Delivery task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Delivery task %s failed", task.get_name(), exc_info=(type(exc), exc, exc.__traceback__)
            )


def _now() -> datetime:
    return datetime.now(UTC)
