"""Domain exceptions."""


class MotorentError(Exception):
    """Base exception for Motorent."""

    pass


class Unauthenticated(MotorentError):
    """No identity could be resolved for the request."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(MotorentError):
    """Identity resolved but lacks the required permission."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)


class UnknownOperation(MotorentError):
    """Operation key is not registered in the catalog."""

    def __init__(self, operation_key: str) -> None:
        self.operation_key = operation_key
        super().__init__(f"Unknown operation: {operation_key}")


class DuplicateOperation(MotorentError):
    """Operation key is already registered in the catalog."""

    def __init__(self, operation_key: str) -> None:
        self.operation_key = operation_key
        super().__init__(f"Operation already registered: {operation_key}")


class ValidationError(MotorentError):
    """Validation failed for input data."""

    pass


class NotFound(MotorentError):
    """Requested resource was not found."""

    def __init__(self, entity: str, entity_id: object | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} not found: {entity_id}")


class InvalidTransition(ValidationError):
    """Requested status change is not allowed by the state machine."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid payment transition: {current} -> {target}")


class SubscriberFailure(MotorentError):
    """A subscriber raised while handling an event.

    Never propagated to the request that emitted the event; delivered to
    failure listeners and recorded on the stored event instead.
    """

    def __init__(
        self,
        subscriber: str,
        operation_key: str,
        entity_id: str,
        cause: BaseException,
    ) -> None:
        self.subscriber = subscriber
        self.operation_key = operation_key
        self.entity_id = entity_id
        self.cause = cause
        super().__init__(
            f"Subscriber {subscriber!r} failed for {operation_key} on {entity_id}: {cause}"
        )
