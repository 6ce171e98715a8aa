"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from motorent.interfaces.api.errors import register_error_handlers
from motorent.interfaces.api.resources.events import EventsResource
from motorent.interfaces.api.resources.health import HealthResource
from motorent.interfaces.api.resources.jobs import InvoiceSweepResource
from motorent.interfaces.api.resources.operations import OperationsResource
from motorent.interfaces.api.resources.payments import PaymentResource
from motorent.interfaces.api.resources.profiles import (
    ProfileAssignmentResource,
    ProfilesResource,
    UserPermissionsResource,
)


def create_app(
    health_resource: HealthResource,
    operations_resource: OperationsResource,
    profiles_resource: ProfilesResource,
    profile_assignment_resource: ProfileAssignmentResource,
    user_permissions_resource: UserPermissionsResource,
    payment_resource: PaymentResource,
    events_resource: EventsResource,
    invoice_sweep_resource: InvoiceSweepResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/operations", operations_resource)
    app.add_route("/v1/profiles", profiles_resource)
    app.add_route("/v1/profiles/assign", profile_assignment_resource)
    app.add_route("/v1/users/{user_id}/permissions", user_permissions_resource)
    app.add_route("/v1/payments/{payment_id}", payment_resource)
    for action in ("approve", "reject", "refund", "cancel"):
        app.add_route(f"/v1/payments/{{payment_id}}/{action}", payment_resource, suffix=action)
    app.add_route("/v1/events", events_resource)
    app.add_route("/v1/events/handlers", events_resource, suffix="handlers")
    app.add_route("/v1/jobs/invoice-payments", invoice_sweep_resource)
    return app
