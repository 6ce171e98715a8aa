"""Application entry point and composition root."""

import logging
from datetime import timedelta

from motorent import __version__
from motorent.application.authorization import PermissionGate
from motorent.application.catalog import build_catalog
from motorent.application.events import EventDispatcher
from motorent.application.subscribers import register_subscribers
from motorent.application.use_cases.jobs.invoice_pending_payments import (
    InvoicePendingPaymentsUseCase,
)
from motorent.application.use_cases.payment.approve_payment import ApprovePaymentUseCase
from motorent.application.use_cases.payment.cancel_payment import CancelPaymentUseCase
from motorent.application.use_cases.payment.get_payment import GetPaymentUseCase
from motorent.application.use_cases.payment.refund_payment import RefundPaymentUseCase
from motorent.application.use_cases.payment.reject_payment import RejectPaymentUseCase
from motorent.application.use_cases.permission.assign_profile import AssignProfileUseCase
from motorent.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from motorent.application.use_cases.permission.register_operation import (
    RegisterOperationUseCase,
)
from motorent.application.use_cases.permission.revoke_profile import RevokeProfileUseCase
from motorent.config import get_settings
from motorent.infrastructure.auth.keycloak_provider import KeycloakProvider
from motorent.infrastructure.permission.permission_checker import ProfilePermissionChecker
from motorent.infrastructure.persistence.postgres.connection import create_pool
from motorent.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from motorent.interfaces.api.app import create_app
from motorent.interfaces.api.middleware.auth import AuthMiddleware
from motorent.interfaces.api.middleware.cors import CORSMiddleware
from motorent.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from motorent.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"Motorent v{__version__}")


def create_motorent_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; every request is unauthenticated")

    catalog = build_catalog()
    gate = PermissionGate(catalog, ProfilePermissionChecker(uow_factory))
    dispatcher = EventDispatcher(catalog, uow_factory)
    register_subscribers(dispatcher, uow_factory)
    logger.info(
        "Catalog: %d operations, %d event subscribers", len(catalog), dispatcher.handler_count
    )

    sweep = InvoicePendingPaymentsUseCase(
        unit_of_work_factory=uow_factory,
        dispatcher=dispatcher,
        grace=timedelta(minutes=settings.invoice_grace_minutes),
        batch_size=settings.sweep_batch_size,
    )

    payment_resource = PaymentResource(
        gate,
        GetPaymentUseCase(uow_factory),
        ApprovePaymentUseCase(uow_factory, dispatcher),
        RejectPaymentUseCase(uow_factory, dispatcher),
        RefundPaymentUseCase(uow_factory, dispatcher),
        CancelPaymentUseCase(uow_factory, dispatcher),
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        health_resource=HealthResource(dispatcher),
        operations_resource=OperationsResource(gate, RegisterOperationUseCase(catalog)),
        profiles_resource=ProfilesResource(gate, uow_factory),
        profile_assignment_resource=ProfileAssignmentResource(
            gate, AssignProfileUseCase(uow_factory), RevokeProfileUseCase(uow_factory)
        ),
        user_permissions_resource=UserPermissionsResource(
            gate, GetEffectivePermissionsUseCase(uow_factory, catalog)
        ),
        payment_resource=payment_resource,
        events_resource=EventsResource(gate, dispatcher, uow_factory),
        invoice_sweep_resource=InvoiceSweepResource(sweep, settings.cron_secret),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, dispatcher),
            AuthMiddleware(keycloak),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_motorent_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
