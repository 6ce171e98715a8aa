"""Fixtures for API tests."""

import pytest

from motorent.application.authorization import PermissionGate
from motorent.application.catalog import OperationCatalog
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
from motorent.domain.value_objects import PermissionType
from motorent.infrastructure.auth.keycloak_provider import OIDCUser
from motorent.infrastructure.permission.permission_checker import ProfilePermissionChecker
from motorent.interfaces.api.app import create_app
from motorent.interfaces.api.middleware.auth import AuthMiddleware
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

CRON_SECRET = "cron-test-secret"

TOKENS = {
    "tok-admin": OIDCUser("u-admin", "admin@motorent.test", "admin", ["ADMIN"]),
    "tok-operador": OIDCUser("u-operador", None, "operador", ["offline_access", "OPERADOR"]),
    "tok-contador": OIDCUser("u-contador", None, "contador", ["CONTADOR"]),
}


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class FakeKeycloak:
    """Token decoder backed by a fixed token table."""

    def decode_token(self, token: str) -> OIDCUser | None:
        return TOKENS.get(token)


@pytest.fixture
def dispatcher(catalog: OperationCatalog, uow_factory) -> EventDispatcher:
    dispatcher = EventDispatcher(catalog, uow_factory)
    register_subscribers(dispatcher, uow_factory)
    return dispatcher


@pytest.fixture
def app(catalog: OperationCatalog, uow_factory, fake_uow, dispatcher: EventDispatcher):
    """Falcon ASGI app wired over in-memory repositories."""
    contador = fake_uow.profiles.add_profile(
        "Contador", {"payment.*": {PermissionType.VIEW, PermissionType.APPROVE}}
    )
    operador = fake_uow.profiles.add_profile(
        "Operador Flota", {"payment.*": {PermissionType.VIEW, PermissionType.CREATE}}
    )
    administrador = fake_uow.profiles.add_profile(
        "Administrador", {"*": set(PermissionType)}
    )
    fake_uow.profiles.assign_user("u-admin", administrador)
    fake_uow.profiles.assign_user("u-contador", contador)
    fake_uow.profiles.assign_user("u-operador", operador)

    gate = PermissionGate(catalog, ProfilePermissionChecker(uow_factory))
    sweep = InvoicePendingPaymentsUseCase(uow_factory, dispatcher)
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
        payment_resource=PaymentResource(
            gate,
            GetPaymentUseCase(uow_factory),
            ApprovePaymentUseCase(uow_factory, dispatcher),
            RejectPaymentUseCase(uow_factory, dispatcher),
            RefundPaymentUseCase(uow_factory, dispatcher),
            CancelPaymentUseCase(uow_factory, dispatcher),
        ),
        events_resource=EventsResource(gate, dispatcher, uow_factory),
        invoice_sweep_resource=InvoiceSweepResource(sweep, CRON_SECRET),
        middleware=[AuthMiddleware(FakeKeycloak())],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
