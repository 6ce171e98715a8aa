"""Pytest fixtures for Motorent tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from motorent.application.catalog import OperationCatalog, build_catalog
from motorent.domain.entities import (
    Alert,
    BusinessEvent,
    Invoice,
    Payment,
    PermissionGrant,
    PermissionProfile,
    ProfileAssignment,
)
from motorent.domain.value_objects import EventStatus, PaymentStatus, PermissionType


# --- Fake repositories ---


class FakeEventRepository:
    """In-memory business event repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, BusinessEvent] = {}

    async def get_by_id(self, event_id: UUID) -> BusinessEvent | None:
        return self._by_id.get(event_id)

    async def list(
        self,
        *,
        status: EventStatus | None = None,
        operation_key: str | None = None,
        limit: int = 50,
    ) -> list[BusinessEvent]:
        items = [
            e
            for e in self._by_id.values()
            if (status is None or e.status == status)
            and (operation_key is None or e.operation_key == operation_key)
        ]
        items.sort(key=lambda e: e.created_at, reverse=True)
        return items[:limit]

    async def create(self, event: BusinessEvent) -> BusinessEvent:
        self._by_id[event.id] = event
        return event

    async def update_status(
        self,
        event_id: UUID,
        status: EventStatus,
        error: str | None = None,
        processed_at: datetime | None = None,
    ) -> None:
        event = self._by_id.get(event_id)
        if event:
            self._by_id[event_id] = event.with_status(
                status, error=error, processed_at=processed_at
            )

    def all(self) -> list[BusinessEvent]:
        return [e for e in self._by_id.values()]


class FakeInvoiceRepository:
    """In-memory invoice repository; one invoice per payment."""

    def __init__(self) -> None:
        self._by_payment: dict[str, Invoice] = {}
        self._seq = 0

    async def get_by_payment_id(self, payment_id: str) -> Invoice | None:
        return self._by_payment.get(payment_id)

    async def create_if_absent(self, invoice: Invoice) -> bool:
        if invoice.payment_id in self._by_payment:
            return False
        self._seq += 1
        invoice.number = f"0001-{self._seq:08d}"
        self._by_payment[invoice.payment_id] = invoice
        return True

    def all(self) -> list[Invoice]:
        return [i for i in self._by_payment.values()]


class FakePaymentRepository:
    """In-memory payment repository; returns copies so unsaved changes never leak."""

    def __init__(self, invoices_repo: FakeInvoiceRepository | None = None) -> None:
        self._by_id: dict[str, Payment] = {}
        self._invoices = invoices_repo

    async def get_by_id(self, payment_id: str) -> Payment | None:
        payment = self._by_id.get(payment_id)
        return replace(payment) if payment else None

    async def update(self, payment: Payment) -> None:
        self._by_id[payment.id] = replace(payment)

    async def list_approved_without_invoice(
        self, paid_before: datetime, limit: int = 100
    ) -> list[Payment]:
        items = [
            replace(p)
            for p in self._by_id.values()
            if p.status == PaymentStatus.APROBADO
            and p.paid_at is not None
            and p.paid_at < paid_before
            and (self._invoices is None or p.id not in self._invoices._by_payment)
        ]
        items.sort(key=lambda p: p.paid_at)
        return items[:limit]

    async def count_by_contract(self, contract_id: str, status: PaymentStatus) -> int:
        return sum(
            1 for p in self._by_id.values() if p.contract_id == contract_id and p.status == status
        )

    async def list_by_contract(
        self, contract_id: str, created_since: datetime
    ) -> list[Payment]:
        items = [
            replace(p)
            for p in self._by_id.values()
            if p.contract_id == contract_id and p.created_at >= created_since
        ]
        items.sort(key=lambda p: p.created_at)
        return items

    def add(self, payment: Payment) -> Payment:
        self._by_id[payment.id] = replace(payment)
        return payment

    def stored(self, payment_id: str) -> Payment:
        return self._by_id[payment_id]


class FakeProfileRepository:
    """In-memory profiles, grants and assignments."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionProfile] = {}
        self._grants: dict[UUID, list[PermissionGrant]] = {}
        self._assignments: dict[tuple[str, UUID], ProfileAssignment] = {}

    def _with_grants(self, profile: PermissionProfile) -> PermissionProfile:
        return replace(profile, grants=[g for g in self._grants.get(profile.id, [])])

    async def get_by_id(self, profile_id: UUID) -> PermissionProfile | None:
        profile = self._by_id.get(profile_id)
        return self._with_grants(profile) if profile else None

    async def get_by_name(self, name: str) -> PermissionProfile | None:
        for profile in self._by_id.values():
            if profile.name == name:
                return self._with_grants(profile)
        return None

    async def list_all(self) -> list[PermissionProfile]:
        return [self._with_grants(p) for p in sorted(self._by_id.values(), key=lambda p: p.name)]

    async def list_for_user(self, user_id: str) -> list[PermissionProfile]:
        return [
            self._with_grants(self._by_id[profile_id])
            for (uid, profile_id) in self._assignments
            if uid == user_id and profile_id in self._by_id
        ]

    async def upsert(self, profile: PermissionProfile) -> PermissionProfile:
        existing = await self.get_by_name(profile.name)
        if existing:
            profile.id = existing.id
        self._by_id[profile.id] = replace(profile, grants=[])
        return profile

    async def replace_grants(self, profile_id: UUID, grants: list[PermissionGrant]) -> None:
        self._grants[profile_id] = [g for g in grants]

    async def assign(self, assignment: ProfileAssignment) -> ProfileAssignment:
        key = (assignment.user_id, assignment.profile_id)
        return self._assignments.setdefault(key, assignment)

    async def unassign(self, user_id: str, profile_id: UUID) -> bool:
        return self._assignments.pop((user_id, profile_id), None) is not None

    def add_profile(
        self, name: str, grants: dict[str, set[PermissionType]] | None = None
    ) -> PermissionProfile:
        """Store profile with {pattern: types} grants, unexpanded."""
        profile = PermissionProfile(id=uuid4(), name=name)
        self._by_id[profile.id] = profile
        self._grants[profile.id] = [
            PermissionGrant(profile.id, pattern, frozenset(types))
            for pattern, types in (grants or {}).items()
        ]
        return profile

    def assign_user(self, user_id: str, profile: PermissionProfile) -> None:
        self._assignments[(user_id, profile.id)] = ProfileAssignment(
            user_id=user_id, profile_id=profile.id, assigned_at=datetime.now(UTC)
        )


class FakeAlertRepository:
    """In-memory alert repository."""

    def __init__(self) -> None:
        self._store: list[Alert] = []

    async def create(self, alert: Alert) -> Alert:
        self._store.append(alert)
        return alert

    async def find_recent(self, contract_id: str, kind: str, since: datetime) -> Alert | None:
        for alert in self._store:
            if alert.contract_id == contract_id and alert.kind == kind and alert.created_at >= since:
                return alert
        return None

    def all(self) -> list[Alert]:
        return [a for a in self._store]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.events = FakeEventRepository()
        self.invoices = FakeInvoiceRepository()
        self.payments = FakePaymentRepository(invoices_repo=self.invoices)
        self.profiles = FakeProfileRepository()
        self.alerts = FakeAlertRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call, so state persists."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


def make_payment(
    payment_id: str = "pago-123",
    *,
    status: PaymentStatus = PaymentStatus.PENDIENTE,
    contract_id: str = "contrato-1",
    amount: str = "15000.00",
    method: str | None = None,
    paid_at: datetime | None = None,
    created_at: datetime | None = None,
) -> Payment:
    return Payment(
        id=payment_id,
        contract_id=contract_id,
        amount=Decimal(amount),
        status=status,
        created_at=created_at or datetime.now(UTC),
        method=method,
        paid_at=paid_at,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def catalog() -> OperationCatalog:
    """Fresh catalog built from the static definitions."""
    return build_catalog()
