"""API resource tests."""

from datetime import UTC, datetime, timedelta

import pytest
from falcon.testing import ASGIConductor, TestClient

from motorent.domain.value_objects import EventStatus, PaymentStatus

from tests.api.conftest import CRON_SECRET, auth
from tests.conftest import make_payment


class TestHealth:
    def test_health_ok(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health")
        assert r.status_code == 200
        assert r.json["status"] == "ok"

    def test_ready_with_subscribers(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health/ready")
        assert r.status_code == 200


class TestOperations:
    def test_list_requires_identity(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/operations")
        assert r.status_code == 401
        assert r.json == {"error": "Unauthorized"}

    def test_invalid_token_is_unauthenticated(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/operations", headers=auth("tok-unknown"))
        assert r.status_code == 401

    def test_list_filtered_by_family(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/operations?family=payment", headers=auth("tok-admin"))
        assert r.status_code == 200
        keys = [o["key"] for o in r.json["items"]]
        assert "payment.approve" in keys
        assert all(k.startswith("payment.") for k in keys)

    def test_list_forbidden_for_operador(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/operations", headers=auth("tok-operador"))
        assert r.status_code == 403
        assert r.json == {"error": "Permission denied"}

    def test_register_custom_operation(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/operations",
            json={"key": "fleet.moto.paint", "description": "Pintar moto"},
            headers=auth("tok-admin"),
        )
        assert r.status_code == 201
        assert r.json["is_custom"] is True
        assert r.json["permission_type"] == "execute"

        r = client.simulate_post(
            "/v1/operations", json={"key": "fleet.moto.paint"}, headers=auth("tok-admin")
        )
        assert r.status_code == 400
        assert "fleet.moto.paint" in r.json["error"]

    def test_register_invalid_key(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/operations", json={"key": "Not A Key"}, headers=auth("tok-admin")
        )
        assert r.status_code == 400

    def test_register_missing_key(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/operations", json={}, headers=auth("tok-admin"))
        assert r.status_code == 400
        assert "key" in r.json["error"]

    def test_register_non_string_key(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/operations", json={"key": 123}, headers=auth("tok-admin"))
        assert r.status_code == 400
        assert "key" in r.json["error"]

    def test_register_list_body(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/operations", json=["payment.x"], headers=auth("tok-admin")
        )
        assert r.status_code == 400
        assert r.json == {"error": "Request body must be a JSON object"}


class TestPayments:
    def test_get_payment(self, client: TestClient, fake_uow) -> None:
        fake_uow.payments.add(make_payment("pago-1"))
        r = client.simulate_get("/v1/payments/pago-1", headers=auth("tok-operador"))
        assert r.status_code == 200
        assert r.json["status"] == "PENDIENTE"
        assert r.json["amount"] == "15000.00"
        assert "invoice" not in r.json

    def test_get_missing_payment(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/payments/pago-404", headers=auth("tok-admin"))
        assert r.status_code == 404
        assert "pago-404" in r.json["error"]

    def test_operador_cannot_approve(self, client: TestClient, fake_uow) -> None:
        fake_uow.payments.add(make_payment("pago-1"))
        r = client.simulate_post(
            "/v1/payments/pago-1/approve",
            json={"method": "EFECTIVO"},
            headers=auth("tok-operador"),
        )
        assert r.status_code == 403
        assert r.json == {"error": "Permission denied"}
        assert fake_uow.payments.stored("pago-1").status == PaymentStatus.PENDIENTE
        assert fake_uow.events.all() == []

    def test_reject_approved_payment_is_invalid(self, client: TestClient, fake_uow) -> None:
        fake_uow.payments.add(make_payment("pago-1", status=PaymentStatus.APROBADO, method="EFECTIVO"))
        r = client.simulate_post("/v1/payments/pago-1/reject", headers=auth("tok-admin"))
        assert r.status_code == 400
        assert "APROBADO" in r.json["error"]

    def test_approve_without_method(self, client: TestClient, fake_uow) -> None:
        fake_uow.payments.add(make_payment("pago-1"))
        r = client.simulate_post("/v1/payments/pago-1/approve", headers=auth("tok-admin"))
        assert r.status_code == 400

    @pytest.mark.asyncio
    async def test_approve_invoices_after_response(self, app, fake_uow, dispatcher) -> None:
        fake_uow.payments.add(make_payment("pago-123"))
        async with ASGIConductor(app) as conductor:
            r = await conductor.simulate_post(
                "/v1/payments/pago-123/approve",
                json={"method": "TRANSFERENCIA"},
                headers=auth("tok-admin"),
            )
        assert r.status_code == 200
        assert r.json["status"] == "APROBADO"

        await dispatcher.drain()
        assert len(fake_uow.invoices.all()) == 1
        [event] = fake_uow.events.all()
        assert event.status == EventStatus.COMPLETED
        assert event.acting_user_id == "u-admin"

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_change_response(
        self, app, fake_uow, dispatcher
    ) -> None:
        async def broken(event) -> None:
            raise RuntimeError("mail server down")

        dispatcher.subscribe("payment.approve", broken, priority=5, name="notify")
        fake_uow.payments.add(make_payment("pago-123"))

        async with ASGIConductor(app) as conductor:
            r = await conductor.simulate_post(
                "/v1/payments/pago-123/approve",
                json={"method": "EFECTIVO"},
                headers=auth("tok-admin"),
            )
        assert r.status_code == 200

        await dispatcher.drain()
        assert len(fake_uow.invoices.all()) == 1
        [event] = fake_uow.events.all()
        assert event.status == EventStatus.FAILED
        assert "mail server down" in event.error

    @pytest.mark.asyncio
    async def test_contador_refunds_with_approve_grant(self, app, fake_uow, dispatcher) -> None:
        fake_uow.payments.add(make_payment("pago-1", status=PaymentStatus.APROBADO, method="EFECTIVO"))
        async with ASGIConductor(app) as conductor:
            r = await conductor.simulate_post(
                "/v1/payments/pago-1/refund",
                json={"notes": "Devolución"},
                headers=auth("tok-contador"),
            )
        await dispatcher.drain()
        assert r.status_code == 200
        assert r.json["status"] == "REEMBOLSADO"
        assert r.json["notes"] == "Devolución"


class TestProfiles:
    def test_list_profiles(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/profiles", headers=auth("tok-admin"))
        assert r.status_code == 200
        names = [p["name"] for p in r.json["items"]]
        assert names == sorted(names)
        assert "Contador" in names

    def test_assign_and_revoke(self, client: TestClient, fake_uow) -> None:
        profile = fake_uow.profiles.add_profile("Mecánico")
        body = {"user_id": "u-new", "profile_id": str(profile.id)}

        r = client.simulate_post("/v1/profiles/assign", json=body, headers=auth("tok-admin"))
        assert r.status_code == 201
        assert r.json["assigned_by"] == "u-admin"

        r = client.simulate_delete("/v1/profiles/assign", json=body, headers=auth("tok-admin"))
        assert r.status_code == 204

        r = client.simulate_delete("/v1/profiles/assign", json=body, headers=auth("tok-admin"))
        assert r.status_code == 404

    def test_assign_requires_admin(self, client: TestClient, fake_uow) -> None:
        profile = fake_uow.profiles.add_profile("Mecánico")
        r = client.simulate_post(
            "/v1/profiles/assign",
            json={"user_id": "u-new", "profile_id": str(profile.id)},
            headers=auth("tok-contador"),
        )
        assert r.status_code == 403

    def test_assign_invalid_profile_id(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/profiles/assign",
            json={"user_id": "u-new", "profile_id": "not-a-uuid"},
            headers=auth("tok-admin"),
        )
        assert r.status_code == 400

    def test_assign_list_body(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/profiles/assign", json=[], headers=auth("tok-admin"))
        assert r.status_code == 400
        assert r.json == {"error": "Request body must be a JSON object"}

    def test_assign_non_string_user_id(self, client: TestClient, fake_uow) -> None:
        profile = fake_uow.profiles.add_profile("Mecánico")
        r = client.simulate_post(
            "/v1/profiles/assign",
            json={"user_id": 42, "profile_id": str(profile.id)},
            headers=auth("tok-admin"),
        )
        assert r.status_code == 400

    def test_own_effective_permissions(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/users/u-contador/permissions", headers=auth("tok-contador"))
        assert r.status_code == 200
        by_key = {p["operation_key"]: p for p in r.json["items"]}
        assert by_key["payment.refund"]["permission_types"] == ["approve", "view"]
        assert by_key["payment.refund"]["granted_by"] == ["Contador"]

    def test_other_users_permissions_forbidden(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/users/u-contador/permissions", headers=auth("tok-operador"))
        assert r.status_code == 403


class TestEvents:
    @pytest.mark.asyncio
    async def test_list_events(self, app, fake_uow, dispatcher) -> None:
        await dispatcher.emit("payment.create", "Pago", "pago-1", acting_user_id="u-admin")
        await dispatcher.drain()
        async with ASGIConductor(app) as conductor:
            r = await conductor.simulate_get(
                "/v1/events", params={"status": "completed"}, headers=auth("tok-admin")
            )
        assert r.status_code == 200
        [item] = r.json["items"]
        assert item["operation_key"] == "payment.create"
        assert item["status"] == "COMPLETED"

    def test_invalid_status_filter(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/events?status=bogus", headers=auth("tok-admin"))
        assert r.status_code == 400

    def test_handlers(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/events/handlers", headers=auth("tok-admin"))
        assert r.status_code == 200
        assert r.json["handler_count"] == 5
        assert "*" in r.json["patterns"]


class TestInvoiceSweepJob:
    def test_requires_cron_secret(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/jobs/invoice-payments").status_code == 401
        r = client.simulate_post("/v1/jobs/invoice-payments", headers=auth("wrong"))
        assert r.status_code == 401
        assert r.json == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_sweep_invoices_pending_payments(self, app, fake_uow, dispatcher) -> None:
        paid_at = datetime.now(UTC) - timedelta(hours=1)
        fake_uow.payments.add(
            make_payment("pago-1", status=PaymentStatus.APROBADO, method="EFECTIVO", paid_at=paid_at)
        )
        async with ASGIConductor(app) as conductor:
            r = await conductor.simulate_post(
                "/v1/jobs/invoice-payments", headers=auth(CRON_SECRET)
            )
        assert r.status_code == 200
        assert r.json == {"processed": 1, "errors": []}
        await dispatcher.drain()
        assert await fake_uow.invoices.get_by_payment_id("pago-1") is not None
