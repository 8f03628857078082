"""Integration tests for Billing API endpoints"""

import json
import pytest
from httpx import AsyncClient

from src.adapter.repositories import (
    SqlAlchemyCreditAccountRepository,
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyTenantRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing import ProvisionTenant
from src.app.use_cases.billing.dtos import ProvisionTenantCommandDTO
from src.domain.billing_policy import BillingPolicy
from tests.fixtures.auth import auth_headers
from tests.fixtures.stripe_events import checkout_completed, sign_payload, signed_event

TENANT_ID = "tenant_api"


async def provision(session_factory, tenant_id=TENANT_ID):
    async with session_factory() as session:
        result = await ProvisionTenant(
            SqlAlchemyUnitOfWork(session),
            SqlAlchemyTenantRepository(session),
            SqlAlchemyCreditAccountRepository(session),
            SqlAlchemyCreditTransactionRepository(session),
            BillingPolicy(),
        ).execute(ProvisionTenantCommandDTO(tenant_id=tenant_id))
        assert result.is_ok()


async def stored_balance(session_factory, tenant_id=TENANT_ID) -> int:
    async with session_factory() as session:
        account = await SqlAlchemyCreditAccountRepository(session).get_by_tenant_id(tenant_id)
        return account.balance_cents if account else 0


async def stored_transactions(session_factory, tenant_id=TENANT_ID):
    async with session_factory() as session:
        return await SqlAlchemyCreditTransactionRepository(session).list_by_tenant_id(tenant_id)


class TestBalanceAPI:

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient):
        response = await client.get("/api/billing/balance")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert response.headers["X-Error-Code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_rejects_forged_token(self, client: AsyncClient):
        response = await client.get(
            "/api/billing/balance", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_balance_after_signup(self, client: AsyncClient, session_factory):
        await provision(session_factory)

        response = await client.get("/api/billing/balance", headers=auth_headers())

        assert response.status_code == 200
        data = response.json()
        assert data["balanceCents"] == 1000
        assert data["initialCreditCents"] == 1000
        assert data["remainingPct"] == 100
        assert data["alertLevel"] == "ok"


class TestLedgerAPI:

    @pytest.mark.asyncio
    async def test_ledger_shape(self, client: AsyncClient, session_factory):
        await provision(session_factory)

        response = await client.get("/api/billing/ledger", headers=auth_headers())

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"daily", "byModel", "byAgent", "transactions"}
        assert data["transactions"] == [
            {
                "date": data["transactions"][0]["date"],
                "type": "grant",
                "amountCents": 1000,
                "balanceAfterCents": 1000,
                "description": "Initial free credit grant",
            }
        ]


class TestCheckoutAPI:

    @pytest.mark.asyncio
    async def test_returns_checkout_url(self, client: AsyncClient, session_factory, gateway):
        await provision(session_factory)

        response = await client.post("/api/billing/checkout", json={"amount": 25}, headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"url": "https://checkout.stripe.test/cs_1"}
        assert gateway.customers == [(TENANT_ID, "owner@example.com")]
        assert gateway.sessions[0]["amount_usd"] == 25

        # Customer id is persisted and reused
        await client.post("/api/billing/checkout", json={"amount": 10}, headers=auth_headers())
        assert len(gateway.customers) == 1
        assert gateway.sessions[1]["customer_id"] == f"cus_{TENANT_ID}"

    @pytest.mark.asyncio
    async def test_rejects_unoffered_amount(self, client: AsyncClient, session_factory, gateway):
        await provision(session_factory)

        response = await client.post("/api/billing/checkout", json={"amount": 13}, headers=auth_headers())

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid amount"}
        assert response.headers["X-Error-Code"] == "INVALID_AMOUNT"
        assert gateway.sessions == []

    @pytest.mark.asyncio
    async def test_rejects_malformed_body(self, client: AsyncClient, session_factory):
        await provision(session_factory)

        response = await client.post("/api/billing/checkout", json={"amount": "lots"}, headers=auth_headers())

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unknown_tenant(self, client: AsyncClient, gateway):
        response = await client.post(
            "/api/billing/checkout", json={"amount": 25}, headers=auth_headers(tenant_id="ghost")
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create checkout session"}
        assert gateway.customers == []

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient):
        response = await client.post("/api/billing/checkout", json={"amount": 25})

        assert response.status_code == 401


class TestWebhookAPI:

    @pytest.mark.asyncio
    async def test_completed_checkout_credits_tenant(
        self, client: AsyncClient, session_factory, resume_service
    ):
        await provision(session_factory)
        payload, signature = signed_event(checkout_completed(TENANT_ID, amount_usd="25"))

        response = await client.post(
            "/api/billing/webhook", content=payload, headers={"Stripe-Signature": signature}
        )

        assert response.status_code == 200
        assert response.json()["received"] is True
        assert await stored_balance(session_factory) == 3500
        assert resume_service.calls == [TENANT_ID]

        purchase = (await stored_transactions(session_factory))[-1]
        assert purchase.amount_cents == 2500
        assert purchase.reason == "purchase via stripe checkout"
        assert purchase.reference_id == "cs_test_123"

    @pytest.mark.asyncio
    async def test_redelivery_credits_again(self, client: AsyncClient, session_factory):
        """Redelivered events are not deduplicated; each delivery credits"""
        await provision(session_factory)
        payload, signature = signed_event(checkout_completed(TENANT_ID, amount_usd="10"))

        for _ in range(2):
            response = await client.post(
                "/api/billing/webhook", content=payload, headers={"Stripe-Signature": signature}
            )
            assert response.status_code == 200

        assert await stored_balance(session_factory) == 1000 + 2 * 1000
        purchases = [t for t in await stored_transactions(session_factory) if t.reference_id == "cs_test_123"]
        assert len(purchases) == 2

    @pytest.mark.asyncio
    async def test_resume_failure_keeps_credit(
        self, client: AsyncClient, session_factory, resume_service
    ):
        await provision(session_factory)
        resume_service.fail = True
        payload, signature = signed_event(checkout_completed(TENANT_ID, amount_usd="50"))

        response = await client.post(
            "/api/billing/webhook", content=payload, headers={"Stripe-Signature": signature}
        )

        assert response.status_code == 200
        assert resume_service.calls == [TENANT_ID]
        assert await stored_balance(session_factory) == 6000

    @pytest.mark.asyncio
    async def test_bad_signature_changes_nothing(self, client: AsyncClient, session_factory, resume_service):
        await provision(session_factory)
        payload = json.dumps(checkout_completed(TENANT_ID)).encode("utf-8")

        response = await client.post(
            "/api/billing/webhook",
            content=payload,
            headers={"Stripe-Signature": sign_payload(payload, secret="whsec_wrong")},
        )

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "INVALID_SIGNATURE"
        assert await stored_balance(session_factory) == 1000
        assert resume_service.calls == []

    @pytest.mark.asyncio
    async def test_missing_signature(self, client: AsyncClient):
        response = await client.post("/api/billing/webhook", content=b"{}")

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "INVALID_SIGNATURE"

    @pytest.mark.asyncio
    async def test_missing_tenant_metadata(self, client: AsyncClient, session_factory):
        await provision(session_factory)
        payload, signature = signed_event(checkout_completed(None))

        response = await client.post(
            "/api/billing/webhook", content=payload, headers={"Stripe-Signature": signature}
        )

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "INVALID_WEBHOOK"
        assert await stored_balance(session_factory) == 1000

    @pytest.mark.asyncio
    async def test_other_events_are_acknowledged(self, client: AsyncClient):
        payload, signature = signed_event(
            {"id": "evt_other", "object": "event", "type": "invoice.paid", "data": {"object": {}}}
        )

        response = await client.post(
            "/api/billing/webhook", content=payload, headers={"Stripe-Signature": signature}
        )

        assert response.status_code == 200
        assert response.json() == {"received": True, "eventType": "invoice.paid"}
