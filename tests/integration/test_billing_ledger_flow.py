"""Integration tests for the billing ledger read

Tests cover:
- Signup grant, purchase and metered usage replayed to the stored balance
- Daily usage window, per-model ordering and per-agent grouping
"""

import pytest
from datetime import datetime, timedelta, timezone

from src.adapter.repositories import (
    SqlAlchemyConversationRepository,
    SqlAlchemyCreditAccountRepository,
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyTenantRepository,
    SqlAlchemyUsageDebitRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing import AdjustCredits, GetBillingLedger, ProvisionTenant
from src.app.use_cases.billing.dtos import AdjustCreditsCommandDTO, ProvisionTenantCommandDTO
from src.domain.billing_policy import BillingPolicy
from src.domain.conversation_message import ConversationMessage
from src.domain.usage_debit import UsageDebit

TENANT_ID = "tenant_ledger"


def build_ledger(session, policy=None) -> GetBillingLedger:
    return GetBillingLedger(
        SqlAlchemyCreditAccountRepository(session),
        SqlAlchemyCreditTransactionRepository(session),
        SqlAlchemyUsageDebitRepository(session),
        SqlAlchemyConversationRepository(session),
        policy or BillingPolicy(),
    )


async def provision(session, tenant_id=TENANT_ID):
    use_case = ProvisionTenant(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTenantRepository(session),
        SqlAlchemyCreditAccountRepository(session),
        SqlAlchemyCreditTransactionRepository(session),
        BillingPolicy(),
    )
    return await use_case.execute(ProvisionTenantCommandDTO(tenant_id=tenant_id, billing_email="o@example.com"))


async def meter_usage(session, tenant_id, cost_cents, created_at, model="gpt-4o", input_tokens=1000, output_tokens=200):
    """Write a usage debit and apply it to the balance the way the metering service does"""
    session.add(
        UsageDebit(
            tenant_id=tenant_id,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_cents=cost_cents,
            margin_cents=cost_cents // 5,
            created_at=created_at,
        )
    )
    accounts = SqlAlchemyCreditAccountRepository(session)
    await accounts.ensure(tenant_id)
    await accounts.add_to_balance(tenant_id, -cost_cents)
    await session.commit()


class TestBillingLedgerFlow:

    @pytest.mark.asyncio
    async def test_grant_purchase_usage_scenario(self, db_session):
        """
        Given: Signup grant 1000, +2500 purchase, 120 metered usage
        When: The ledger is read
        Then: Balances 1000, 3500, 3380 replayed from an opening balance of 0
        """
        provisioned = await provision(db_session)
        assert provisioned.value.balance_cents == 1000

        adjust = AdjustCredits(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyCreditAccountRepository(db_session),
            SqlAlchemyCreditTransactionRepository(db_session),
        )
        purchase = await adjust.execute(
            AdjustCreditsCommandDTO(
                tenant_id=TENANT_ID,
                amount_cents=2500,
                reason="purchase via stripe checkout",
                reference_id="cs_test_1",
            )
        )
        assert purchase.value.balance_cents == 3500

        await meter_usage(db_session, TENANT_ID, 120, datetime.now(timezone.utc) + timedelta(seconds=1))

        result = await build_ledger(db_session).execute(TENANT_ID)

        assert result.is_ok()
        transactions = result.value.transactions
        assert [t.type for t in transactions] == ["usage", "purchase", "grant"]
        assert [t.amount_cents for t in transactions] == [-120, 2500, 1000]
        assert [t.balance_after_cents for t in transactions] == [3380, 3500, 1000]
        assert transactions[-1].balance_after_cents - transactions[-1].amount_cents == 0

    @pytest.mark.asyncio
    async def test_latest_entry_always_matches_stored_balance(self, db_session):
        await provision(db_session)
        adjust = AdjustCredits(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyCreditAccountRepository(db_session),
            SqlAlchemyCreditTransactionRepository(db_session),
        )
        start = datetime.now(timezone.utc)
        for i, amount in enumerate([500, -200, 1000]):
            await adjust.execute(AdjustCreditsCommandDTO(tenant_id=TENANT_ID, amount_cents=amount, reason="Manual admin adjustment"))
            await meter_usage(db_session, TENANT_ID, 30 + i, start + timedelta(minutes=i + 1))

        account = await SqlAlchemyCreditAccountRepository(db_session).get_by_tenant_id(TENANT_ID)
        result = await build_ledger(db_session).execute(TENANT_ID)

        assert result.value.transactions[0].balance_after_cents == account.balance_cents

    @pytest.mark.asyncio
    async def test_usage_aggregates(self, db_session):
        await provision(db_session)
        now = datetime.now(timezone.utc)
        await meter_usage(db_session, TENANT_ID, 50, now - timedelta(days=40), model="old-model")
        await meter_usage(db_session, TENANT_ID, 300, now - timedelta(days=2), model="gpt-4o")
        await meter_usage(db_session, TENANT_ID, 100, now - timedelta(days=1), model="claude")
        await meter_usage(db_session, TENANT_ID, 25, now - timedelta(days=1), model="claude", input_tokens=10, output_tokens=5)
        await meter_usage(db_session, "other_tenant", 999, now, model="gpt-4o")

        db_session.add_all([
            ConversationMessage(tenant_id=TENANT_ID, conversation_id="c1", role="user", agent_id=None),
            ConversationMessage(tenant_id=TENANT_ID, conversation_id="c1", role="user", agent_id=""),
            ConversationMessage(tenant_id=TENANT_ID, conversation_id="c1", role="assistant", agent_id=None),
            ConversationMessage(tenant_id=TENANT_ID, conversation_id="c2", role="user", agent_id="agent_a"),
            ConversationMessage(tenant_id="other_tenant", conversation_id="c3", role="user", agent_id="agent_a"),
        ])
        await db_session.commit()

        result = await build_ledger(db_session).execute(TENANT_ID, now=now)
        ledger = result.value

        assert len(ledger.daily) == 2
        assert [d.cost_cents for d in ledger.daily] == [300, 125]
        assert ledger.daily[1].total_tokens == 1200 + 15

        assert [m.model for m in ledger.by_model] == ["gpt-4o", "claude", "old-model"]
        assert [m.cost_cents for m in ledger.by_model] == [300, 125, 50]

        assert [(a.agent, a.message_count) for a in ledger.by_agent] == [("Unassigned", 2), ("agent_a", 1)]

        # Usage outside the daily window still appears in history
        assert sum(1 for t in ledger.transactions if t.type == "usage") == 4
