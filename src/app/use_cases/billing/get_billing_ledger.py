"""GetBillingLedger Use Case

Builds the tenant billing view: daily usage, per-model totals, per-agent
message counts, and a running-balance transaction history replayed from
the current balance.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.usage_debit_repository import UsageDebitRepository
from src.app.repositories.conversation_repository import ConversationRepository
from src.domain.base import utcnow
from src.domain.billing_policy import BillingPolicy
from src.domain.billing_event import (
    credit_event,
    usage_event,
    reconstruct_history,
    most_recent_first,
)
from .dtos import (
    AgentUsageDTO,
    BillingLedgerResponseDTO,
    DailyUsageDTO,
    LedgerTransactionDTO,
    ModelUsageDTO,
)

logger = logging.getLogger(__name__)


class GetBillingLedger:
    """
    Use Case: Billing ledger read

    Business Rules:
    1. Never mutates the balance
    2. Credit transactions classify as grant or purchase by reason keywords
    3. Usage debits appear as negative "Model usage" entries
    4. opening = current balance - sum(all event amounts); replay forward
    5. Output is most-recent-first, capped by policy.history_limit

    The balance read and the history reads are not one snapshot. An
    adjustment landing between them skews the opening balance for that
    read only, so this view must never gate a balance mutation.
    """

    def __init__(
        self,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
        usage_repo: UsageDebitRepository,
        conversation_repo: ConversationRepository,
        policy: BillingPolicy,
    ):
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.usage_repo = usage_repo
        self.conversation_repo = conversation_repo
        self.policy = policy

    async def execute(
        self, tenant_id: str, now: Optional[datetime] = None
    ) -> Result[BillingLedgerResponseDTO]:
        """
        Execute ledger read

        Args:
            tenant_id: Tenant identifier
            now: Reference time for the daily usage window (defaults to now, UTC)

        Returns:
            Result[BillingLedgerResponseDTO]
        """
        now = now or utcnow()

        try:
            account = await self.account_repo.get_by_tenant_id(tenant_id)
            current_balance = account.balance_cents if account else 0

            transactions = await self.transaction_repo.list_by_tenant_id(tenant_id)
            debits = await self.usage_repo.list_by_tenant_id(tenant_id)

            events = [
                credit_event(txn.created_at, txn.amount_cents, txn.reason, self.policy.purchase_keywords)
                for txn in transactions
            ]
            events.extend(usage_event(debit.created_at, debit.cost_cents) for debit in debits)

            history = most_recent_first(
                reconstruct_history(current_balance, events), self.policy.history_limit
            )

            daily = await self.usage_repo.daily_totals(
                tenant_id, since=now - timedelta(days=self.policy.usage_window_days)
            )
            by_model = await self.usage_repo.totals_by_model(tenant_id)
            by_agent = await self.conversation_repo.user_message_counts_by_agent(
                tenant_id, limit=self.policy.agent_stats_limit
            )

        except Exception as e:
            logger.error(f"Billing ledger read failed for tenant {tenant_id}: {e}")
            return Return.err(
                Error(
                    code="LEDGER_READ_FAILED",
                    message="Failed to load billing ledger",
                    reason=str(e),
                )
            )

        return Return.ok(
            BillingLedgerResponseDTO(
                daily=[
                    DailyUsageDTO(
                        date=row.date,
                        input_tokens=row.input_tokens,
                        output_tokens=row.output_tokens,
                        total_tokens=row.input_tokens + row.output_tokens,
                        cost_cents=row.cost_cents,
                    )
                    for row in daily
                ],
                by_model=[
                    ModelUsageDTO(model=row.model, total_tokens=row.total_tokens, cost_cents=row.cost_cents)
                    for row in by_model
                ],
                by_agent=[
                    AgentUsageDTO(agent=row.agent, message_count=row.message_count)
                    for row in by_agent
                ],
                transactions=[
                    LedgerTransactionDTO(
                        date=entry.date,
                        type=entry.type.value,
                        amount_cents=entry.amount_cents,
                        balance_after_cents=entry.balance_after_cents,
                        description=entry.description,
                    )
                    for entry in history
                ],
            )
        )
