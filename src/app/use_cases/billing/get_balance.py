"""Get Balance Use Case

Retrieves a tenant's current credit balance with its remaining percentage
of the initial grant.
"""

from libs.result import Result, Return
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.use_cases.billing.dtos import BalanceResponseDTO
from src.domain.billing_policy import BillingPolicy

ALERT_LEVELS = ("low", "warning", "critical")


def remaining_pct(balance_cents: int, initial_credit_cents: int) -> int:
    """Percent of the initial grant left, clamped to 0..100"""
    if initial_credit_cents <= 0:
        return 100 if balance_cents > 0 else 0
    pct = round(balance_cents * 100 / initial_credit_cents)
    return max(0, min(100, pct))


def alert_level(pct: int, thresholds) -> str:
    """
    Map a remaining percentage to a warning severity

    thresholds are descending (e.g. 50, 10, 5); at or below the n-th
    threshold the n-th level of ALERT_LEVELS applies.
    """
    level = "ok"
    for threshold, name in zip(thresholds, ALERT_LEVELS):
        if pct <= threshold:
            level = name
    return level


class GetBalance:
    """
    Get Balance Use Case

    Read-only. A tenant without an account reports balance 0.
    The balance is read from storage on every call.
    """

    def __init__(self, account_repo: CreditAccountRepository, policy: BillingPolicy):
        self.account_repo = account_repo
        self.policy = policy

    async def execute(self, tenant_id: str) -> Result[BalanceResponseDTO]:
        account = await self.account_repo.get_by_tenant_id(tenant_id)
        balance_cents = account.balance_cents if account else 0

        pct = remaining_pct(balance_cents, self.policy.initial_credit_cents)

        return Return.ok(
            BalanceResponseDTO(
                tenant_id=tenant_id,
                balance_cents=balance_cents,
                initial_credit_cents=self.policy.initial_credit_cents,
                remaining_pct=pct,
                alert_level=alert_level(pct, self.policy.alert_thresholds),
            )
        )
