"""Usage Debit Repository Interface

Read-only access to the usage debit log owned by the metering service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List
from src.domain.usage_debit import UsageDebit


@dataclass(frozen=True)
class DailyUsage:
    date: str
    input_tokens: int
    output_tokens: int
    cost_cents: int


@dataclass(frozen=True)
class ModelUsage:
    model: str
    total_tokens: int
    cost_cents: int


class UsageDebitRepository(ABC):
    """
    Repository interface for UsageDebit reads

    Rows are never written or mutated by this service.
    """

    @abstractmethod
    async def list_by_tenant_id(self, tenant_id: str) -> List[UsageDebit]:
        """All usage debits for a tenant, oldest first"""
        pass

    @abstractmethod
    async def daily_totals(self, tenant_id: str, since: datetime) -> List[DailyUsage]:
        """
        Per-day token and cost totals for rows created after `since`

        Returns:
            List of DailyUsage ordered by date ASC
        """
        pass

    @abstractmethod
    async def totals_by_model(self, tenant_id: str) -> List[ModelUsage]:
        """
        Lifetime token and cost totals per model

        Returns:
            List of ModelUsage ordered by cost DESC
        """
        pass
