"""Credit Transaction Repository Interface

Defines the contract for credit transaction persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.credit_transaction import CreditTransaction


class CreditTransactionRepository(ABC):
    """
    Repository interface for CreditTransaction persistence

    Transactions are immutable and append-only for audit trail.
    """

    @abstractmethod
    async def create(self, transaction: CreditTransaction) -> CreditTransaction:
        """
        Append a new credit transaction

        Args:
            transaction: CreditTransaction entity to persist

        Returns:
            Created CreditTransaction with generated ID
        """
        pass

    @abstractmethod
    async def list_by_tenant_id(self, tenant_id: str) -> List[CreditTransaction]:
        """
        All transactions for a tenant, oldest first

        Args:
            tenant_id: Tenant identifier

        Returns:
            List of CreditTransaction ordered by created_at ASC
        """
        pass
