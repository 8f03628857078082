"""Credit Account Repository Interface

Defines the contract for credit account persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.credit_account import CreditAccount


class CreditAccountRepository(ABC):
    """
    Repository interface for CreditAccount persistence

    Balance changes are expressed as a single relative update
    (balance_cents = balance_cents + delta) so concurrent adjustments
    serialize in the database without read-modify-write.
    """

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: str) -> Optional[CreditAccount]:
        """
        Retrieve account by tenant ID

        Args:
            tenant_id: Tenant identifier

        Returns:
            CreditAccount if found, None otherwise
        """
        pass

    @abstractmethod
    async def ensure(self, tenant_id: str, seed_cents: int = 0) -> bool:
        """
        Create the account if missing; never overwrites an existing balance

        Args:
            tenant_id: Tenant identifier
            seed_cents: Initial balance used only when the row is created

        Returns:
            True if a row was created, False if it already existed
        """
        pass

    @abstractmethod
    async def add_to_balance(self, tenant_id: str, delta_cents: int) -> int:
        """
        Atomically add delta_cents to the stored balance

        Args:
            tenant_id: Tenant identifier (account must exist)
            delta_cents: Signed amount to add

        Returns:
            Balance after the update
        """
        pass
