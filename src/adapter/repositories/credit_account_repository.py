"""SQLAlchemy implementation of CreditAccountRepository

Balance changes are a single relative UPDATE ... RETURNING, so concurrent
adjustments to one tenant serialize on the row without application locks.
"""

from typing import Optional
from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.domain.base import utcnow
from src.domain.credit_account import CreditAccount


class SqlAlchemyCreditAccountRepository(CreditAccountRepository):
    """
    SQLAlchemy implementation of CreditAccountRepository

    Features:
    - INSERT ... ON CONFLICT DO NOTHING for lazy account creation
    - Relative balance update with RETURNING
    - PostgreSQL and SQLite dialects
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant_id(self, tenant_id: str) -> Optional[CreditAccount]:
        stmt = (
            select(CreditAccount)
            .where(CreditAccount.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure(self, tenant_id: str, seed_cents: int = 0) -> bool:
        """
        Create the account row if missing

        Args:
            tenant_id: Tenant identifier
            seed_cents: Balance for a newly created row

        Returns:
            True if the row was inserted
        """
        stmt = (
            self._insert()
            .values(
                tenant_id=tenant_id,
                balance_cents=seed_cents,
                free_credit_used=False,
                updated_at=utcnow(),
            )
            .on_conflict_do_nothing(index_elements=["tenant_id"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def add_to_balance(self, tenant_id: str, delta_cents: int) -> int:
        """
        Apply balance_cents = balance_cents + delta_cents

        Returns:
            Balance after the update

        Raises:
            NoResultFound: If the account does not exist
        """
        stmt = (
            update(CreditAccount)
            .where(CreditAccount.tenant_id == tenant_id)
            .values(
                balance_cents=CreditAccount.balance_cents + delta_cents,
                updated_at=utcnow(),
            )
            .returning(CreditAccount.balance_cents)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    def _insert(self):
        if self.session.bind.dialect.name == "postgresql":
            return pg_insert(CreditAccount)
        return sqlite_insert(CreditAccount)
