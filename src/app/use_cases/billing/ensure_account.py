"""EnsureAccount Use Case

Idempotently creates a zero-balance credit account for a tenant.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from .dtos import AccountEnsuredDTO


class EnsureAccount:
    """
    Use Case: Ensure a credit account exists

    Never overwrites an existing balance (INSERT ... ON CONFLICT DO NOTHING).
    """

    def __init__(self, uow: UnitOfWork, account_repo: CreditAccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, tenant_id: str) -> Result[AccountEnsuredDTO]:
        try:
            created = await self.account_repo.ensure(tenant_id)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ENSURE_ACCOUNT_FAILED",
                    message="Failed to ensure credit account",
                    reason=str(e),
                )
            )

        return Return.ok(AccountEnsuredDTO(tenant_id=tenant_id, created=created))
