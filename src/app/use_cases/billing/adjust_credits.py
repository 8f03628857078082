"""AdjustCredits Use Case

The single mutation path for tenant balances. Ensures the account, applies
a relative balance update and appends the audit transaction in one unit of
work.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import CreditTransaction
from .dtos import AdjustCreditsCommandDTO, AdjustCreditsResponseDTO

logger = logging.getLogger(__name__)


class AdjustCredits:
    """
    Use Case: Adjust a tenant balance by a signed amount

    Business Rules:
    1. amount_cents must be a non-zero integer
    2. reason must be non-empty after trimming
    3. Account is created lazily with balance 0
    4. Balance update is relative (balance = balance + delta); the stored
       balance is never read back and rewritten by this process
    5. Balance update and transaction row commit or roll back together

    Flow:
    1. Validate command
    2. Ensure account row exists
    3. Apply relative update, capture new balance
    4. Append transaction row
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo

    async def execute(self, command: AdjustCreditsCommandDTO) -> Result[AdjustCreditsResponseDTO]:
        """
        Execute balance adjustment

        Args:
            command: AdjustCreditsCommandDTO with tenant_id, amount_cents, reason

        Returns:
            Result[AdjustCreditsResponseDTO]: New balance and transaction, or error
        """
        validation_error = self._validate(command)
        if validation_error:
            return Return.err(validation_error)

        reason = command.reason.strip()

        try:
            await self.account_repo.ensure(command.tenant_id)

            balance_cents = await self.account_repo.add_to_balance(
                command.tenant_id, command.amount_cents
            )

            transaction = await self.transaction_repo.create(
                CreditTransaction(
                    tenant_id=command.tenant_id,
                    amount_cents=command.amount_cents,
                    reason=reason,
                    initiated_by=command.initiated_by,
                    reference_id=command.reference_id,
                )
            )

            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Credit adjustment failed for tenant {command.tenant_id}: {e}")
            return Return.err(
                Error(
                    code="ADJUST_CREDIT_FAILED",
                    message="Failed to adjust credits",
                    reason=str(e),
                )
            )

        logger.info(
            f"Adjusted credits for tenant {command.tenant_id}: "
            f"amount={command.amount_cents}, balance={balance_cents}, "
            f"initiated_by={command.initiated_by}"
        )

        return Return.ok(
            AdjustCreditsResponseDTO(
                transaction_id=transaction.id,
                tenant_id=command.tenant_id,
                amount_cents=command.amount_cents,
                balance_cents=balance_cents,
                reason=reason,
                initiated_by=command.initiated_by,
                created_at=transaction.created_at,
            )
        )

    @staticmethod
    def _validate(command: AdjustCreditsCommandDTO):
        amount = command.amount_cents
        if isinstance(amount, bool) or not isinstance(amount, int) or amount == 0:
            return Error(
                code="VALIDATION_ERROR",
                message="amountCents must be a non-zero integer",
                reason=f"amount_cents={amount!r}",
            )
        if not command.tenant_id or not command.tenant_id.strip():
            return Error(code="VALIDATION_ERROR", message="tenant id is required")
        if not command.reason or not command.reason.strip():
            return Error(code="VALIDATION_ERROR", message="reason is required")
        return None
