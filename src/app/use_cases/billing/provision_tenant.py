"""ProvisionTenant Use Case

Signup provisioning: creates the tenant and seeds its credit account with
the initial free grant. The grant is recorded as a transaction so the
billing ledger replays from an opening balance of zero.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.billing_policy import BillingPolicy
from src.domain.credit_transaction import CreditTransaction
from src.domain.tenant import Tenant
from .dtos import ProvisionTenantCommandDTO, TenantProvisionedDTO

logger = logging.getLogger(__name__)

INITIAL_GRANT_REASON = "Initial free credit grant"


class ProvisionTenant:
    """
    Use Case: Provision a tenant at signup

    Business Rules:
    1. Tenant row is created once; re-running is a no-op
    2. Seed grant applies only when the account row is newly created
    3. Seed grant and its transaction commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tenant_repo: TenantRepository,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
        policy: BillingPolicy,
    ):
        self.uow = uow
        self.tenant_repo = tenant_repo
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.policy = policy

    async def execute(self, command: ProvisionTenantCommandDTO) -> Result[TenantProvisionedDTO]:
        seed_cents = self.policy.initial_credit_cents

        try:
            tenant_created = False
            if await self.tenant_repo.get_by_id(command.tenant_id) is None:
                await self.tenant_repo.create(
                    Tenant(id=command.tenant_id, billing_email=command.billing_email)
                )
                tenant_created = True

            account_created = await self.account_repo.ensure(command.tenant_id, seed_cents=seed_cents)
            if account_created and seed_cents:
                await self.transaction_repo.create(
                    CreditTransaction(
                        tenant_id=command.tenant_id,
                        amount_cents=seed_cents,
                        reason=INITIAL_GRANT_REASON,
                    )
                )

            await self.uow.commit()

            account = await self.account_repo.get_by_tenant_id(command.tenant_id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PROVISION_TENANT_FAILED",
                    message="Failed to provision tenant",
                    reason=str(e),
                )
            )

        if account_created:
            logger.info(f"Provisioned tenant {command.tenant_id} with {seed_cents} cents")

        return Return.ok(
            TenantProvisionedDTO(
                tenant_id=command.tenant_id,
                tenant_created=tenant_created,
                account_created=account_created,
                balance_cents=account.balance_cents if account else 0,
            )
        )
