"""AdminAdjustCredits Use Case

Privileged manual balance adjustment with mandatory admin attribution.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.tenant_repository import TenantRepository
from .adjust_credits import AdjustCredits
from .dtos import (
    AdjustCreditsCommandDTO,
    AdminAdjustCreditsCommandDTO,
    AdminAdjustCreditsResponseDTO,
)

logger = logging.getLogger(__name__)


class AdminAdjustCredits:
    """
    Use Case: Admin credit override

    Business Rules:
    1. An admin identity is required and recorded as initiated_by
    2. Tenant must exist
    3. Same validation and atomicity as AdjustCredits
    """

    def __init__(self, tenant_repo: TenantRepository, adjust_credits: AdjustCredits):
        self.tenant_repo = tenant_repo
        self.adjust_credits = adjust_credits

    async def execute(self, command: AdminAdjustCreditsCommandDTO) -> Result[AdminAdjustCreditsResponseDTO]:
        admin_id = (command.admin_id or "").strip()
        if not admin_id:
            return Return.err(Error(code="FORBIDDEN", message="Admin identity required"))

        tenant = await self.tenant_repo.get_by_id(command.tenant_id)
        if not tenant:
            return Return.err(
                Error(code="TENANT_NOT_FOUND", message="tenant not found", reason=command.tenant_id)
            )

        result = await self.adjust_credits.execute(
            AdjustCreditsCommandDTO(
                tenant_id=command.tenant_id,
                amount_cents=command.amount_cents,
                reason=command.reason,
                initiated_by=admin_id,
            )
        )
        if result.is_err():
            return Return.err(result.error)

        logger.info(
            f"[ADMIN AUDIT] admin={admin_id} action=admin.tenants.credits "
            f"tenant={command.tenant_id} amount={command.amount_cents} "
            f"reason={result.value.reason!r}"
        )

        return Return.ok(
            AdminAdjustCreditsResponseDTO(
                tenant_id=command.tenant_id,
                balance_cents=result.value.balance_cents,
            )
        )
