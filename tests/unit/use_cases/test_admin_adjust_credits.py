"""Unit tests for AdminAdjustCredits use case"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from libs.result import Error, Return
from src.app.use_cases.billing.admin_adjust_credits import AdminAdjustCredits
from src.app.use_cases.billing.dtos import AdjustCreditsResponseDTO, AdminAdjustCreditsCommandDTO
from src.domain.tenant import Tenant


@pytest.fixture
def mock_tenant_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=Tenant(id="tenant_1"))
    return repo


@pytest.fixture
def mock_adjust_credits():
    adjust = MagicMock()
    adjust.execute = AsyncMock(
        return_value=Return.ok(
            AdjustCreditsResponseDTO(
                transaction_id=1,
                tenant_id="tenant_1",
                amount_cents=-500,
                balance_cents=500,
                reason="Refund of duplicate purchase",
                initiated_by="admin_1",
                created_at=datetime(2024, 5, 1),
            )
        )
    )
    return adjust


@pytest.mark.asyncio
class TestAdminAdjustCredits:

    async def test_adjusts_with_admin_attribution(self, mock_tenant_repo, mock_adjust_credits):
        use_case = AdminAdjustCredits(mock_tenant_repo, mock_adjust_credits)

        result = await use_case.execute(
            AdminAdjustCreditsCommandDTO(
                tenant_id="tenant_1", amount_cents=-500, reason="Refund of duplicate purchase", admin_id="admin_1"
            )
        )

        assert result.is_ok()
        assert result.value.balance_cents == 500
        command = mock_adjust_credits.execute.await_args.args[0]
        assert command.initiated_by == "admin_1"
        assert command.amount_cents == -500

    async def test_requires_admin_identity(self, mock_tenant_repo, mock_adjust_credits):
        use_case = AdminAdjustCredits(mock_tenant_repo, mock_adjust_credits)

        result = await use_case.execute(
            AdminAdjustCreditsCommandDTO(tenant_id="tenant_1", amount_cents=100, reason="x", admin_id=" ")
        )

        assert result.is_err()
        assert result.error.code == "FORBIDDEN"
        mock_adjust_credits.execute.assert_not_awaited()

    async def test_unknown_tenant(self, mock_tenant_repo, mock_adjust_credits):
        mock_tenant_repo.get_by_id = AsyncMock(return_value=None)
        use_case = AdminAdjustCredits(mock_tenant_repo, mock_adjust_credits)

        result = await use_case.execute(
            AdminAdjustCreditsCommandDTO(tenant_id="ghost", amount_cents=100, reason="x", admin_id="admin_1")
        )

        assert result.is_err()
        assert result.error.code == "TENANT_NOT_FOUND"
        mock_adjust_credits.execute.assert_not_awaited()

    async def test_validation_error_passes_through(self, mock_tenant_repo, mock_adjust_credits):
        mock_adjust_credits.execute = AsyncMock(
            return_value=Return.err(Error(code="VALIDATION_ERROR", message="reason is required"))
        )
        use_case = AdminAdjustCredits(mock_tenant_repo, mock_adjust_credits)

        result = await use_case.execute(
            AdminAdjustCreditsCommandDTO(tenant_id="tenant_1", amount_cents=100, reason="", admin_id="admin_1")
        )

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
