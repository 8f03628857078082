"""Admin API Routes

Privileged credit overrides. Every call is attributed to the admin user.
"""

from fastapi import APIRouter, Depends, status

from src.api.auth import SessionUser, require_admin
from src.api.error import ClientError
from src.api.schemas.billing_request import AdminCreditAdjustmentSchema
from src.app.use_cases.billing import AdminAdjustCredits
from src.app.use_cases.billing.dtos import (
    AdminAdjustCreditsCommandDTO,
    AdminAdjustCreditsResponseDTO,
)
from src.depends import get_admin_adjust_credits

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.api_route(
    "/tenants/{tenant_id}/credits",
    methods=["POST", "PATCH"],
    response_model=AdminAdjustCreditsResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Zero or non-integer amount, or empty reason"},
        403: {"description": "Caller is not an admin"},
        404: {"description": "Unknown tenant"},
    }
)
async def adjust_tenant_credits(
    tenant_id: str,
    request: AdminCreditAdjustmentSchema,
    admin: SessionUser = Depends(require_admin),
    use_case: AdminAdjustCredits = Depends(get_admin_adjust_credits),
):
    """
    Add or remove credits for a tenant.

    **Request body:**
    - `amountCents` (or `amount`): signed, non-zero integer cents
    - `reason` (required): recorded on the transaction with the admin id

    **Example request:**
    ```json
    {"amountCents": -500, "reason": "Refund of duplicate purchase"}
    ```
    """
    result = await use_case.execute(
        AdminAdjustCreditsCommandDTO(
            tenant_id=tenant_id,
            amount_cents=request.resolved_amount_cents,
            reason=request.reason,
            admin_id=admin.id,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
