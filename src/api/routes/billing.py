"""Billing API Routes

FastAPI routes for tenant-facing credit operations and gateway webhooks.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, status

from src.api.auth import SessionUser, get_tenant_user
from src.api.error import ClientError
from src.api.schemas.billing_request import CheckoutRequestSchema
from src.app.use_cases.billing import (
    GetBalance,
    GetBillingLedger,
    HandleCheckoutWebhook,
    StartCheckout,
)
from src.app.use_cases.billing.dtos import (
    BalanceResponseDTO,
    BillingLedgerResponseDTO,
    CheckoutResponseDTO,
    StartCheckoutCommandDTO,
    WebhookResultDTO,
)
from src.depends import (
    get_billing_ledger,
    get_get_balance,
    get_handle_checkout_webhook,
    get_start_checkout,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.get(
    "/ledger",
    response_model=BillingLedgerResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_ledger(
    user: SessionUser = Depends(get_tenant_user),
    use_case: GetBillingLedger = Depends(get_billing_ledger),
):
    """
    Billing history for the signed-in tenant.

    Returns daily token usage for the usage window, cost per model, user
    message counts per agent, and the reconstructed transaction history
    (most recent first) with the running balance after each event.

    **Example response:**
    ```json
    {
        "daily": [{"date": "2024-05-02", "inputTokens": 1200, "outputTokens": 300,
                   "totalTokens": 1500, "costCents": 120}],
        "byModel": [{"model": "gpt-4o", "totalTokens": 1500, "costCents": 120}],
        "byAgent": [{"agent": "Unassigned", "messageCount": 4}],
        "transactions": [
            {"date": "2024-05-02T10:00:00", "type": "usage", "amountCents": -120,
             "balanceAfterCents": 2380, "description": "Model usage"}
        ]
    }
    ```
    """
    result = await use_case.execute(user.tenant_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/balance",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_balance(
    user: SessionUser = Depends(get_tenant_user),
    use_case: GetBalance = Depends(get_get_balance),
):
    """
    Current balance and low-balance alert level for the signed-in tenant.
    """
    result = await use_case.execute(user.tenant_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/checkout",
    response_model=CheckoutResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Amount is not an offered credit package",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Invalid amount"
                    }
                }
            }
        },
        502: {"description": "Payment gateway failure"},
    }
)
async def start_checkout(
    request: CheckoutRequestSchema,
    user: SessionUser = Depends(get_tenant_user),
    use_case: StartCheckout = Depends(get_start_checkout),
):
    """
    Start a hosted checkout for a credit package.

    **Request body:**
    - `amount` (required): package in whole USD, one of 10, 25, 50, 100

    The gateway customer is created on first purchase using the session
    email. The returned `url` is where the browser should be redirected.
    """
    result = await use_case.execute(
        StartCheckoutCommandDTO(
            tenant_id=user.tenant_id,
            email=user.email,
            amount_usd=request.amount,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/webhook",
    response_model=WebhookResultDTO,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def checkout_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
    use_case: HandleCheckoutWebhook = Depends(get_handle_checkout_webhook),
):
    """
    Payment gateway webhook.

    Unauthenticated; the raw body is verified against the signature
    header. Completed checkouts credit the tenant named in the session
    metadata. Other event types are acknowledged without side effects.
    """
    payload = await request.body()
    result = await use_case.execute(payload, stripe_signature)

    if result.is_err():
        logger.warning(f"Webhook rejected: {result.error.code} {result.error.message}")
        raise ClientError(result.error)

    return result.value
