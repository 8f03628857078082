"""HandleCheckoutWebhook Use Case

Ingests payment gateway webhooks and credits completed checkouts.

Redelivery of the same event is NOT deduplicated: no processed-event id
is stored, so a retried checkout.session.completed credits again.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Callable, Dict, Optional
from libs.result import Result, Return, Error
from src.app.services.payment_gateway import PaymentGateway, WebhookVerificationError
from src.app.services.compute_resume_service import ComputeResumeService
from .adjust_credits import AdjustCredits
from .dtos import AdjustCreditsCommandDTO, WebhookResultDTO

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
PURCHASE_REASON = "purchase via {gateway} checkout"

TENANT_METADATA_KEYS = ("tenantId", "tenant_id")
CREDIT_AMOUNT_METADATA_KEYS = ("credit_amount", "credit_amount_usd", "amount")


def resolve_tenant_id(session: Dict[str, Any]) -> Optional[str]:
    metadata = session.get("metadata") or {}
    for key in TENANT_METADATA_KEYS:
        value = str(metadata.get(key) or "").strip()
        if value:
            return value
    reference = str(session.get("client_reference_id") or "").strip()
    return reference or None


def resolve_credit_cents(session: Dict[str, Any]) -> int:
    """
    Credit amount in cents for a completed checkout session

    Metadata amounts are USD; amount_total is the gateway-reported total
    in cents and is only used when no metadata amount is usable.
    """
    metadata = session.get("metadata") or {}
    for key in CREDIT_AMOUNT_METADATA_KEYS:
        raw = str(metadata.get(key) or "").strip()
        if not raw:
            continue
        try:
            parsed = Decimal(raw)
        except InvalidOperation:
            continue
        if parsed.is_finite() and parsed > 0:
            return int((parsed * 100).to_integral_value(rounding=ROUND_HALF_UP))

    try:
        amount_total = int(session.get("amount_total") or 0)
    except (TypeError, ValueError):
        return 0
    return amount_total if amount_total > 0 else 0


class HandleCheckoutWebhook:
    """
    Use Case: Credit tenants for completed checkouts

    Business Rules:
    1. Signature must verify, otherwise nothing is mutated
    2. Only checkout.session.completed credits; other events are acknowledged
    3. Missing tenant metadata or non-positive amount rejects the event
    4. Credit goes through AdjustCredits with a purchase reason
    5. Resume is requested after commit; its failure never affects the credit

    Flow:
    1. Verify payload
    2. Extract tenant and amount
    3. AdjustCredits(+amount)
    4. Schedule best-effort resume
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        adjust_credits: AdjustCredits,
        resume_service: Optional[ComputeResumeService] = None,
        schedule: Optional[Callable[..., None]] = None,
    ):
        """
        Args:
            gateway: Verifies webhook signatures
            adjust_credits: Balance mutation path
            resume_service: Optional compute resume client
            schedule: Runs resume outside the request (e.g. BackgroundTasks.add_task);
                      when None the resume call is awaited inline
        """
        self.gateway = gateway
        self.adjust_credits = adjust_credits
        self.resume_service = resume_service
        self.schedule = schedule

    async def execute(self, payload: bytes, signature: Optional[str]) -> Result[WebhookResultDTO]:
        if not signature:
            return Return.err(
                Error(code="INVALID_SIGNATURE", message="Missing webhook signature")
            )

        try:
            event = self.gateway.verify_webhook(payload, signature)
        except WebhookVerificationError as e:
            logger.warning(f"Webhook verification failed: {e}")
            return Return.err(
                Error(code="INVALID_SIGNATURE", message="Invalid signature", reason=str(e))
            )

        event_type = str(event.get("type") or "")
        if event_type != CHECKOUT_COMPLETED:
            return Return.ok(WebhookResultDTO(event_type=event_type))

        session = (event.get("data") or {}).get("object") or {}

        tenant_id = resolve_tenant_id(session)
        if not tenant_id:
            return Return.err(
                Error(
                    code="INVALID_WEBHOOK",
                    message="Missing tenant id in checkout metadata",
                    reason=f"event={event.get('id')}",
                )
            )

        credited_cents = resolve_credit_cents(session)
        if credited_cents <= 0:
            return Return.err(
                Error(
                    code="INVALID_WEBHOOK",
                    message="Invalid credit amount from checkout session",
                    reason=f"event={event.get('id')}",
                )
            )

        session_id = session.get("id")
        result = await self.adjust_credits.execute(
            AdjustCreditsCommandDTO(
                tenant_id=tenant_id,
                amount_cents=credited_cents,
                reason=PURCHASE_REASON.format(gateway=self.gateway.name),
                reference_id=session_id,
            )
        )
        if result.is_err():
            return Return.err(result.error)

        logger.info(
            f"Credited {credited_cents} cents to tenant {tenant_id} "
            f"for checkout session {session_id}"
        )

        await self._request_resume(tenant_id)

        return Return.ok(
            WebhookResultDTO(
                event_type=event_type,
                tenant_id=tenant_id,
                credited_cents=credited_cents,
                balance_cents=result.value.balance_cents,
                checkout_session=session_id,
            )
        )

    async def _request_resume(self, tenant_id: str) -> None:
        if self.resume_service is None:
            return
        if self.schedule is not None:
            self.schedule(self._resume, tenant_id)
            return
        await self._resume(tenant_id)

    async def _resume(self, tenant_id: str) -> None:
        try:
            await self.resume_service.resume_tenant(tenant_id)
        except Exception as e:
            logger.error(f"Resume request for tenant {tenant_id} failed: {e}")
