"""StartCheckout Use Case

Creates a hosted checkout session for a fixed credit package.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_gateway import PaymentGateway, PaymentGatewayError
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.billing_policy import BillingPolicy
from .dtos import StartCheckoutCommandDTO, CheckoutResponseDTO

logger = logging.getLogger(__name__)


class StartCheckout:
    """
    Use Case: Start a credit purchase checkout

    Business Rules:
    1. amount_usd must be one of policy.allowed_checkout_amounts
    2. Gateway customer is created on first checkout and persisted on the tenant
    3. Session metadata carries tenantId and amount for the completion webhook

    Flow:
    1. Validate denomination
    2. Load tenant
    3. Create and persist gateway customer if missing
    4. Create checkout session, return its URL
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tenant_repo: TenantRepository,
        gateway: PaymentGateway,
        policy: BillingPolicy,
        app_base_url: str,
    ):
        self.uow = uow
        self.tenant_repo = tenant_repo
        self.gateway = gateway
        self.policy = policy
        self.app_base_url = app_base_url.rstrip("/")

    async def execute(self, command: StartCheckoutCommandDTO) -> Result[CheckoutResponseDTO]:
        if command.amount_usd not in self.policy.allowed_checkout_amounts:
            return Return.err(
                Error(
                    code="INVALID_AMOUNT",
                    message="Invalid amount",
                    reason=f"allowed amounts: {sorted(self.policy.allowed_checkout_amounts)}",
                )
            )

        tenant = await self.tenant_repo.get_by_id(command.tenant_id)
        if not tenant:
            # Sessions only exist for provisioned tenants
            logger.error(f"Checkout for unprovisioned tenant {command.tenant_id}")
            return Return.err(
                Error(
                    code="CHECKOUT_FAILED",
                    message="Failed to create checkout session",
                    reason=f"tenant {command.tenant_id} not found",
                )
            )

        try:
            customer_id = tenant.gateway_customer_id
            if not customer_id:
                email = command.email or tenant.billing_email
                if not email:
                    return Return.err(
                        Error(
                            code="VALIDATION_ERROR",
                            message="User email is required for billing",
                        )
                    )

                customer_id = await self.gateway.create_customer(command.tenant_id, email)
                await self.tenant_repo.set_gateway_customer_id(command.tenant_id, customer_id)
                await self.uow.commit()
                logger.info(f"Created {self.gateway.name} customer {customer_id} for tenant {command.tenant_id}")

            session = await self.gateway.create_checkout_session(
                customer_id=customer_id,
                tenant_id=command.tenant_id,
                amount_usd=command.amount_usd,
                success_url=f"{self.app_base_url}/dashboard/billing?status=success",
                cancel_url=f"{self.app_base_url}/dashboard/billing?status=cancelled",
            )

        except PaymentGatewayError as e:
            await self.uow.rollback()
            logger.error(f"Checkout failed for tenant {command.tenant_id}: {e}")
            return Return.err(
                Error(
                    code="UPSTREAM_ERROR",
                    message="Failed to create checkout session",
                    reason=str(e),
                )
            )

        if not session.url:
            return Return.err(
                Error(
                    code="UPSTREAM_ERROR",
                    message="Failed to create checkout session",
                    reason=f"session {session.session_id} has no url",
                )
            )

        return Return.ok(CheckoutResponseDTO(url=session.url))
