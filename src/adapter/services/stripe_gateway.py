"""Stripe implementation of PaymentGateway

Hosted checkout for credit packages and webhook signature verification.
The stripe client is synchronous, so API calls run in a worker thread.
"""

import asyncio
import json
import logging
from typing import Any, Dict
import stripe
from src.app.services.payment_gateway import (
    CheckoutSessionInfo,
    PaymentGateway,
    PaymentGatewayError,
    WebhookVerificationError,
)

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Credits (${amount})"


class StripePaymentGateway(PaymentGateway):
    """
    Stripe payment gateway

    Checkout sessions are one-time payments with an inline price of
    amount_usd * 100 cents and {tenantId, amount} metadata.
    """

    name = "stripe"

    def __init__(self, secret_key: str, webhook_secret: str, currency: str = "usd"):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.currency = currency

    async def create_customer(self, tenant_id: str, email: str) -> str:
        self._require_secret_key()
        try:
            customer = await asyncio.to_thread(
                stripe.Customer.create,
                api_key=self.secret_key,
                email=email,
                metadata={"tenantId": tenant_id},
            )
        except stripe.StripeError as e:
            raise PaymentGatewayError(f"create customer: {e}") from e
        return str(customer.id)

    async def create_checkout_session(
        self,
        customer_id: str,
        tenant_id: str,
        amount_usd: int,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionInfo:
        self._require_secret_key()
        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self.secret_key,
                mode="payment",
                customer=customer_id,
                client_reference_id=tenant_id,
                line_items=[
                    {
                        "quantity": 1,
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": amount_usd * 100,
                            "product_data": {"name": PRODUCT_NAME.format(amount=amount_usd)},
                        },
                    }
                ],
                metadata={"tenantId": tenant_id, "amount": str(amount_usd)},
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            raise PaymentGatewayError(f"create checkout session: {e}") from e
        return CheckoutSessionInfo(session_id=str(session.id), url=session.url)

    def verify_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Verify the Stripe-Signature header and decode the event

        Raises:
            WebhookVerificationError: Missing secret, bad signature or bad JSON
        """
        if not self.webhook_secret:
            raise WebhookVerificationError("missing STRIPE_WEBHOOK_SECRET")
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
            return json.loads(payload)
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(f"signature mismatch: {e}") from e
        except ValueError as e:
            raise WebhookVerificationError(f"malformed payload: {e}") from e

    def _require_secret_key(self) -> None:
        if not self.secret_key:
            raise PaymentGatewayError("missing STRIPE_SECRET_KEY")
