"""Payment Gateway Interface

Defines the contract for hosted checkout and webhook verification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


class PaymentGatewayError(Exception):
    """Raised when the gateway rejects or fails a request"""


class WebhookVerificationError(Exception):
    """Raised when a webhook payload or its signature is invalid"""


@dataclass(frozen=True)
class CheckoutSessionInfo:
    session_id: str
    url: Optional[str]


class PaymentGateway(ABC):
    """
    Service interface for the payment gateway

    Implementations: Stripe (production), in-memory fakes (tests).
    """

    name: str = "gateway"

    @abstractmethod
    async def create_customer(self, tenant_id: str, email: str) -> str:
        """
        Create a gateway customer for the tenant

        Returns:
            Gateway customer id

        Raises:
            PaymentGatewayError: On gateway failure
        """
        pass

    @abstractmethod
    async def create_checkout_session(
        self,
        customer_id: str,
        tenant_id: str,
        amount_usd: int,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionInfo:
        """
        Create a one-time payment checkout session

        The session carries {tenantId, amount} metadata used by the webhook.

        Raises:
            PaymentGatewayError: On gateway failure
        """
        pass

    @abstractmethod
    def verify_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Verify a webhook delivery against the shared secret

        Returns:
            The decoded event as a plain dict

        Raises:
            WebhookVerificationError: Signature mismatch or malformed payload
        """
        pass
