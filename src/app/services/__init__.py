from .unit_of_work import UnitOfWork
from .payment_gateway import (
    PaymentGateway,
    PaymentGatewayError,
    WebhookVerificationError,
    CheckoutSessionInfo,
)
from .compute_resume_service import ComputeResumeService

__all__ = [
    "UnitOfWork",
    "PaymentGateway",
    "PaymentGatewayError",
    "WebhookVerificationError",
    "CheckoutSessionInfo",
    "ComputeResumeService",
]
