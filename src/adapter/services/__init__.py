from .unit_of_work import SqlAlchemyUnitOfWork
from .stripe_gateway import StripePaymentGateway
from .compute_resume_service import (
    LoggingComputeResumeService,
    HttpComputeResumeService,
    create_resume_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "StripePaymentGateway",
    "LoggingComputeResumeService",
    "HttpComputeResumeService",
    "create_resume_service",
]
