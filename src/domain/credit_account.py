"""Credit Account Domain Entity

Authoritative prepaid balance per tenant, in integer cents.
Mutated only through the relative update in the credit account repository.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Boolean, String
from src.domain.base import BaseModel, UTCDateTime, utcnow


class CreditAccount(BaseModel, table=True):
    """
    Credit Account - One row per tenant

    Domain Rules:
    - 0 or 1 account per tenant (tenant_id is the primary key)
    - Created lazily with balance 0, or seeded by signup provisioning
    - balance_cents is signed; usage metering may drive it below zero
    - Every change goes through balance_cents = balance_cents + delta
    """

    __tablename__ = "credit_accounts"

    tenant_id: str = Field(
        sa_column=Column(String(128), primary_key=True),
        description="Tenant ID (one account per tenant)"
    )

    balance_cents: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Current balance in minor currency units"
    )

    free_credit_used: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Whether the initial free grant has been consumed or flagged"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime, nullable=False),
        description="Last balance update timestamp"
    )
