"""Credit Transaction Domain Entity

Immutable append-only audit trail of every balance mutation made through
the credit account manager.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, String, Text
from src.domain.base import BaseModel, BigIntegerPK, UTCDateTime, utcnow


class CreditTransaction(BaseModel, table=True):
    """
    Credit Transaction - Immutable audit row

    Domain Rules:
    - Never updated or deleted
    - amount_cents is signed and non-zero
    - reason is non-empty free text; it drives grant/purchase classification
    - initiated_by holds the admin identity, None for self-service and webhooks
    - reference_id is informational only and NOT unique, so a redelivered
      checkout webhook produces a second row
    """

    __tablename__ = "credit_transactions"
    __table_args__ = (
        Index('ix_credit_transactions_tenant_created_at', 'tenant_id', 'created_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerPK, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment)"
    )

    tenant_id: str = Field(
        sa_column=Column(String(128), nullable=False),
        description="Tenant ID"
    )

    amount_cents: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Signed amount in cents"
    )

    reason: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Human readable reason (e.g. 'Manual admin adjustment')"
    )

    initiated_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Admin identity for privileged changes"
    )

    reference_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True, index=True),
        description="External reference (e.g. checkout session id)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime, nullable=False),
        description="Transaction timestamp (immutable)"
    )
