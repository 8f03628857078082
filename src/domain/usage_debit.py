"""Usage Debit Domain Entity

Append-only metered cost rows written by the external metering service.
The cost has already been applied to CreditAccount.balance_cents when a
row becomes visible here; this service only reads them.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, String
from src.domain.base import BaseModel, BigIntegerPK, UTCDateTime, utcnow


class UsageDebit(BaseModel, table=True):
    __tablename__ = "usage_debits"
    __table_args__ = (
        Index('ix_usage_debits_tenant_created_at', 'tenant_id', 'created_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerPK, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(sa_column=Column(String(128), nullable=False))

    model: str = Field(sa_column=Column(String(255), nullable=False))

    input_tokens: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    output_tokens: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    cost_cents: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Total charged cost (>= 0)"
    )

    margin_cents: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Revenue markup included in cost_cents (>= 0)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime, nullable=False),
    )
