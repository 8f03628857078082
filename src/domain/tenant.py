"""Tenant Domain Entity

Opaque tenant identity plus the payment-gateway customer reference used by checkout.
Tenants are created at signup and never deleted, only suspended.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, UTCDateTime, generate_uuid, utcnow


class TenantStatus(str, Enum):
    """Tenant lifecycle states"""
    ACTIVE = "active"
    SUSPENDED = "suspended"


class Tenant(BaseModel, table=True):
    """
    Tenant - Owner of exactly one credit account

    Domain Rules:
    - Never deleted, only suspended
    - gateway_customer_id is set lazily on first checkout and never replaced
    """

    __tablename__ = "tenants"

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(128), primary_key=True),
        description="Tenant identifier"
    )

    status: TenantStatus = Field(
        default=TenantStatus.ACTIVE,
        description="Lifecycle status (active, suspended)"
    )

    billing_email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(320), nullable=True),
        description="Email used when creating the gateway customer"
    )

    gateway_customer_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Payment gateway customer id (e.g. Stripe cus_...)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime, nullable=False),
        description="Signup timestamp"
    )
