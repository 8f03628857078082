"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
Responses exposed over HTTP serialize with camelCase aliases.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for response DTOs rendered as camelCase JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdjustCreditsCommandDTO(BaseModel):
    """
    Command DTO for adjusting a tenant balance

    Used as input to AdjustCredits. Validation of the amount and reason
    happens in the use case so callers get a VALIDATION_ERROR result.
    """

    tenant_id: str = Field(
        ...,
        description="Tenant identifier"
    )

    amount_cents: int = Field(
        ...,
        description="Signed, non-zero amount in cents"
    )

    reason: str = Field(
        ...,
        description="Non-empty reason recorded on the transaction"
    )

    initiated_by: Optional[str] = Field(
        default=None,
        description="Admin identity, None for self-service"
    )

    reference_id: Optional[str] = Field(
        default=None,
        description="External reference (e.g. checkout session id)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "amount_cents": 2500,
                "reason": "Manual admin adjustment",
                "initiated_by": "admin_42",
            }
        }


class AdjustCreditsResponseDTO(CamelModel):
    transaction_id: int
    tenant_id: str
    amount_cents: int
    balance_cents: int = Field(..., description="Balance after the adjustment")
    reason: str
    initiated_by: Optional[str] = None
    created_at: datetime


class AccountEnsuredDTO(CamelModel):
    tenant_id: str
    created: bool


class ProvisionTenantCommandDTO(BaseModel):
    tenant_id: str
    billing_email: Optional[str] = None


class TenantProvisionedDTO(CamelModel):
    tenant_id: str
    tenant_created: bool
    account_created: bool
    balance_cents: int


class BalanceResponseDTO(CamelModel):
    """
    Response DTO for get balance operation

    remaining_pct is relative to the initial credit grant and drives
    low-balance warnings in the dashboard.
    """

    tenant_id: str
    balance_cents: int
    initial_credit_cents: int
    remaining_pct: int = Field(..., ge=0, le=100)
    alert_level: str = Field(..., description="ok, low, warning or critical")

    class Config:
        json_schema_extra = {
            "example": {
                "tenantId": "tenant_xyz789",
                "balanceCents": 500,
                "initialCreditCents": 1000,
                "remainingPct": 50,
                "alertLevel": "low",
            }
        }


class StartCheckoutCommandDTO(BaseModel):
    tenant_id: str
    email: Optional[str] = None
    amount_usd: int


class CheckoutResponseDTO(CamelModel):
    url: str


class WebhookResultDTO(CamelModel):
    received: bool = True
    event_type: str
    tenant_id: Optional[str] = None
    credited_cents: Optional[int] = None
    balance_cents: Optional[int] = None
    checkout_session: Optional[str] = None


class AdminAdjustCreditsCommandDTO(BaseModel):
    tenant_id: str
    amount_cents: int
    reason: str
    admin_id: Optional[str] = None


class AdminAdjustCreditsResponseDTO(CamelModel):
    tenant_id: str
    balance_cents: int


class DailyUsageDTO(CamelModel):
    date: str
    input_tokens: int
    output_tokens: int
    total_tokens: int
    cost_cents: int


class ModelUsageDTO(CamelModel):
    model: str
    total_tokens: int
    cost_cents: int


class AgentUsageDTO(CamelModel):
    agent: str
    message_count: int


class LedgerTransactionDTO(CamelModel):
    date: datetime
    type: str = Field(..., description="grant, purchase or usage")
    amount_cents: int
    balance_after_cents: int
    description: str


class BillingLedgerResponseDTO(CamelModel):
    """
    Response DTO for the billing ledger read

    transactions are most-recent-first and capped by the billing policy.
    """

    daily: List[DailyUsageDTO]
    by_model: List[ModelUsageDTO]
    by_agent: List[AgentUsageDTO]
    transactions: List[LedgerTransactionDTO]
