"""Request schemas for Billing API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional
from pydantic import BaseModel, Field, StrictInt, model_validator


class CheckoutRequestSchema(BaseModel):
    """
    Request schema for starting a credit checkout

    Used for POST /billing/checkout. Denomination is checked by the use case.
    """

    amount: StrictInt = Field(
        ...,
        description="Credit package in whole USD (10, 25, 50 or 100)"
    )

    class Config:
        json_schema_extra = {"example": {"amount": 25}}


class AdminCreditAdjustmentSchema(BaseModel):
    """
    Request schema for admin credit adjustments

    Accepts amountCents or amount (cents); amountCents wins when both are set.
    """

    amount_cents: Optional[StrictInt] = Field(default=None, alias="amountCents")

    amount: Optional[StrictInt] = Field(default=None)

    reason: str = Field(
        ...,
        description="Reason recorded on the credit transaction"
    )

    @model_validator(mode="after")
    def validate_amount_present(self):
        if self.amount_cents is None and self.amount is None:
            raise ValueError("amountCents must be a non-zero integer")
        return self

    @property
    def resolved_amount_cents(self) -> int:
        return self.amount_cents if self.amount_cents is not None else self.amount

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"amountCents": 2500, "reason": "Manual admin adjustment"}
        }
