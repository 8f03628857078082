from .base import BaseModel, UTCDateTime, generate_uuid, utcnow
from .tenant import Tenant, TenantStatus
from .credit_account import CreditAccount
from .credit_transaction import CreditTransaction
from .usage_debit import UsageDebit
from .conversation_message import ConversationMessage
from .billing_policy import BillingPolicy, INITIAL_CREDIT_CENTS
from .billing_event import (
    BillingEvent,
    BillingEventType,
    LedgerEntry,
    classify_reason,
    reconstruct_history,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utcnow",
    "UTCDateTime",
    "Tenant",
    "TenantStatus",
    "CreditAccount",
    "CreditTransaction",
    "UsageDebit",
    "ConversationMessage",
    "BillingPolicy",
    "INITIAL_CREDIT_CENTS",
    "BillingEvent",
    "BillingEventType",
    "LedgerEntry",
    "classify_reason",
    "reconstruct_history",
]
