"""Billing domain use cases"""
from .adjust_credits import AdjustCredits
from .ensure_account import EnsureAccount
from .provision_tenant import ProvisionTenant
from .get_balance import GetBalance
from .get_billing_ledger import GetBillingLedger
from .start_checkout import StartCheckout
from .handle_checkout_webhook import HandleCheckoutWebhook
from .admin_adjust_credits import AdminAdjustCredits
from .dtos import (
    AdjustCreditsCommandDTO,
    AdjustCreditsResponseDTO,
    AccountEnsuredDTO,
    ProvisionTenantCommandDTO,
    TenantProvisionedDTO,
    BalanceResponseDTO,
    StartCheckoutCommandDTO,
    CheckoutResponseDTO,
    WebhookResultDTO,
    AdminAdjustCreditsCommandDTO,
    AdminAdjustCreditsResponseDTO,
    BillingLedgerResponseDTO,
    LedgerTransactionDTO,
)

__all__ = [
    "AdjustCredits",
    "EnsureAccount",
    "ProvisionTenant",
    "GetBalance",
    "GetBillingLedger",
    "StartCheckout",
    "HandleCheckoutWebhook",
    "AdminAdjustCredits",
    "AdjustCreditsCommandDTO",
    "AdjustCreditsResponseDTO",
    "AccountEnsuredDTO",
    "ProvisionTenantCommandDTO",
    "TenantProvisionedDTO",
    "BalanceResponseDTO",
    "StartCheckoutCommandDTO",
    "CheckoutResponseDTO",
    "WebhookResultDTO",
    "AdminAdjustCreditsCommandDTO",
    "AdminAdjustCreditsResponseDTO",
    "BillingLedgerResponseDTO",
    "LedgerTransactionDTO",
]
