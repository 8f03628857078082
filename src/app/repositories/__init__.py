from .credit_account_repository import CreditAccountRepository
from .credit_transaction_repository import CreditTransactionRepository
from .tenant_repository import TenantRepository
from .usage_debit_repository import UsageDebitRepository, DailyUsage, ModelUsage
from .conversation_repository import ConversationRepository, AgentMessageCount, UNASSIGNED_AGENT

__all__ = [
    "CreditAccountRepository",
    "CreditTransactionRepository",
    "TenantRepository",
    "UsageDebitRepository",
    "DailyUsage",
    "ModelUsage",
    "ConversationRepository",
    "AgentMessageCount",
    "UNASSIGNED_AGENT",
]
