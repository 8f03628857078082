from .credit_account_repository import SqlAlchemyCreditAccountRepository
from .credit_transaction_repository import SqlAlchemyCreditTransactionRepository
from .tenant_repository import SqlAlchemyTenantRepository
from .usage_debit_repository import SqlAlchemyUsageDebitRepository
from .conversation_repository import SqlAlchemyConversationRepository

__all__ = [
    "SqlAlchemyCreditAccountRepository",
    "SqlAlchemyCreditTransactionRepository",
    "SqlAlchemyTenantRepository",
    "SqlAlchemyUsageDebitRepository",
    "SqlAlchemyConversationRepository",
]
