"""Domain models package."""

from .category import CategoryKey
from .finance import (
    BudgetAlert,
    BudgetAlertKind,
    BudgetStatus,
    CategoryAmount,
    FinanceSummary,
    PeriodSummary,
)
from .transaction import Transaction, TransactionType, new_transaction_id
from .user import User
from .wallet import Wallet, WalletSnapshot

__all__ = [
    "CategoryKey",
    "BudgetAlert",
    "BudgetAlertKind",
    "BudgetStatus",
    "CategoryAmount",
    "FinanceSummary",
    "PeriodSummary",
    "Transaction",
    "TransactionType",
    "new_transaction_id",
    "User",
    "Wallet",
    "WalletSnapshot",
]
