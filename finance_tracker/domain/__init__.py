"""Domain package for wallet rules and core models."""

from .constants import (
    BUDGET_WARNING_THRESHOLD,
    DEFAULT_TRANSFER_DESCRIPTION,
    TRANSFER_CATEGORY,
    USAGE_NOT_APPLICABLE,
)
from .models import (
    BudgetAlert,
    BudgetAlertKind,
    BudgetStatus,
    CategoryAmount,
    CategoryKey,
    FinanceSummary,
    PeriodSummary,
    Transaction,
    TransactionType,
    User,
    Wallet,
    WalletSnapshot,
)
from .services import (
    compute_budget_statuses,
    compute_finance_summary,
    compute_period_summary,
    evaluate_budget,
    validate_amount,
    validate_categories,
    validate_category,
)

__all__ = [
    "BUDGET_WARNING_THRESHOLD",
    "DEFAULT_TRANSFER_DESCRIPTION",
    "TRANSFER_CATEGORY",
    "USAGE_NOT_APPLICABLE",
    "BudgetAlert",
    "BudgetAlertKind",
    "BudgetStatus",
    "CategoryAmount",
    "CategoryKey",
    "FinanceSummary",
    "PeriodSummary",
    "Transaction",
    "TransactionType",
    "User",
    "Wallet",
    "WalletSnapshot",
    "compute_budget_statuses",
    "compute_finance_summary",
    "compute_period_summary",
    "evaluate_budget",
    "validate_amount",
    "validate_categories",
    "validate_category",
]
