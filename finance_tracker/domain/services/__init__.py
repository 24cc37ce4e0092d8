"""Domain services package."""

from .budget import compute_budget_statuses, evaluate_budget, total_budgeted
from .finance import (
    compute_finance_summary,
    compute_period_summary,
    positive_amounts_by_category,
)
from .normalization import normalize_description, normalize_login
from .validation import (
    validate_amount,
    validate_categories,
    validate_category,
)

__all__ = [
    "compute_budget_statuses",
    "evaluate_budget",
    "total_budgeted",
    "compute_finance_summary",
    "compute_period_summary",
    "positive_amounts_by_category",
    "normalize_description",
    "normalize_login",
    "validate_amount",
    "validate_categories",
    "validate_category",
]
