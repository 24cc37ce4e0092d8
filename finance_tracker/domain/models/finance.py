"""Domain read models for wallet statistics and budgets."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class CategoryAmount:
    """Amount aggregated for a given category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class FinanceSummary:
    """Summary of wallet totals.

    Attributes:
        total_income: Sum of income amounts.
        total_expense: Sum of expense amounts.
        balance: Income minus expense.
        income_by_category: Positive income sums per category.
        expense_by_category: Positive expense sums per category.
    """

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    income_by_category: list[CategoryAmount]
    expense_by_category: list[CategoryAmount]

    @property
    def is_negative(self) -> bool:
        return self.balance < 0


@dataclass(frozen=True)
class PeriodSummary:
    """Income and expense totals for a date range."""

    start: datetime
    end: datetime
    transaction_count: int
    total_income: Decimal
    total_expense: Decimal

    @property
    def difference(self) -> Decimal:
        """Return total_income minus total_expense."""
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class BudgetStatus:
    """Budget usage for one category."""

    category: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    usage_percent: float

    @property
    def exceeded(self) -> bool:
        return self.remaining < 0

    @property
    def over_amount(self) -> Decimal:
        return abs(self.remaining) if self.exceeded else Decimal("0")

    def near_limit(self, threshold: float) -> bool:
        """Return True when usage reached ``threshold`` without exceeding."""
        return not self.exceeded and self.usage_percent >= threshold


class BudgetAlertKind(str, Enum):
    EXCEEDED = "exceeded"
    WARNING = "warning"


@dataclass(frozen=True)
class BudgetAlert:
    """Budget condition detected after an expense."""

    kind: BudgetAlertKind
    category: str
    budget: Decimal
    spent: Decimal
    remaining: Decimal
    usage_percent: float

    @property
    def over_amount(self) -> Decimal:
        return abs(self.remaining)


__all__ = [
    "CategoryAmount",
    "FinanceSummary",
    "PeriodSummary",
    "BudgetStatus",
    "BudgetAlertKind",
    "BudgetAlert",
]
