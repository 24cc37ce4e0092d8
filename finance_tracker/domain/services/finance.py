"""Domain services for wallet statistics."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from finance_tracker.domain.models import (
    CategoryAmount,
    FinanceSummary,
    PeriodSummary,
    Transaction,
    Wallet,
)


def compute_finance_summary(wallet: Wallet) -> FinanceSummary:
    """Compute totals and per-category sums for a wallet.

    Args:
        wallet: Wallet to summarize.

    Returns:
        FinanceSummary: Totals plus income and expense breakdowns. Only
        categories with a strictly positive sum appear in a breakdown.
    """
    income_by_category: list[CategoryAmount] = []
    expense_by_category: list[CategoryAmount] = []
    for category in wallet.get_all_categories():
        income = wallet.get_income_by_category(category)
        if income > 0:
            income_by_category.append(CategoryAmount(category, income))
        expense = wallet.get_expense_by_category(category)
        if expense > 0:
            expense_by_category.append(CategoryAmount(category, expense))

    total_income = wallet.get_total_income()
    total_expense = wallet.get_total_expense()
    return FinanceSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        income_by_category=income_by_category,
        expense_by_category=expense_by_category,
    )


def compute_period_summary(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
) -> PeriodSummary:
    """Aggregate transactions already filtered to a period.

    Args:
        transactions: Transactions within ``[start, end]``.
        start: Inclusive lower bound, reported back in the summary.
        end: Inclusive upper bound, reported back in the summary.

    Returns:
        PeriodSummary: Count and income/expense totals.
    """
    count = 0
    total_income = Decimal("0")
    total_expense = Decimal("0")
    for transaction in transactions:
        count += 1
        if transaction.is_income:
            total_income += transaction.amount
        else:
            total_expense += transaction.amount
    return PeriodSummary(
        start=start,
        end=end,
        transaction_count=count,
        total_income=total_income,
        total_expense=total_expense,
    )


def positive_amounts_by_category(
    amounts: list[CategoryAmount],
) -> dict[str, Decimal]:
    return {item.category: item.amount for item in amounts if item.amount > 0}


__all__ = [
    "compute_finance_summary",
    "compute_period_summary",
    "positive_amounts_by_category",
]
