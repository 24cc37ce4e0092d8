"""Budget evaluation rules."""

from decimal import Decimal

from finance_tracker.domain.constants import BUDGET_WARNING_THRESHOLD
from finance_tracker.domain.models import (
    BudgetAlert,
    BudgetAlertKind,
    BudgetStatus,
    Wallet,
)


def evaluate_budget(
    wallet: Wallet,
    category: str,
    warning_threshold: float = BUDGET_WARNING_THRESHOLD,
) -> BudgetAlert | None:
    """Return the alert raised by the current spending in a category.

    An exceeded budget takes priority over the usage warning, so at most
    one alert is returned.

    Args:
        wallet: Wallet after the expense was recorded.
        category: Exact budget key to check.
        warning_threshold: Usage percent that triggers a warning.

    Returns:
        BudgetAlert | None: Alert to notify, or None when no budget is set,
        the budget is zero, or usage is below the threshold.
    """
    budget = wallet.get_budget(category)
    if budget is None or budget == 0:
        return None

    spent = wallet.get_expense_by_category(category)
    remaining = budget - spent
    usage_percent = wallet.get_budget_usage_percent(category)

    if remaining < 0:
        kind = BudgetAlertKind.EXCEEDED
    elif usage_percent >= warning_threshold:
        kind = BudgetAlertKind.WARNING
    else:
        return None
    return BudgetAlert(
        kind=kind,
        category=category,
        budget=budget,
        spent=spent,
        remaining=remaining,
        usage_percent=usage_percent,
    )


def compute_budget_statuses(wallet: Wallet) -> list[BudgetStatus]:
    """Return usage for every budget in the wallet, sorted by category."""
    statuses: list[BudgetStatus] = []
    for category, limit in sorted(wallet.get_category_budgets().items()):
        spent = wallet.get_expense_by_category(category)
        statuses.append(
            BudgetStatus(
                category=category,
                limit=limit,
                spent=spent,
                remaining=limit - spent,
                usage_percent=wallet.get_budget_usage_percent(category),
            )
        )
    return statuses


def total_budgeted(statuses: list[BudgetStatus]) -> Decimal:
    return sum((status.limit for status in statuses), start=Decimal("0"))


__all__ = ["evaluate_budget", "compute_budget_statuses", "total_budgeted"]
