"""Wallet aggregate holding a user's transactions and budgets."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

from finance_tracker.domain.constants import USAGE_NOT_APPLICABLE
from finance_tracker.domain.models.category import CategoryKey
from finance_tracker.domain.models.transaction import (
    Transaction,
    TransactionType,
)


@dataclass(frozen=True)
class WalletSnapshot:
    """Immutable copy of wallet state taken for persistence."""

    transactions: tuple[Transaction, ...]
    category_budgets: Mapping[str, Decimal]


class Wallet:
    """Per-user aggregate of transactions and category budgets.

    Balances and totals are always recomputed from the transaction list.
    Budget keys are stored exactly as given while expense lookups match
    categories case-insensitively, so a budget set for ``"Food"`` counts
    expenses recorded as ``"food"`` but ``get_budget("food")`` is unset.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] | None = None,
        category_budgets: Mapping[str, Decimal] | None = None,
    ) -> None:
        """Initialize the wallet.

        Args:
            transactions: Transactions restored from storage, in order.
            category_budgets: Budgets restored from storage.
        """
        self._transactions: list[Transaction] = list(transactions or [])
        self._category_budgets: dict[str, Decimal] = dict(
            category_budgets or {}
        )

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction. Callers are responsible for validation."""
        self._transactions.append(transaction)

    def get_transactions(self) -> list[Transaction]:
        """Return a copy of all transactions in insertion order."""
        return list(self._transactions)

    def get_transactions_by_period(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        """Return transactions created within ``[start, end]``.

        Args:
            start: Inclusive lower bound.
            end: Inclusive upper bound.

        Returns:
            list[Transaction]: Matching transactions in insertion order.
        """
        return [
            t for t in self._transactions if start <= t.created_at <= end
        ]

    def get_transactions_by_category(self, category: str) -> list[Transaction]:
        """Return transactions whose category matches case-insensitively."""
        key = CategoryKey(category)
        return [t for t in self._transactions if key.matches(t.category)]

    def get_total_income(self) -> Decimal:
        return self._sum(TransactionType.INCOME)

    def get_total_expense(self) -> Decimal:
        return self._sum(TransactionType.EXPENSE)

    def get_balance(self) -> Decimal:
        """Return total income minus total expense; may be negative."""
        return self.get_total_income() - self.get_total_expense()

    def get_expense_by_category(self, category: str) -> Decimal:
        return self._sum(TransactionType.EXPENSE, {CategoryKey(category)})

    def get_income_by_category(self, category: str) -> Decimal:
        return self._sum(TransactionType.INCOME, {CategoryKey(category)})

    def get_expense_by_categories(
        self,
        categories: Iterable[str] | None,
    ) -> Decimal:
        """Sum expenses whose category matches any of ``categories``.

        An empty or missing list matches nothing and yields zero.
        """
        keys = {CategoryKey(category) for category in categories or ()}
        if not keys:
            return Decimal("0")
        return self._sum(TransactionType.EXPENSE, keys)

    def set_budget(self, category: str, limit: Decimal) -> None:
        self._category_budgets[category] = limit

    def remove_budget(self, category: str) -> None:
        self._category_budgets.pop(category, None)

    def get_budget(self, category: str) -> Decimal | None:
        """Return the budget stored under the exact key, or None."""
        return self._category_budgets.get(category)

    def get_remaining_budget(self, category: str) -> Decimal:
        """Return budget minus spent, or zero when no budget is set.

        Args:
            category: Exact budget key; expenses are matched
                case-insensitively.

        Returns:
            Decimal: Remaining amount, negative when overspent.
        """
        budget = self._category_budgets.get(category)
        if budget is None:
            return Decimal("0")
        return budget - self.get_expense_by_category(category)

    def get_budget_usage_percent(self, category: str) -> float:
        """Return spent/budget*100, or -1.0 when the budget is unset or zero.

        The ratio is a display value and uses float division.
        """
        budget = self._category_budgets.get(category)
        if budget is None or budget == 0:
            return USAGE_NOT_APPLICABLE
        spent = self.get_expense_by_category(category)
        return float(spent) / float(budget) * 100

    def get_all_categories(self) -> list[str]:
        """Return distinct transaction categories sorted ascending.

        Categories differing only by case collapse to the first spelling
        seen, unlike an exact-string distinct, so the listing agrees with
        the case-insensitive expense lookups. Budget keys are not included.
        """
        seen: dict[CategoryKey, str] = {}
        for transaction in self._transactions:
            seen.setdefault(
                CategoryKey(transaction.category),
                transaction.category,
            )
        return sorted(seen.values())

    def get_category_budgets(self) -> dict[str, Decimal]:
        return dict(self._category_budgets)

    def get_categories_with_budget(self) -> list[str]:
        return list(self._category_budgets)

    def snapshot(self) -> WalletSnapshot:
        """Return an immutable copy of the current state."""
        return WalletSnapshot(
            transactions=tuple(self._transactions),
            category_budgets=MappingProxyType(dict(self._category_budgets)),
        )

    def _sum(
        self,
        transaction_type: TransactionType,
        categories: set[CategoryKey] | None = None,
    ) -> Decimal:
        total = Decimal("0")
        for transaction in self._transactions:
            if transaction.type is not transaction_type:
                continue
            if (
                categories is not None
                and CategoryKey(transaction.category) not in categories
            ):
                continue
            total += transaction.amount
        return total


__all__ = ["Wallet", "WalletSnapshot"]
