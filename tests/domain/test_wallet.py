"""Tests for the Wallet aggregate."""

from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

import pytest

from finance_tracker.domain.models import (
    Transaction,
    TransactionType,
    Wallet,
)


def _tx(
    transaction_type: TransactionType,
    amount: str,
    category: str,
    created_at: datetime | None = None,
) -> Transaction:
    if created_at is None:
        return Transaction(transaction_type, Decimal(amount), category)
    return Transaction(
        transaction_type,
        Decimal(amount),
        category,
        created_at=created_at,
    )


def _income(amount: str, category: str, **kwargs) -> Transaction:
    return _tx(TransactionType.INCOME, amount, category, **kwargs)


def _expense(amount: str, category: str, **kwargs) -> Transaction:
    return _tx(TransactionType.EXPENSE, amount, category, **kwargs)


@pytest.fixture
def wallet() -> Wallet:
    wallet = Wallet()
    wallet.add_transaction(_income("50000", "Salary"))
    wallet.add_transaction(_income("10000", "Bonus"))
    wallet.add_transaction(_expense("5000", "Food"))
    wallet.add_transaction(_expense("2000", "food"))
    wallet.add_transaction(_expense("3000", "Transport"))
    return wallet


def test_new_wallet_is_empty():
    wallet = Wallet()

    assert wallet.get_transactions() == []
    assert wallet.get_balance() == Decimal("0")
    assert wallet.get_total_income() == Decimal("0")
    assert wallet.get_all_categories() == []


def test_totals_and_balance(wallet):
    assert wallet.get_total_income() == Decimal("60000")
    assert wallet.get_total_expense() == Decimal("10000")
    assert wallet.get_balance() == Decimal("50000")


def test_balance_can_be_negative():
    wallet = Wallet()
    wallet.add_transaction(_income("1000", "Salary"))
    wallet.add_transaction(_expense("2000", "Food"))

    assert wallet.get_balance() == Decimal("-1000")


def test_decimal_sums_are_exact():
    wallet = Wallet()
    for _ in range(3):
        wallet.add_transaction(_income("0.1", "Tips"))

    assert wallet.get_total_income() == Decimal("0.3")


def test_get_transactions_returns_copy(wallet):
    transactions = wallet.get_transactions()
    transactions.clear()

    assert len(wallet.get_transactions()) == 5


def test_category_sums_ignore_case(wallet):
    assert wallet.get_expense_by_category("FOOD") == Decimal("7000")
    assert wallet.get_income_by_category("salary") == Decimal("50000")
    assert wallet.get_expense_by_category("Missing") == Decimal("0")
    assert wallet.get_income_by_category("Food") == Decimal("0")


def test_expense_by_categories_matches_any(wallet):
    total = wallet.get_expense_by_categories(["food", "Transport", "Nope"])

    assert total == Decimal("10000")


@pytest.mark.parametrize("categories", [[], None])
def test_expense_by_categories_empty_is_zero(wallet, categories):
    assert wallet.get_expense_by_categories(categories) == Decimal("0")


def test_all_categories_are_deduplicated_and_sorted(wallet):
    """Case variants collapse to the first spelling seen."""
    assert wallet.get_all_categories() == [
        "Bonus",
        "Food",
        "Salary",
        "Transport",
    ]


def test_transactions_by_category(wallet):
    food = wallet.get_transactions_by_category("FOOD")

    assert [t.amount for t in food] == [Decimal("5000"), Decimal("2000")]


def test_transactions_by_period_is_inclusive():
    wallet = Wallet()
    before = _income("1", "A", created_at=datetime(2024, 1, 1, 0, 0))
    start = _income("2", "A", created_at=datetime(2024, 1, 10, 0, 0))
    end = _income("3", "A", created_at=datetime(2024, 1, 20, 23, 59, 59))
    after = _income("4", "A", created_at=datetime(2024, 1, 21, 0, 0))
    for transaction in (after, start, before, end):
        wallet.add_transaction(transaction)

    result = wallet.get_transactions_by_period(
        datetime(2024, 1, 10),
        datetime(2024, 1, 20, 23, 59, 59),
    )

    assert result == [start, end]


def test_budget_lookup_uses_exact_key():
    wallet = Wallet()
    wallet.set_budget("Food", Decimal("10000"))

    assert wallet.get_budget("Food") == Decimal("10000")
    assert wallet.get_budget("food") is None
    assert wallet.get_budget("Other") is None


def test_remaining_budget(wallet):
    assert wallet.get_remaining_budget("Food") == Decimal("0")

    wallet.set_budget("Food", Decimal("10000"))
    assert wallet.get_remaining_budget("Food") == Decimal("3000")

    wallet.set_budget("Food", Decimal("5000"))
    assert wallet.get_remaining_budget("Food") == Decimal("-2000")


def test_budget_counts_expenses_of_any_case(wallet):
    """A budget keyed 'Food' includes expenses recorded as 'food'."""
    wallet.set_budget("Food", Decimal("7000"))

    assert wallet.get_remaining_budget("Food") == Decimal("0")
    assert wallet.get_budget_usage_percent("Food") == pytest.approx(100.0)


def test_usage_percent():
    wallet = Wallet()
    wallet.add_transaction(_expense("8000", "Food"))

    assert wallet.get_budget_usage_percent("Food") == -1.0

    wallet.set_budget("Food", Decimal("10000"))
    assert wallet.get_budget_usage_percent("Food") == pytest.approx(80.0)

    wallet.set_budget("Food", Decimal("0"))
    assert wallet.get_budget_usage_percent("Food") == -1.0


def test_remove_budget_and_missing_key_is_noop():
    wallet = Wallet()
    wallet.set_budget("Food", Decimal("100"))

    wallet.remove_budget("Food")
    wallet.remove_budget("Food")

    assert wallet.get_budget("Food") is None
    assert wallet.get_category_budgets() == {}


def test_category_budgets_are_copies():
    wallet = Wallet()
    wallet.set_budget("Food", Decimal("100"))

    budgets = wallet.get_category_budgets()
    budgets["Food"] = Decimal("1")

    assert wallet.get_budget("Food") == Decimal("100")
    assert wallet.get_categories_with_budget() == ["Food"]


def test_snapshot_is_immutable_and_detached(wallet):
    wallet.set_budget("Food", Decimal("100"))

    snapshot = wallet.snapshot()
    wallet.add_transaction(_income("1", "Late"))
    wallet.set_budget("Late", Decimal("1"))

    assert isinstance(snapshot.transactions, tuple)
    assert len(snapshot.transactions) == 5
    assert isinstance(snapshot.category_budgets, MappingProxyType)
    assert dict(snapshot.category_budgets) == {"Food": Decimal("100")}
    with pytest.raises(TypeError):
        snapshot.category_budgets["Food"] = Decimal("1")


def test_restoring_wallet_from_storage():
    transactions = [_income("5", "Salary"), _expense("2", "Food")]

    wallet = Wallet(transactions, {"Food": Decimal("10")})

    assert wallet.get_transactions() == transactions
    assert wallet.get_remaining_budget("Food") == Decimal("8")
