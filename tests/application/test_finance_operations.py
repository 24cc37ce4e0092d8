"""Tests for the finance operation service."""

from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finance_tracker.domain.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCategoryError,
    InvalidCategoryListError,
    InvalidRecipientError,
    NotAuthenticatedError,
    SelfTransferError,
    ValidationError,
)
from finance_tracker.domain.models import (
    Transaction,
    TransactionType,
    User,
)


def test_operations_require_authentication(finance_service):
    with pytest.raises(NotAuthenticatedError):
        finance_service.add_income(Decimal("100"), "Salary")
    with pytest.raises(NotAuthenticatedError):
        finance_service.get_balance()


def test_inputs_are_validated_before_authentication(finance_service):
    """Invalid input is reported even when nobody is logged in."""
    with pytest.raises(InvalidAmountError):
        finance_service.add_expense(Decimal("0"), "Food")
    with pytest.raises(InvalidCategoryError):
        finance_service.add_expense(Decimal("10"), "  ")


def test_add_income_trims_and_records(finance_service, logged_in, notifications):
    transaction = finance_service.add_income(
        Decimal("50000"),
        "  Salary ",
        "  January ",
    )

    assert transaction.type is TransactionType.INCOME
    assert transaction.category == "Salary"
    assert transaction.description == "January"
    assert logged_in.wallet.get_transactions() == [transaction]
    assert notifications.method_calls == []


def test_add_income_accepts_missing_description(finance_service, logged_in):
    transaction = finance_service.add_income(Decimal("1"), "Gift", None)

    assert transaction.description == ""


def test_scenario_totals(finance_service, logged_in):
    finance_service.add_income(Decimal("50000"), "Salary")
    finance_service.add_income(Decimal("10000"), "Bonus")
    finance_service.add_expense(Decimal("5000"), "Food")
    finance_service.add_expense(Decimal("3000"), "Transport")

    assert finance_service.get_total_income() == Decimal("60000")
    assert finance_service.get_total_expense() == Decimal("8000")
    assert finance_service.get_balance() == Decimal("52000")
    assert finance_service.get_expenses_by_category() == {
        "Food": Decimal("5000"),
        "Transport": Decimal("3000"),
    }
    assert finance_service.get_incomes_by_category() == {
        "Bonus": Decimal("10000"),
        "Salary": Decimal("50000"),
    }
    assert finance_service.get_all_categories() == [
        "Bonus",
        "Food",
        "Salary",
        "Transport",
    ]


def test_expense_over_budget_notifies_exceeded(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.add_income(Decimal("100000"), "Salary")
    finance_service.set_budget("Food", Decimal("5000"))

    finance_service.add_expense(Decimal("7000"), "Food")

    notifications.notify_budget_exceeded.assert_called_once_with(
        "Food",
        Decimal("5000"),
        Decimal("7000"),
        Decimal("2000"),
    )
    notifications.notify_budget_warning.assert_not_called()
    notifications.notify_negative_balance.assert_not_called()


def test_expense_reaching_threshold_notifies_warning(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.add_income(Decimal("100000"), "Salary")
    finance_service.set_budget("Food", Decimal("10000"))

    finance_service.add_expense(Decimal("8000"), "Food")

    notifications.notify_budget_warning.assert_called_once()
    category, percent, remaining = (
        notifications.notify_budget_warning.call_args.args
    )
    assert category == "Food"
    assert percent == pytest.approx(80.0)
    assert remaining == Decimal("2000")
    notifications.notify_budget_exceeded.assert_not_called()


def test_custom_warning_threshold(session, notifications, logged_in):
    from finance_tracker.application.use_cases.finance_operations import (
        FinanceService,
    )

    service = FinanceService(
        session,
        notifications,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        warning_threshold=50.0,
    )
    service.add_income(Decimal("1000"), "Salary")
    service.set_budget("Food", Decimal("100"))

    service.add_expense(Decimal("60"), "Food")

    notifications.notify_budget_warning.assert_called_once()


def test_expense_below_threshold_is_silent(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.add_income(Decimal("100000"), "Salary")
    finance_service.set_budget("Food", Decimal("10000"))

    finance_service.add_expense(Decimal("1000"), "Food")

    assert notifications.method_calls == []


def test_negative_balance_is_notified(finance_service, logged_in, notifications):
    finance_service.add_income(Decimal("1000"), "Salary")

    finance_service.add_expense(Decimal("1500"), "Food")

    notifications.notify_negative_balance.assert_called_once_with(
        Decimal("-500")
    )


def test_budget_management(finance_service, logged_in):
    finance_service.set_budget(" Food ", Decimal("1000"))
    finance_service.add_income(Decimal("5000"), "Salary")
    finance_service.add_expense(Decimal("250"), "food")

    assert finance_service.get_all_budgets() == {"Food": Decimal("1000")}
    assert finance_service.get_budget("Food") == Decimal("1000")
    assert finance_service.get_remaining_budget("Food") == Decimal("750")
    assert finance_service.get_budget_usage_percent("Food") == pytest.approx(
        25.0
    )
    (status,) = finance_service.get_budget_statuses()
    assert status.category == "Food"

    finance_service.remove_budget("Food")

    assert finance_service.get_budget("Food") is None
    assert finance_service.get_remaining_budget("Food") == Decimal("0")


def test_integer_amounts_are_accepted(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.add_income(100000, "Salary")
    finance_service.set_budget("Food", 5000)

    finance_service.add_expense(7000, "Food")

    assert finance_service.get_budget("Food") == Decimal("5000")
    assert isinstance(finance_service.get_budget("Food"), Decimal)
    notifications.notify_budget_exceeded.assert_called_once_with(
        "Food",
        Decimal("5000"),
        Decimal("7000"),
        Decimal("2000"),
    )


def test_set_budget_rejects_non_positive_limit(finance_service, logged_in):
    with pytest.raises(InvalidAmountError):
        finance_service.set_budget("Food", Decimal("0"))
    with pytest.raises(InvalidCategoryError):
        finance_service.set_budget("", Decimal("10"))


def test_expense_by_categories_reports_unknown(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.add_income(Decimal("10000"), "Salary")
    finance_service.add_expense(Decimal("5000"), "Food")
    finance_service.add_expense(Decimal("3000"), "Transport")
    notifications.reset_mock()

    total = finance_service.get_expense_by_categories(
        ["food", "Transport", "Travel"]
    )

    assert total == Decimal("8000")
    notifications.notify_category_not_found.assert_called_once_with("Travel")


@pytest.mark.parametrize("categories", [None, []])
def test_expense_by_categories_rejects_empty_list(
    finance_service,
    logged_in,
    categories,
):
    with pytest.raises(InvalidCategoryListError):
        finance_service.get_expense_by_categories(categories)


def test_transactions_by_category_and_period(finance_service, logged_in):
    food = finance_service.add_expense(Decimal("10"), "Food")
    finance_service.add_income(Decimal("100"), "Salary")
    now = datetime.now()

    assert finance_service.get_transactions_by_category("FOOD") == [food]
    period = finance_service.get_transactions_by_period(
        now - timedelta(minutes=1),
        now + timedelta(minutes=1),
    )
    assert len(period) == 2
    with pytest.raises(InvalidCategoryError):
        finance_service.get_transactions_by_category(" ")


def test_period_summary(finance_service, logged_in):
    finance_service.add_income(Decimal("100"), "Salary")
    finance_service.add_expense(Decimal("40"), "Food")
    now = datetime.now()

    summary = finance_service.get_period_summary(
        now - timedelta(days=1),
        now + timedelta(days=1),
    )

    assert summary.transaction_count == 2
    assert summary.difference == Decimal("60")


def test_period_summary_rejects_reversed_range(finance_service, logged_in):
    now = datetime.now()

    with pytest.raises(ValidationError):
        finance_service.get_period_summary(now, now - timedelta(days=1))


def test_summary_read_model(finance_service, logged_in):
    finance_service.add_income(Decimal("10"), "Salary")
    finance_service.add_expense(Decimal("20"), "Food")

    summary = finance_service.get_summary()

    assert summary.balance == Decimal("-10")
    assert summary.is_negative


def test_transfer_moves_money(
    finance_service,
    logged_in,
    bob,
    notifications,
):
    finance_service.add_income(Decimal("1000"), "Salary")

    assert finance_service.transfer(bob, Decimal("300"), "  rent ") is True

    sender_tx = logged_in.wallet.get_transactions()[-1]
    recipient_tx = bob.wallet.get_transactions()[-1]
    assert sender_tx.type is TransactionType.EXPENSE
    assert sender_tx.category == "Transfer"
    assert sender_tx.description == "Transfer to bob: rent"
    assert recipient_tx.type is TransactionType.INCOME
    assert recipient_tx.category == "Transfer"
    assert recipient_tx.description == "Transfer from alice: rent"
    assert logged_in.wallet.get_balance() == Decimal("700")
    assert bob.wallet.get_balance() == Decimal("300")
    notifications.notify_transfer_success.assert_called_once_with(
        "bob",
        Decimal("300"),
    )


def test_transfer_uses_default_description(finance_service, logged_in, bob):
    finance_service.add_income(Decimal("100"), "Salary")

    finance_service.transfer(bob, Decimal("100"), "")

    assert (
        bob.wallet.get_transactions()[-1].description
        == "Transfer from alice: Funds transfer"
    )


def test_transfer_checks_sender_transfer_budget(
    finance_service,
    logged_in,
    bob,
    notifications,
):
    finance_service.add_income(Decimal("1000"), "Salary")
    finance_service.set_budget("Transfer", Decimal("100"))

    finance_service.transfer(bob, Decimal("500"))

    notifications.notify_budget_exceeded.assert_called_once_with(
        "Transfer",
        Decimal("100"),
        Decimal("500"),
        Decimal("400"),
    )


def test_insufficient_funds_leaves_wallets_untouched(
    finance_service,
    logged_in,
    bob,
    notifications,
):
    finance_service.add_income(Decimal("500"), "Salary")

    with pytest.raises(InsufficientFundsError) as excinfo:
        finance_service.transfer(bob, Decimal("1000"))

    assert excinfo.value.balance == Decimal("500")
    assert excinfo.value.amount == Decimal("1000")
    assert len(logged_in.wallet.get_transactions()) == 1
    assert bob.wallet.get_transactions() == []
    notifications.notify_transfer_success.assert_not_called()


def test_self_transfer_is_rejected(finance_service, logged_in):
    finance_service.add_income(Decimal("500"), "Salary")
    same_login = User("ALICE", "other")

    with pytest.raises(SelfTransferError):
        finance_service.transfer(same_login, Decimal("10"))

    assert len(logged_in.wallet.get_transactions()) == 1


def test_transfer_rejects_missing_recipient_and_bad_amount(
    finance_service,
    logged_in,
    bob,
):
    with pytest.raises(InvalidRecipientError):
        finance_service.transfer(None, Decimal("10"))
    with pytest.raises(InvalidAmountError):
        finance_service.transfer(bob, Decimal("-5"))


def test_import_transactions_appends_without_notifications(
    finance_service,
    logged_in,
    notifications,
):
    finance_service.set_budget("Food", Decimal("1"))
    restored = [
        Transaction(
            TransactionType.EXPENSE,
            Decimal("50"),
            "Food",
            id="deadbeef",
            created_at=datetime(2024, 1, 1, 12, 0),
        )
    ]

    count = finance_service.import_transactions(restored)

    assert count == 1
    assert logged_in.wallet.get_transactions()[0].id == "deadbeef"
    assert notifications.method_calls == []
