"""Finance operations performed on the session user's wallet."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from finance_tracker.application.ports.notifications import NotificationPort
from finance_tracker.application.use_cases.authentication import Session
from finance_tracker.domain.constants import (
    BUDGET_WARNING_THRESHOLD,
    DEFAULT_TRANSFER_DESCRIPTION,
    TRANSFER_CATEGORY,
)
from finance_tracker.domain.errors import (
    InsufficientFundsError,
    InvalidRecipientError,
    SelfTransferError,
    ValidationError,
)
from finance_tracker.domain.models import (
    BudgetAlertKind,
    BudgetStatus,
    CategoryKey,
    FinanceSummary,
    PeriodSummary,
    Transaction,
    TransactionType,
    User,
    Wallet,
)
from finance_tracker.domain.services import (
    compute_budget_statuses,
    compute_finance_summary,
    compute_period_summary,
    evaluate_budget,
    normalize_description,
    positive_amounts_by_category,
    validate_amount,
    validate_categories,
    validate_category,
)
from finance_tracker.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class FinanceService:
    """Record transactions, manage budgets and compute statistics.

    Inputs are validated before the session is consulted, and nothing is
    mutated until every check has passed.
    """

    def __init__(
        self,
        session: Session,
        notifications: NotificationPort,
        logger=None,
        usage_logger=None,
        warning_threshold: float = BUDGET_WARNING_THRESHOLD,
    ) -> None:
        """Initialize the service.

        Args:
            session: Session holding the authenticated user.
            notifications: Port receiving budget and transfer events.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger receiving user action records.
            warning_threshold: Budget usage percent that triggers a warning.
        """
        self._session = session
        self._notifications = notifications
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._warning_threshold = warning_threshold

    @property
    def session(self) -> Session:
        return self._session

    def _wallet(self) -> Wallet:
        return self._session.wallet

    def add_income(
        self,
        amount: Decimal,
        category: str,
        description: str | None = "",
    ) -> Transaction:
        """Record an income in the current wallet.

        Raises:
            InvalidAmountError: If the amount is not strictly positive.
            InvalidCategoryError: If the category is blank.
            NotAuthenticatedError: If no user is logged in.
        """
        amount = validate_amount(amount)
        category = validate_category(category)
        transaction = Transaction(
            type=TransactionType.INCOME,
            amount=amount,
            category=category,
            description=normalize_description(description),
        )
        self._wallet().add_transaction(transaction)
        self._usage_logger.info(f"Income {amount} recorded in {category}")
        return transaction

    def add_expense(
        self,
        amount: Decimal,
        category: str,
        description: str | None = "",
    ) -> Transaction:
        """Record an expense, then report budget and balance conditions.

        Raises:
            InvalidAmountError: If the amount is not strictly positive.
            InvalidCategoryError: If the category is blank.
            NotAuthenticatedError: If no user is logged in.
        """
        amount = validate_amount(amount)
        category = validate_category(category)
        transaction = Transaction(
            type=TransactionType.EXPENSE,
            amount=amount,
            category=category,
            description=normalize_description(description),
        )
        wallet = self._wallet()
        wallet.add_transaction(transaction)
        self._usage_logger.info(f"Expense {amount} recorded in {category}")

        self._check_budget_and_notify(wallet, category)
        balance = wallet.get_balance()
        if balance < 0:
            self._notifications.notify_negative_balance(balance)
        return transaction

    def _check_budget_and_notify(self, wallet: Wallet, category: str) -> None:
        alert = evaluate_budget(wallet, category, self._warning_threshold)
        if alert is None:
            return
        if alert.kind is BudgetAlertKind.EXCEEDED:
            self._notifications.notify_budget_exceeded(
                alert.category,
                alert.budget,
                alert.spent,
                alert.over_amount,
            )
        else:
            self._notifications.notify_budget_warning(
                alert.category,
                alert.usage_percent,
                alert.remaining,
            )

    def transfer(
        self,
        to_user: User | None,
        amount: Decimal,
        description: str | None = "",
    ) -> bool:
        """Move money from the session user to another user.

        The sender gets an expense and the recipient an income, both in the
        transfer category. Both wallets are left untouched on failure.

        Args:
            to_user: Recipient, usually looked up by login.
            amount: Strictly positive amount to move.
            description: Optional note appended to both records.

        Returns:
            bool: True once both transactions are recorded.

        Raises:
            InvalidAmountError: If the amount is not strictly positive.
            InvalidRecipientError: If the recipient is missing.
            NotAuthenticatedError: If no user is logged in.
            SelfTransferError: If the recipient is the sender.
            InsufficientFundsError: If the balance does not cover the amount.
        """
        amount = validate_amount(amount)
        if to_user is None:
            raise InvalidRecipientError.for_field("recipient", "not found")

        sender = self._session.user
        if sender.key == to_user.key:
            raise SelfTransferError("Cannot transfer funds to yourself")

        sender_wallet = sender.wallet
        balance = sender_wallet.get_balance()
        if balance < amount:
            raise InsufficientFundsError(balance, amount)

        note = normalize_description(description) or DEFAULT_TRANSFER_DESCRIPTION
        sender_wallet.add_transaction(
            Transaction(
                type=TransactionType.EXPENSE,
                amount=amount,
                category=TRANSFER_CATEGORY,
                description=f"Transfer to {to_user.login}: {note}",
            )
        )
        self._check_budget_and_notify(sender_wallet, TRANSFER_CATEGORY)
        to_user.wallet.add_transaction(
            Transaction(
                type=TransactionType.INCOME,
                amount=amount,
                category=TRANSFER_CATEGORY,
                description=f"Transfer from {sender.login}: {note}",
            )
        )

        self._notifications.notify_transfer_success(to_user.login, amount)
        self._usage_logger.info(
            f"Transfer {amount} from {sender.login} to {to_user.login}"
        )
        return True

    def get_expense_by_categories(
        self,
        categories: Iterable[str] | None,
    ) -> Decimal:
        """Sum expenses over several categories.

        Each requested category with no transactions is reported through
        ``notify_category_not_found``; it still contributes zero.

        Raises:
            InvalidCategoryListError: If no category is supplied.
            NotAuthenticatedError: If no user is logged in.
        """
        requested = validate_categories(categories)
        wallet = self._wallet()
        existing = {CategoryKey(name) for name in wallet.get_all_categories()}
        for category in requested:
            if CategoryKey(category) not in existing:
                self._notifications.notify_category_not_found(category)
        return wallet.get_expense_by_categories(requested)

    def get_all_transactions(self) -> list[Transaction]:
        return self._wallet().get_transactions()

    def get_transactions_by_period(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Transaction]:
        return self._wallet().get_transactions_by_period(start, end)

    def get_transactions_by_category(self, category: str) -> list[Transaction]:
        category = validate_category(category)
        return self._wallet().get_transactions_by_category(category)

    def set_budget(self, category: str, limit: Decimal) -> None:
        """Set or replace the budget of a category.

        Raises:
            InvalidCategoryError: If the category is blank.
            InvalidAmountError: If the limit is not strictly positive.
            NotAuthenticatedError: If no user is logged in.
        """
        category = validate_category(category)
        limit = validate_amount(limit, field="limit")
        self._wallet().set_budget(category, limit)
        self._usage_logger.info(f"Budget for {category} set to {limit}")

    def remove_budget(self, category: str) -> None:
        category = validate_category(category)
        self._wallet().remove_budget(category)
        self._usage_logger.info(f"Budget for {category} removed")

    def get_all_budgets(self) -> dict[str, Decimal]:
        return self._wallet().get_category_budgets()

    def get_budget(self, category: str) -> Decimal | None:
        category = validate_category(category)
        return self._wallet().get_budget(category)

    def get_remaining_budget(self, category: str) -> Decimal:
        category = validate_category(category)
        return self._wallet().get_remaining_budget(category)

    def get_budget_usage_percent(self, category: str) -> float:
        category = validate_category(category)
        return self._wallet().get_budget_usage_percent(category)

    def get_budget_statuses(self) -> list[BudgetStatus]:
        return compute_budget_statuses(self._wallet())

    def get_total_income(self) -> Decimal:
        return self._wallet().get_total_income()

    def get_total_expense(self) -> Decimal:
        return self._wallet().get_total_expense()

    def get_balance(self) -> Decimal:
        return self._wallet().get_balance()

    def get_expenses_by_category(self) -> dict[str, Decimal]:
        """Return strictly positive expense sums keyed by category."""
        summary = compute_finance_summary(self._wallet())
        return positive_amounts_by_category(summary.expense_by_category)

    def get_incomes_by_category(self) -> dict[str, Decimal]:
        """Return strictly positive income sums keyed by category."""
        summary = compute_finance_summary(self._wallet())
        return positive_amounts_by_category(summary.income_by_category)

    def get_all_categories(self) -> list[str]:
        return self._wallet().get_all_categories()

    def get_summary(self) -> FinanceSummary:
        return compute_finance_summary(self._wallet())

    def get_period_summary(
        self,
        start: datetime,
        end: datetime,
    ) -> PeriodSummary:
        """Aggregate the transactions created within ``[start, end]``.

        Raises:
            ValidationError: If ``start`` is after ``end``.
            NotAuthenticatedError: If no user is logged in.
        """
        if start > end:
            raise ValidationError.for_field(
                "period",
                "start date must not be after end date",
            )
        transactions = self._wallet().get_transactions_by_period(start, end)
        return compute_period_summary(transactions, start, end)

    def import_transactions(self, transactions: Iterable[Transaction]) -> int:
        """Append restored transactions to the current wallet.

        Imported records keep their ids and timestamps and do not trigger
        budget notifications.

        Returns:
            int: Number of transactions appended.
        """
        wallet = self._wallet()
        count = 0
        for transaction in transactions:
            wallet.add_transaction(transaction)
            count += 1
        self._logger.info(f"Imported {count} transactions")
        return count


__all__ = ["FinanceService"]
