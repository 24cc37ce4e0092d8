"""Interactive console menus for the finance tracker."""

from collections.abc import Callable
from datetime import datetime, time
from decimal import Decimal

from finance_tracker.adapters.cli.input_validator import InputValidator
from finance_tracker.application.use_cases.authentication import AuthService
from finance_tracker.application.use_cases.finance_operations import (
    FinanceService,
)
from finance_tracker.application.use_cases.results import attempt
from finance_tracker.application.use_cases.transaction_files import (
    ExportTransactionsUseCase,
    ImportTransactionsUseCase,
)
from finance_tracker.domain.constants import BUDGET_WARNING_THRESHOLD
from finance_tracker.domain.errors import FinanceErrorKind, ValidationError
from finance_tracker.domain.models import CategoryKey
from finance_tracker.domain.services import total_budgeted
from finance_tracker.infrastructure.logging.logger import get_app_logger

HISTORY_LIMIT = 20
RULE = "-"


def format_money(amount: Decimal, currency: str = "RUB") -> str:
    return f"{amount:,.2f} {currency}"


def truncate(value: str | None, max_length: int) -> str:
    if not value:
        return ""
    if len(value) <= max_length:
        return value
    return value[: max_length - 2] + ".."


class ConsoleApp:
    """Auth menu and main menu driven by numbered choices.

    Every handler runs through :func:`attempt`, so a rejected operation is
    reported and the menu loop continues.
    """

    def __init__(
        self,
        auth_service: AuthService,
        finance_service: FinanceService,
        export_use_case: ExportTransactionsUseCase,
        import_use_case: ImportTransactionsUseCase,
        validator: InputValidator | None = None,
        input_func: Callable[[str], str] = input,
        currency: str = "RUB",
        warning_threshold: float = BUDGET_WARNING_THRESHOLD,
        logger=None,
    ) -> None:
        """Initialize the application.

        Args:
            auth_service: Service handling registration and sessions.
            finance_service: Service bound to this application's session.
            export_use_case: Ledger export use case.
            import_use_case: Ledger import use case.
            validator: Optional input validator.
            input_func: Function reading one line after printing a prompt.
            currency: Currency label appended to amounts.
            warning_threshold: Usage percent flagged in the budget table.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._auth = auth_service
        self._finance = finance_service
        self._session = finance_service.session
        self._export = export_use_case
        self._import = import_use_case
        self._validator = validator or InputValidator()
        self._input = input_func
        self._currency = currency
        self._warning_threshold = warning_threshold
        self._logger = logger or get_app_logger()
        self._running = True

    def run(self) -> None:
        """Loop over the menus until the user exits, then save."""
        print("=" * 60)
        print("PERSONAL FINANCE TRACKER")
        print("=" * 60)
        while self._running:
            try:
                if self._session.is_authenticated:
                    self._show_main_menu()
                else:
                    self._show_auth_menu()
            except EOFError:
                self._running = False
        self._auth.save_all(self._session)
        print("\nGoodbye! Your data has been saved.")

    def _money(self, amount: Decimal) -> str:
        return format_money(amount, self._currency)

    def _ask(self, prompt: str) -> str:
        return self._input(prompt)

    def _dispatch(self, handler: Callable[[], None]) -> None:
        result = attempt(handler)
        if not result.ok:
            print(f"Error: {result.error.message}")

    def _show_auth_menu(self) -> None:
        print("\n=== AUTHENTICATION ===")
        print("1. Log in")
        print("2. Register")
        print("3. List users")
        print("0. Exit")
        handlers = {
            1: self._handle_login,
            2: self._handle_register,
            3: self._handle_list_users,
            0: self._handle_exit,
        }
        self._dispatch(lambda: handlers[self._choose(0, 3)]())

    def _show_main_menu(self) -> None:
        print(f"\n=== MAIN MENU [{self._session.user.login}] ===")
        print("--- Operations ---")
        print("1. Add income")
        print("2. Add expense")
        print("3. Transaction history")
        print("--- Budgets ---")
        print("4. Set budget")
        print("5. Show budgets")
        print("--- Statistics ---")
        print("6. Overall statistics")
        print("7. Statistics by categories")
        print("8. Statistics for a period")
        print("--- More ---")
        print("9. Transfer to another user")
        print("10. Export to CSV")
        print("11. Import from CSV")
        print("12. Help")
        print("0. Log out")
        handlers = {
            1: self._handle_add_income,
            2: self._handle_add_expense,
            3: self._handle_history,
            4: self._handle_set_budget,
            5: self._handle_show_budgets,
            6: self._handle_statistics,
            7: self._handle_stats_by_categories,
            8: self._handle_stats_by_period,
            9: self._handle_transfer,
            10: self._handle_export,
            11: self._handle_import,
            12: self._handle_help,
            0: self._handle_logout,
        }
        self._dispatch(lambda: handlers[self._choose(0, 12)]())

    def _choose(self, min_value: int, max_value: int) -> int:
        return self._validator.validate_menu_choice(
            self._ask("\nChoose an action: "),
            min_value,
            max_value,
        )

    def _handle_exit(self) -> None:
        self._running = False

    def _handle_login(self) -> None:
        login = self._validator.validate_not_empty(self._ask("Login: "), "login")
        password = self._validator.validate_password(self._ask("Password: "))
        user = self._auth.login(self._session, login, password)
        print(f"\nWelcome, {user.login}!")
        print(f"   Current balance: {self._money(user.wallet.get_balance())}")

    def _handle_register(self) -> None:
        login = self._validator.validate_login(self._ask("Choose a login: "))
        password = self._validator.validate_password(
            self._ask("Choose a password: ")
        )
        user = self._auth.register(login, password)
        print(f"\nUser {user.login} registered. You can log in now.")

    def _handle_list_users(self) -> None:
        users = self._auth.get_all_users()
        if not users:
            print("No users yet. Register the first one!")
            return
        for user in users:
            print(f"- {user.login}")
        print(f"\nTotal users: {len(users)}")

    def _handle_add_income(self) -> None:
        amount = self._validator.validate_amount(self._ask("Amount: "))
        category = self._validator.validate_category(
            self._ask("Category (e.g. Salary, Bonus): ")
        )
        description = self._validator.validate_description(
            self._ask("Description (optional): ")
        )
        transaction = self._finance.add_income(amount, category, description)
        print(f"\nIncome added: {transaction}")
        print(f"   Current balance: {self._money(self._finance.get_balance())}")

    def _handle_add_expense(self) -> None:
        amount = self._validator.validate_amount(self._ask("Amount: "))
        category = self._validator.validate_category(
            self._ask("Category (e.g. Food, Transport): ")
        )
        description = self._validator.validate_description(
            self._ask("Description (optional): ")
        )
        transaction = self._finance.add_expense(amount, category, description)
        print(f"\nExpense added: {transaction}")
        print(f"   Current balance: {self._money(self._finance.get_balance())}")

    def _handle_history(self) -> None:
        transactions = self._finance.get_all_transactions()
        if not transactions:
            print("No transactions yet.")
            return
        recent = transactions[-HISTORY_LIMIT:]
        print(f"\nLast {len(recent)} transactions:")
        print(RULE * 70)
        print(
            f"{'Date':<10} {'Type':<8} {'Amount':>16} {'Category':<15} "
            "Description"
        )
        print(RULE * 70)
        for t in recent:
            print(
                f"{t.created_at:%d.%m.%Y} "
                f"{'Income' if t.is_income else 'Expense':<8} "
                f"{self._money(t.amount):>16} "
                f"{truncate(t.category, 15):<15} "
                f"{truncate(t.description, 20)}"
            )
        print(RULE * 70)
        print(f"Total transactions: {len(transactions)}")

    def _handle_set_budget(self) -> None:
        categories = self._finance.get_all_categories()
        if categories:
            print(f"Existing categories: {', '.join(categories)}")
        category = self._validator.validate_category(self._ask("\nCategory: "))
        current = self._finance.get_budget(category)
        if current is not None:
            remaining = self._finance.get_remaining_budget(category)
            print(
                f"Current budget: {self._money(current)}, "
                f"remaining: {self._money(remaining)}"
            )
        raw_limit = self._ask("New budget limit (0 to remove): ").strip()
        if raw_limit == "0":
            self._finance.remove_budget(category)
            print(f"Budget for '{category}' removed.")
            return
        limit = self._validator.validate_amount(raw_limit, "budget")
        self._finance.set_budget(category, limit)
        print(f"Budget for '{category}' set to {self._money(limit)}.")

    def _handle_show_budgets(self) -> None:
        statuses = self._finance.get_budget_statuses()
        if not statuses:
            print("No budgets set. Use item 4 to set one.")
            return
        print(RULE * 70)
        print(
            f"{'Category':<20} {'Budget':>15} {'Spent':>15} {'Remaining':>15}"
        )
        print(RULE * 70)
        for status in statuses:
            marker = ""
            if status.exceeded:
                marker = " EXCEEDED!"
            elif status.near_limit(self._warning_threshold):
                marker = " !"
            print(
                f"{truncate(status.category, 20):<20} "
                f"{self._money(status.limit):>15} "
                f"{self._money(status.spent):>15} "
                f"{self._money(status.remaining):>15}{marker}"
            )
        print(RULE * 70)
        print(f"Total budgeted: {self._money(total_budgeted(statuses))}")

    def _handle_statistics(self) -> None:
        summary = self._finance.get_summary()
        print(RULE * 40)
        print(f"Total income:  {self._money(summary.total_income):>24}")
        print(f"Total expense: {self._money(summary.total_expense):>24}")
        print(RULE * 40)
        print(f"Balance:       {self._money(summary.balance):>24}")
        if summary.is_negative:
            print("\nWarning: expenses exceed income!")
        if summary.income_by_category:
            print("\n--- Income by category ---")
            for item in summary.income_by_category:
                print(f"  {item.category:<20} {self._money(item.amount):>16}")
        if summary.expense_by_category:
            print("\n--- Expenses by category ---")
            for item in summary.expense_by_category:
                print(f"  {item.category:<20} {self._money(item.amount):>16}")

    def _handle_stats_by_categories(self) -> None:
        all_categories = self._finance.get_all_categories()
        if not all_categories:
            print("No transactions to analyse.")
            return
        print(f"Available categories: {', '.join(all_categories)}")
        raw = self._validator.validate_not_empty(
            self._ask("\nEnter categories separated by commas: "),
            "categories",
        )
        categories = [part.strip() for part in raw.split(",") if part.strip()]
        total = self._finance.get_expense_by_categories(categories)
        print(f"\nCategories: {', '.join(categories)}")
        print(f"Total expenses: {self._money(total)}")
        expenses = {
            CategoryKey(name): amount
            for name, amount in self._finance.get_expenses_by_category().items()
        }
        print("\nBreakdown:")
        for category in categories:
            amount = expenses.get(CategoryKey(category), Decimal("0"))
            print(f"  {category:<20} {self._money(amount):>16}")

    def _handle_stats_by_period(self) -> None:
        start = self._validator.validate_date(
            self._ask("Start date (dd.mm.yyyy): "),
            "start date",
        )
        end = self._validator.validate_date(
            self._ask("End date (dd.mm.yyyy): "),
            "end date",
        )
        if start > end:
            raise ValidationError("Start date must not be after end date")
        summary = self._finance.get_period_summary(
            datetime.combine(start, time.min),
            datetime.combine(end, time.max),
        )
        if summary.transaction_count == 0:
            print("\nNo transactions in this period.")
            return
        print(f"\nPeriod: {start:%d.%m.%Y} - {end:%d.%m.%Y}")
        print(f"Transactions: {summary.transaction_count}")
        print(f"Income: {self._money(summary.total_income)}")
        print(f"Expenses: {self._money(summary.total_expense)}")
        print(f"Difference: {self._money(summary.difference)}")

    def _handle_transfer(self) -> None:
        current = self._session.user
        print("Available recipients:")
        for user in self._auth.get_all_users():
            if user != current:
                print(f"  - {user.login}")
        to_login = self._validator.validate_not_empty(
            self._ask("\nRecipient login: "),
            "recipient login",
        )
        recipient = self._auth.find_user_by_login(to_login)
        if recipient is None:
            raise ValidationError(f"User not found: {to_login}")
        print(f"Your balance: {self._money(self._finance.get_balance())}")
        amount = self._validator.validate_amount(self._ask("Transfer amount: "))
        description = self._validator.validate_description(
            self._ask("Comment (optional): ")
        )
        confirmation = self._ask(
            f"\nTransfer {self._money(amount)} to {recipient.login}? (y/n): "
        )
        if not self._validator.validate_confirmation(confirmation):
            print("Transfer cancelled.")
            return

        result = attempt(
            self._finance.transfer,
            recipient,
            amount,
            description,
        )
        if result.error_kind is FinanceErrorKind.INSUFFICIENT_FUNDS:
            print(
                "Not enough money: available "
                f"{self._money(result.error.balance)}."
            )
            return
        result.unwrap()

    def _handle_export(self) -> None:
        if not self._finance.get_all_transactions():
            print("Nothing to export.")
            return
        default_name = self._export.default_file_name()
        raw = self._ask(f"File name [{default_name}]: ").strip()
        file_name = raw or default_name
        try:
            count = self._export.execute(file_name)
        except OSError as exc:
            self._logger.error(f"Export to {file_name} failed: {exc}")
            print(f"Export failed: {exc}")
            return
        print(f"Exported {count} transactions to {file_name}")

    def _handle_import(self) -> None:
        path = self._validator.validate_file_path(self._ask("File path: "))
        try:
            result = self._import.execute(path)
        except (OSError, ValueError) as exc:
            self._logger.error(f"Import from {path} failed: {exc}")
            print(f"Could not read file: {exc}")
            return
        print("\nImport finished!")
        print(f"   Records processed: {result.total_lines}")
        print(f"   Imported: {result.successful_lines}")
        if result.has_errors:
            print("\nImport errors:")
            for error in result.errors:
                print(f"   {error}")

    def _handle_help(self) -> None:
        print("\n--- Operations ---")
        print("1. Add income      record salary, bonuses and other receipts")
        print("2. Add expense     record spending such as food or transport")
        print(f"3. History         show the last {HISTORY_LIMIT} transactions")
        print("\n--- Budgets ---")
        print("4. Set budget      limit spending for a category (0 removes it)")
        print(
            f"   You are warned at {self._warning_threshold:g}% usage "
            "and when the limit is exceeded."
        )
        print("5. Show budgets    limits, spending and what is left")
        print("\n--- Statistics ---")
        print("6. Overall         income, expenses and balance")
        print("7. By categories   total for selected categories")
        print("8. For a period    totals between two dates")
        print("\n--- More ---")
        print("9. Transfer        send money to another user")
        print("10. Export CSV     save transactions to a file")
        print("11. Import CSV     load transactions from a file")
        print("\nAmounts: 1500, 1500.50 or 1500,50. Dates: 15.01.2025")
        print("Data is saved automatically on logout and exit.")

    def _handle_logout(self) -> None:
        self._auth.logout(self._session)
        print("\nYou have logged out. Your data has been saved.")


__all__ = ["ConsoleApp", "format_money", "truncate"]
