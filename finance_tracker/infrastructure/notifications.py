"""Notification dispatchers for budget, balance and transfer events."""

from dataclasses import dataclass
from decimal import Decimal
import sys
from typing import TextIO

from finance_tracker.application.ports.notifications import NotificationPort

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
INFO = "info"

GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

_COLORS = {SUCCESS: GREEN, WARNING: YELLOW, ERROR: RED}


class NotificationService(NotificationPort):
    """Format finance events and route them to ``_emit``."""

    def notify_budget_exceeded(
        self,
        category: str,
        budget: Decimal,
        spent: Decimal,
        over_amount: Decimal,
    ) -> None:
        self._emit(
            WARNING,
            f"WARNING: Budget exceeded for category '{category}'!\n"
            f"   Limit: {budget:.2f}, Spent: {spent:.2f}, "
            f"Over by: {over_amount:.2f}",
        )

    def notify_budget_warning(
        self,
        category: str,
        usage_percent: float,
        remaining: Decimal,
    ) -> None:
        self._emit(
            WARNING,
            f"NOTICE: {usage_percent:.1f}% of the budget for category "
            f"'{category}' is used.\n"
            f"   Remaining: {remaining:.2f}",
        )

    def notify_negative_balance(self, balance: Decimal) -> None:
        self._emit(
            ERROR,
            "WARNING: Expenses exceed income!\n"
            f"   Current balance: {balance:.2f}",
        )

    def notify_low_balance(self, balance: Decimal) -> None:
        self._emit(
            WARNING,
            f"NOTICE: Low balance!\n   Current balance: {balance:.2f}",
        )

    def notify_category_not_found(self, category: str) -> None:
        self._emit(
            INFO,
            f"Category '{category}' was not found among existing transactions.",
        )

    def notify_transfer_success(self, to_login: str, amount: Decimal) -> None:
        self._emit(
            SUCCESS,
            "Transfer completed successfully!\n"
            f"   Recipient: {to_login}, Amount: {amount:.2f}",
        )

    def _emit(self, level: str, message: str) -> None:
        raise NotImplementedError


class ConsoleNotificationService(NotificationService):
    """Print notifications, colored by level unless disabled."""

    def __init__(
        self,
        use_colors: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            use_colors: Wrap messages in ANSI color codes.
            stream: Output stream, ``sys.stdout`` when omitted.
        """
        self._use_colors = use_colors
        self._stream = stream

    def _emit(self, level: str, message: str) -> None:
        color = _COLORS.get(level)
        if self._use_colors and color:
            message = f"{color}{message}{RESET}"
        print(message, file=self._stream or sys.stdout)


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class CollectingNotificationService(NotificationService):
    """Keep notifications in memory for later rendering."""

    def __init__(self) -> None:
        self._notifications: list[Notification] = []

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def drain(self) -> list[Notification]:
        """Return pending notifications and forget them."""
        pending = self._notifications
        self._notifications = []
        return pending

    def _emit(self, level: str, message: str) -> None:
        self._notifications.append(Notification(level, message))


__all__ = [
    "SUCCESS",
    "WARNING",
    "ERROR",
    "INFO",
    "Notification",
    "NotificationService",
    "ConsoleNotificationService",
    "CollectingNotificationService",
]
