"""Port for dispatching finance notifications."""

from decimal import Decimal
from typing import Protocol


class NotificationPort(Protocol):
    """Port receiving semantic finance events for rendering."""

    def notify_budget_exceeded(
        self,
        category: str,
        budget: Decimal,
        spent: Decimal,
        over_amount: Decimal,
    ) -> None:
        """Report that spending in a category went over its budget."""

    def notify_budget_warning(
        self,
        category: str,
        usage_percent: float,
        remaining: Decimal,
    ) -> None:
        """Report that spending in a category reached the warning level."""

    def notify_negative_balance(self, balance: Decimal) -> None:
        """Report that expenses exceed income."""

    def notify_category_not_found(self, category: str) -> None:
        """Report that a requested category has no transactions."""

    def notify_transfer_success(self, to_login: str, amount: Decimal) -> None:
        """Report a completed transfer."""


__all__ = ["NotificationPort"]
