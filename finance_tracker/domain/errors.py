"""Error taxonomy for finance operations.

Every error carries a ``kind`` tag so adapters can branch on the failure
category without matching on concrete classes.
"""

from decimal import Decimal
from enum import Enum


class FinanceErrorKind(str, Enum):
    """Tags identifying the category of a finance failure."""

    INVALID_INPUT = "invalid_input"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_CATEGORY = "invalid_category"
    INVALID_CATEGORY_LIST = "invalid_category_list"
    TRANSFER = "transfer"
    INVALID_RECIPIENT = "invalid_recipient"
    SELF_TRANSFER = "self_transfer"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_AUTHENTICATED = "not_authenticated"
    INVALID_CREDENTIALS = "invalid_credentials"


class FinanceError(Exception):
    """Base class for caller-visible finance errors."""

    kind: FinanceErrorKind = FinanceErrorKind.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FinanceError):
    """Invalid user input; the caller can re-prompt."""

    kind = FinanceErrorKind.INVALID_INPUT

    @classmethod
    def for_field(cls, field: str, reason: str) -> "ValidationError":
        """Build an error naming the offending field."""
        return cls(f"Validation failed for field '{field}': {reason}")


class InvalidAmountError(ValidationError):
    kind = FinanceErrorKind.INVALID_AMOUNT


class InvalidCategoryError(ValidationError):
    kind = FinanceErrorKind.INVALID_CATEGORY


class InvalidCategoryListError(ValidationError):
    kind = FinanceErrorKind.INVALID_CATEGORY_LIST


class TransferError(ValidationError):
    """A transfer was rejected before any wallet was touched."""

    kind = FinanceErrorKind.TRANSFER


class InvalidRecipientError(TransferError):
    kind = FinanceErrorKind.INVALID_RECIPIENT


class SelfTransferError(TransferError):
    kind = FinanceErrorKind.SELF_TRANSFER


class InsufficientFundsError(TransferError):
    """The sender's balance does not cover the transfer amount."""

    kind = FinanceErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, balance: Decimal, amount: Decimal) -> None:
        super().__init__(
            "Insufficient funds for transfer. "
            f"Balance: {balance}, transfer amount: {amount}"
        )
        self.balance = balance
        self.amount = amount


class AuthenticationError(FinanceError):
    """An operation needs a logged-in user."""

    kind = FinanceErrorKind.NOT_AUTHENTICATED


class NotAuthenticatedError(AuthenticationError):
    def __init__(self, message: str = "User is not authenticated") -> None:
        super().__init__(message)


class InvalidCredentialsError(FinanceError):
    """Wrong login or password."""

    kind = FinanceErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid login or password") -> None:
        super().__init__(message)


__all__ = [
    "FinanceErrorKind",
    "FinanceError",
    "ValidationError",
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidCategoryListError",
    "TransferError",
    "InvalidRecipientError",
    "SelfTransferError",
    "InsufficientFundsError",
    "AuthenticationError",
    "NotAuthenticatedError",
    "InvalidCredentialsError",
]
