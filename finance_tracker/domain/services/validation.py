"""Domain validation helpers."""

from collections.abc import Iterable
from decimal import Decimal

from finance_tracker.domain.errors import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidCategoryListError,
)
from finance_tracker.utils.decimal_utils import coerce_decimal


def validate_amount(
    amount: Decimal | int | None,
    field: str = "amount",
) -> Decimal:
    """Ensure an amount is a strictly positive finite Decimal.

    Integers are exact and accepted; floats are rejected.

    Args:
        amount: Amount supplied by the caller.
        field: Field name used in the error message.

    Returns:
        Decimal: The validated amount.

    Raises:
        InvalidAmountError: If the amount is missing, zero or negative.
    """
    if amount is None:
        raise InvalidAmountError.for_field(field, "must not be empty")
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int)):
        raise InvalidAmountError.for_field(field, "must be a decimal value")
    amount = coerce_decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError.for_field(field, "must be positive")
    return amount


def validate_category(category: str | None) -> str:
    """Ensure a category is present and return it trimmed.

    Raises:
        InvalidCategoryError: If the category is missing or blank.
    """
    if category is None or not category.strip():
        raise InvalidCategoryError.for_field("category", "must not be empty")
    return category.strip()


def validate_categories(categories: Iterable[str] | None) -> list[str]:
    """Ensure a category list is non-empty and return trimmed names.

    Blank entries are dropped; a list made only of blanks is rejected.

    Raises:
        InvalidCategoryListError: If no usable category is supplied.
    """
    cleaned = [c.strip() for c in categories or () if c and c.strip()]
    if not cleaned:
        raise InvalidCategoryListError("Category list must not be empty")
    return cleaned


__all__ = ["validate_amount", "validate_category", "validate_categories"]
