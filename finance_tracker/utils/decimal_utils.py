"""Helpers for Decimal money values."""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from storage or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_money(raw: str) -> Decimal:
    """Parse user or file input into a Decimal amount.

    Both ``.`` and ``,`` are accepted as the decimal separator.

    Args:
        raw: Text entered by the user or read from a file.

    Returns:
        Decimal: Parsed amount.

    Raises:
        ValueError: If the text is not a finite decimal number.
    """
    cleaned = (raw or "").strip().replace(",", ".")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount format: {raw}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount format: {raw}")
    return amount


def format_plain(amount: Decimal) -> str:
    """Render an amount as a plain decimal string without exponent."""
    return format(amount, "f")


__all__ = ["ZERO", "coerce_decimal", "parse_money", "format_plain"]
