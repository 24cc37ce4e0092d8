"""Validation of raw console input."""

from datetime import date, datetime
from decimal import Decimal
import re
import unicodedata

from finance_tracker.domain.errors import ValidationError
from finance_tracker.utils.decimal_utils import parse_money

LOGIN_MIN_LENGTH = 2
CATEGORY_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200
DATE_INPUT_FORMAT = "%d.%m.%Y"

_LOGIN_PATTERN = re.compile(r"^\w+$")
_CONFIRMATIONS = {"y", "yes", "1"}


def _strip_control_chars(value: str) -> str:
    return "".join(
        char for char in value if not unicodedata.category(char).startswith("C")
    )


class InputValidator:
    """Parse and check values typed at the console.

    Every check raises :class:`ValidationError` with a message suitable
    for showing to the user.
    """

    def validate_menu_choice(
        self,
        raw: str | None,
        min_value: int,
        max_value: int,
    ) -> int:
        if raw is None or not raw.strip():
            raise ValidationError("Enter a menu item number")
        try:
            choice = int(raw.strip())
        except ValueError as exc:
            raise ValidationError("Enter a whole number") from exc
        if not min_value <= choice <= max_value:
            raise ValidationError(
                f"Choose an item from {min_value} to {max_value}"
            )
        return choice

    def validate_not_empty(self, raw: str | None, field: str) -> str:
        """Return ``raw`` trimmed and without control characters."""
        if raw is None or not raw.strip():
            raise ValidationError.for_field(field, "must not be empty")
        cleaned = _strip_control_chars(raw).strip()
        if not cleaned:
            raise ValidationError.for_field(field, "must not be empty")
        return cleaned

    def validate_amount(self, raw: str | None, field: str = "amount") -> Decimal:
        """Parse a strictly positive amount; ``,`` is accepted as separator."""
        if raw is None or not raw.strip():
            raise ValidationError.for_field(field, "must not be empty")
        try:
            amount = parse_money(raw)
        except ValueError as exc:
            raise ValidationError.for_field(
                field,
                "invalid number format, use digits and a dot or comma",
            ) from exc
        if amount <= 0:
            raise ValidationError.for_field(field, "must be positive")
        return amount

    def validate_password(self, raw: str | None) -> str:
        if not raw:
            raise ValidationError.for_field("password", "must not be empty")
        return raw

    def validate_login(self, raw: str | None) -> str:
        """Check a new login: two or more letters, digits or underscores."""
        login = self.validate_not_empty(raw, "login")
        if len(login) < LOGIN_MIN_LENGTH:
            raise ValidationError.for_field(
                "login",
                f"must contain at least {LOGIN_MIN_LENGTH} characters",
            )
        if not _LOGIN_PATTERN.match(login):
            raise ValidationError.for_field(
                "login",
                "may contain only letters, digits and underscores",
            )
        return login

    def validate_category(self, raw: str | None) -> str:
        category = self.validate_not_empty(raw, "category")
        if len(category) > CATEGORY_MAX_LENGTH:
            raise ValidationError.for_field(
                "category",
                f"must not be longer than {CATEGORY_MAX_LENGTH} characters",
            )
        return category

    def validate_description(self, raw: str | None) -> str:
        if raw is None:
            return ""
        description = raw.strip()
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError.for_field(
                "description",
                f"must not be longer than {DESCRIPTION_MAX_LENGTH} characters",
            )
        return description

    def validate_confirmation(self, raw: str | None) -> bool:
        if raw is None:
            return False
        return raw.strip().lower() in _CONFIRMATIONS

    def validate_file_path(self, raw: str | None) -> str:
        return self.validate_not_empty(raw, "file path")

    def validate_date(self, raw: str | None, field: str = "date") -> date:
        """Parse a ``dd.mm.yyyy`` date."""
        value = self.validate_not_empty(raw, field)
        try:
            return datetime.strptime(value, DATE_INPUT_FORMAT).date()
        except ValueError as exc:
            raise ValidationError.for_field(
                field,
                "invalid date format, use dd.mm.yyyy",
            ) from exc


__all__ = ["InputValidator"]
