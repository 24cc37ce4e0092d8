"""Transaction value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from finance_tracker.domain.constants import TRANSACTION_ID_LENGTH


class TransactionType(str, Enum):
    """Direction of a monetary event."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


def new_transaction_id() -> str:
    """Return a short random transaction identifier."""
    return uuid4().hex[:TRANSACTION_ID_LENGTH]


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass(frozen=True, eq=False)
class Transaction:
    """Immutable record of one income or expense event.

    Identity is the ``id`` alone: two transactions sharing an id compare
    equal even if every other field differs.

    Attributes:
        type: Income or expense.
        amount: Strictly positive amount.
        category: Trimmed category name, compared case-insensitively.
        description: Free text, empty when not provided.
        id: Short opaque identifier, generated unless restored.
        created_at: Creation timestamp, generated unless restored.
    """

    type: TransactionType
    amount: Decimal
    category: str
    description: str = ""
    id: str = field(default_factory=new_transaction_id)
    created_at: datetime = field(default_factory=_now)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        sign = "+" if self.is_income else "-"
        return (
            f"[{self.id}] {sign}: {self.category} "
            f"{self.amount:.2f} ({self.description})"
        )


__all__ = ["TransactionType", "Transaction", "new_transaction_id"]
