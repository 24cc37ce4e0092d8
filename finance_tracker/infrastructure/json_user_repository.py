"""JSON-file user repository.

The file holds one array of users::

    [{"login": "alice", "password": "...",
      "wallet": {"transactions": [{"id": "1a2b3c4d", "type": "EXPENSE",
                                   "amount": "150.50", "category": "Food",
                                   "description": "", "createdAt":
                                   "2024-01-15T10:30:00"}],
                 "categoryBudgets": {"Food": "5000"}}}]

Amounts are written as decimal strings so they read back exactly; plain
JSON numbers are accepted on read as well.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
import json
from pathlib import Path

from finance_tracker.domain.models import (
    Transaction,
    TransactionType,
    User,
    Wallet,
)
from finance_tracker.infrastructure.in_memory_user_repository import (
    InMemoryUserRepository,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.decimal_utils import coerce_decimal, format_plain


def user_to_dict(user: User) -> dict:
    """Serialize a user from an immutable wallet snapshot."""
    snapshot = user.wallet.snapshot()
    return {
        "login": user.login,
        "password": user.password,
        "wallet": {
            "transactions": [
                {
                    "id": t.id,
                    "type": t.type.value,
                    "amount": format_plain(t.amount),
                    "category": t.category,
                    "description": t.description,
                    "createdAt": t.created_at.isoformat(),
                }
                for t in snapshot.transactions
            ],
            "categoryBudgets": {
                category: format_plain(limit)
                for category, limit in snapshot.category_budgets.items()
            },
        },
    }


def user_from_dict(payload: dict) -> User:
    """Restore a user; a missing wallet becomes an empty one.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a type, amount or timestamp cannot be parsed.
    """
    wallet_payload = payload.get("wallet") or {}
    transactions = [
        Transaction(
            id=item["id"],
            type=TransactionType(item["type"]),
            amount=coerce_decimal(item["amount"]),
            category=item["category"],
            description=item.get("description") or "",
            created_at=datetime.fromisoformat(item["createdAt"]),
        )
        for item in wallet_payload.get("transactions") or []
    ]
    budgets = {
        category: coerce_decimal(limit)
        for category, limit in (
            wallet_payload.get("categoryBudgets") or {}
        ).items()
    }
    return User(
        login=payload["login"],
        password=payload["password"],
        wallet=Wallet(transactions, budgets),
    )


class JsonUserRepository(InMemoryUserRepository):
    """User repository persisted to a single JSON document."""

    def __init__(self, data_file: Path | str, logger=None) -> None:
        """Initialize the repository.

        Args:
            data_file: JSON file holding every user.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        super().__init__()
        self._data_file = Path(data_file)
        self._logger = logger or get_app_logger()

    @property
    def data_file(self) -> Path:
        return self._data_file

    def flush(self) -> None:
        """Write every user to the data file.

        Raises:
            OSError: If the file cannot be written.
        """
        payload = [user_to_dict(user) for user in self.find_all()]
        self._data_file.parent.mkdir(parents=True, exist_ok=True)
        with self._data_file.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)
        self._logger.info(
            f"Saved {len(payload)} users to {self._data_file}"
        )

    def load(self) -> None:
        """Replace in-memory users with the file content.

        A missing file leaves the repository unchanged. Unreadable or
        malformed files are logged and leave it unchanged as well.
        """
        if not self._data_file.exists():
            return
        try:
            with self._data_file.open("r", encoding="utf-8") as handle:
                payload = json.load(handle, parse_float=Decimal)
        except OSError as exc:
            self._logger.error(
                f"Failed to read users from {self._data_file}: {exc}"
            )
            return
        except ValueError as exc:
            self._logger.error(
                f"Failed to parse users file {self._data_file}: {exc}"
            )
            return
        if payload is None:
            return
        if not isinstance(payload, list):
            self._logger.error(
                f"Failed to parse users file {self._data_file}: "
                "expected a list of users"
            )
            return
        try:
            users = [user_from_dict(item) for item in payload]
        except (
            AttributeError,
            InvalidOperation,
            KeyError,
            TypeError,
            ValueError,
        ) as exc:
            self._logger.error(
                f"Failed to parse users file {self._data_file}: {exc}"
            )
            return
        self._replace_all(users)
        self._logger.info(
            f"Loaded {len(users)} users from {self._data_file}"
        )


__all__ = ["JsonUserRepository", "user_to_dict", "user_from_dict"]
