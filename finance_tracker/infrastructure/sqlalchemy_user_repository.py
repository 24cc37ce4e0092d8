"""SQLAlchemy-backed user repository."""

from collections import defaultdict
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from finance_tracker.application.ports.database import DatabaseEnginePort
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


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS finance_users (
        login TEXT PRIMARY KEY,
        password TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS finance_transactions (
        id TEXT NOT NULL,
        login TEXT NOT NULL,
        position INTEGER NOT NULL,
        type TEXT NOT NULL,
        amount TEXT NOT NULL,
        category TEXT NOT NULL,
        description TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS finance_budgets (
        login TEXT NOT NULL,
        category TEXT NOT NULL,
        amount TEXT NOT NULL,
        PRIMARY KEY (login, category)
    )
    """,
)

DELETE_TABLES_SQL = (
    "DELETE FROM finance_budgets",
    "DELETE FROM finance_transactions",
    "DELETE FROM finance_users",
)

INSERT_USER_SQL = text(
    """
    INSERT INTO finance_users (login, password)
    VALUES (:login, :password)
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO finance_transactions (
        id,
        login,
        position,
        type,
        amount,
        category,
        description,
        created_at
    )
    VALUES (
        :id,
        :login,
        :position,
        :type,
        :amount,
        :category,
        :description,
        :created_at
    )
    """
)

INSERT_BUDGET_SQL = text(
    """
    INSERT INTO finance_budgets (login, category, amount)
    VALUES (:login, :category, :amount)
    """
)

SELECT_USERS_SQL = text("SELECT login, password FROM finance_users")

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, login, type, amount, category, description, created_at
    FROM finance_transactions
    ORDER BY login, position
    """
)

SELECT_BUDGETS_SQL = text(
    "SELECT login, category, amount FROM finance_budgets"
)


class SqlAlchemyUserRepository(InMemoryUserRepository):
    """User repository persisted to three relational tables.

    Amounts are stored as text so Decimal values survive exactly. Every
    flush rewrites the tables inside one transaction.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        super().__init__()
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._prepared = False

    def prepare_storage(self) -> None:
        """Ensure the finance tables exist."""
        if self._prepared:
            return
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)
        self._prepared = True

    def flush(self) -> None:
        """Replace stored users with the in-memory ones.

        Raises:
            OSError: If the database rejects the write; the in-memory
                users are left untouched.
        """
        users: list[dict] = []
        transactions: list[dict] = []
        budgets: list[dict] = []
        for user in self.find_all():
            snapshot = user.wallet.snapshot()
            users.append({"login": user.login, "password": user.password})
            for position, transaction in enumerate(snapshot.transactions):
                transactions.append(
                    {
                        "id": transaction.id,
                        "login": user.login,
                        "position": position,
                        "type": transaction.type.value,
                        "amount": format_plain(transaction.amount),
                        "category": transaction.category,
                        "description": transaction.description,
                        "created_at": transaction.created_at.isoformat(),
                    }
                )
            for category, limit in snapshot.category_budgets.items():
                budgets.append(
                    {
                        "login": user.login,
                        "category": category,
                        "amount": format_plain(limit),
                    }
                )

        try:
            self.prepare_storage()
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                for statement in DELETE_TABLES_SQL:
                    conn.exec_driver_sql(statement)
                if users:
                    conn.execute(INSERT_USER_SQL, users)
                if transactions:
                    conn.execute(INSERT_TRANSACTION_SQL, transactions)
                if budgets:
                    conn.execute(INSERT_BUDGET_SQL, budgets)
        except SQLAlchemyError as exc:
            raise OSError(f"Failed to write users to database: {exc}") from exc
        self._logger.info(
            f"Saved {len(users)} users and {len(transactions)} transactions"
        )

    def load(self) -> None:
        """Replace in-memory users with the stored ones."""
        self.prepare_storage()
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            user_rows = conn.execute(SELECT_USERS_SQL).all()
            transaction_rows = conn.execute(SELECT_TRANSACTIONS_SQL).all()
            budget_rows = conn.execute(SELECT_BUDGETS_SQL).all()

        transactions: dict[str, list[Transaction]] = defaultdict(list)
        for row in transaction_rows:
            transactions[row.login].append(
                Transaction(
                    id=row.id,
                    type=TransactionType(row.type),
                    amount=coerce_decimal(row.amount),
                    category=row.category,
                    description=row.description,
                    created_at=datetime.fromisoformat(row.created_at),
                )
            )
        budgets: dict[str, dict] = defaultdict(dict)
        for row in budget_rows:
            budgets[row.login][row.category] = coerce_decimal(row.amount)

        users = [
            User(
                login=row.login,
                password=row.password,
                wallet=Wallet(transactions[row.login], budgets[row.login]),
            )
            for row in user_rows
        ]
        self._replace_all(users)
        self._logger.info(f"Loaded {len(users)} users from database")


__all__ = ["SqlAlchemyUserRepository"]
