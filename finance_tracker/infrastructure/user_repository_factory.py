"""Factory helpers to select the user repository backend."""

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.user_repository import (
    UserRepositoryPort,
)
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.json_user_repository import (
    JsonUserRepository,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.settings import FinanceSettings
from finance_tracker.infrastructure.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)


def create_user_repository(
    settings: FinanceSettings,
    db_port: DatabaseEnginePort | None = None,
    logger=None,
) -> UserRepositoryPort:
    """Return a user repository implementation based on configuration.

    Args:
        settings: Settings naming the backend and its location.
        db_port: Optional engine port for the sqlalchemy backend.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        UserRepositoryPort: Concrete repository, not yet loaded.

    Raises:
        ValueError: If the backend is not supported.
    """
    resolved_logger = logger or get_app_logger()
    selected_backend = (settings.backend or "json").strip().lower()

    if selected_backend == "json":
        return JsonUserRepository(settings.data_file, logger=resolved_logger)

    if selected_backend == "sqlalchemy":
        resolved_db = db_port or SqlAlchemyDatabaseEngineAdapter(
            settings.db_url
        )
        return SqlAlchemyUserRepository(resolved_db, logger=resolved_logger)

    raise ValueError(
        "Unsupported finance backend: "
        f"{selected_backend}. Expected json or sqlalchemy."
    )


__all__ = ["create_user_repository"]
