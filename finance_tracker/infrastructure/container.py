"""Composition root for wiring infrastructure adapters."""

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.notifications import NotificationPort
from finance_tracker.application.ports.user_repository import (
    UserRepositoryPort,
)
from finance_tracker.application.use_cases.authentication import (
    AuthService,
    Session,
)
from finance_tracker.application.use_cases.finance_operations import (
    FinanceService,
)
from finance_tracker.application.use_cases.transaction_files import (
    ExportTransactionsUseCase,
    ImportTransactionsUseCase,
)
from finance_tracker.infrastructure.csv_transactions import (
    CsvTransactionExporter,
    CsvTransactionImporter,
)
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.notifications import (
    ConsoleNotificationService,
)
from finance_tracker.infrastructure.settings import FinanceSettings
from finance_tracker.infrastructure.user_repository_factory import (
    create_user_repository,
)


def build_settings() -> FinanceSettings:
    """Return settings sourced from the environment."""
    return FinanceSettings.from_env()


def build_database_adapter(
    settings: FinanceSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or build_settings()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_user_repository(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> UserRepositoryPort:
    """Return the configured user repository, loaded from storage."""
    resolved = settings or build_settings()
    repository = create_user_repository(
        resolved,
        db_port=db_port,
        logger=get_app_logger(),
    )
    repository.load()
    return repository


def build_notification_service(
    settings: FinanceSettings | None = None,
) -> NotificationPort:
    """Return the console notification dispatcher."""
    resolved = settings or build_settings()
    return ConsoleNotificationService(use_colors=resolved.use_colors)


def build_auth_service(repository: UserRepositoryPort) -> AuthService:
    return AuthService(repository, logger=get_app_logger())


def build_finance_service(
    session: Session,
    notifications: NotificationPort,
    settings: FinanceSettings | None = None,
) -> FinanceService:
    """Return a finance service bound to ``session``."""
    resolved = settings or build_settings()
    return FinanceService(
        session,
        notifications,
        logger=get_app_logger(),
        warning_threshold=resolved.budget_warning_threshold,
    )


def build_export_use_case(
    finance_service: FinanceService,
) -> ExportTransactionsUseCase:
    return ExportTransactionsUseCase(
        finance_service,
        CsvTransactionExporter(),
        logger=get_app_logger(),
    )


def build_import_use_case(
    finance_service: FinanceService,
) -> ImportTransactionsUseCase:
    return ImportTransactionsUseCase(
        finance_service,
        CsvTransactionImporter(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_user_repository",
    "build_notification_service",
    "build_auth_service",
    "build_finance_service",
    "build_export_use_case",
    "build_import_use_case",
]
