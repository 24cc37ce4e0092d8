"""Application ports package."""

from .database import DatabaseEnginePort
from .notifications import NotificationPort
from .transaction_files import (
    ImportResult,
    TransactionExporterPort,
    TransactionImporterPort,
)
from .user_repository import UserRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "NotificationPort",
    "ImportResult",
    "TransactionExporterPort",
    "TransactionImporterPort",
    "UserRepositoryPort",
]
