"""Application use cases package."""

from .authentication import AuthService, Session
from .finance_operations import FinanceService
from .results import OperationResult, attempt
from .transaction_files import (
    ExportTransactionsUseCase,
    ImportTransactionsUseCase,
)

__all__ = [
    "AuthService",
    "Session",
    "FinanceService",
    "OperationResult",
    "attempt",
    "ExportTransactionsUseCase",
    "ImportTransactionsUseCase",
]
