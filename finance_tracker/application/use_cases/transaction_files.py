"""Use cases to export and import the session user's ledger."""

from pathlib import Path

from finance_tracker.application.ports.transaction_files import (
    ImportResult,
    TransactionExporterPort,
    TransactionImporterPort,
)
from finance_tracker.application.use_cases.finance_operations import (
    FinanceService,
)
from finance_tracker.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class ExportTransactionsUseCase:
    """Write every transaction of the current wallet to a file."""

    def __init__(
        self,
        finance_service: FinanceService,
        exporter: TransactionExporterPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            finance_service: Service bound to the current session.
            exporter: Port writing the ledger format.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger receiving user action records.
        """
        self._finance_service = finance_service
        self._exporter = exporter
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def default_file_name(self) -> str:
        """Return ``transactions_<login>.<ext>`` for the session user."""
        session = self._finance_service.session
        owner = session.user.login if session.is_authenticated else "export"
        return f"transactions_{owner}.{self._exporter.file_extension}"

    def execute(self, path: Path | str) -> int:
        """Export the current wallet.

        Args:
            path: Destination file; parent directories are created.

        Returns:
            int: Number of exported transactions. Nothing is written when
            the wallet is empty.

        Raises:
            NotAuthenticatedError: If no user is logged in.
            OSError: If the file cannot be written.
        """
        transactions = self._finance_service.get_all_transactions()
        if not transactions:
            self._logger.info("No transactions to export")
            return 0

        target = Path(path)
        self._exporter.export(transactions, target)
        self._usage_logger.info(
            f"Exported {len(transactions)} transactions to {target} "
            f"({self._exporter.format_name})"
        )
        return len(transactions)


class ImportTransactionsUseCase:
    """Read a ledger file and append its records to the current wallet."""

    def __init__(
        self,
        finance_service: FinanceService,
        importer: TransactionImporterPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        self._finance_service = finance_service
        self._importer = importer
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def execute(self, path: Path | str) -> ImportResult:
        """Import a ledger file.

        Rejected records are reported in the result and skipped; valid
        records are appended even when others fail.

        Args:
            path: Source file.

        Returns:
            ImportResult: Parsed transactions with per-record errors.

        Raises:
            FileNotFoundError: If the file does not exist.
            NotAuthenticatedError: If no user is logged in.
        """
        result = self._importer.import_file(Path(path))
        for error in result.errors:
            self._logger.warning(f"Import of {path}: {error}")
        imported = self._finance_service.import_transactions(
            result.transactions
        )
        self._usage_logger.info(
            f"Imported {imported} of {result.total_lines} records from {path}"
        )
        return result


__all__ = ["ExportTransactionsUseCase", "ImportTransactionsUseCase"]
