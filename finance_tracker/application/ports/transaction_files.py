"""Ports for exporting and importing transaction ledgers."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from finance_tracker.domain.models import Transaction


@dataclass(frozen=True)
class ImportResult:
    """Outcome of reading a ledger file.

    Attributes:
        transactions: Records parsed successfully, in file order.
        total_lines: Number of data records examined.
        successful_lines: Number of records turned into transactions.
        errors: One message per rejected record.
    """

    transactions: list[Transaction] = field(default_factory=list)
    total_lines: int = 0
    successful_lines: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class TransactionExporterPort(Protocol):
    """Port writing transactions to a file."""

    file_extension: str
    format_name: str

    def export(self, transactions: Sequence[Transaction], path: Path) -> None:
        """Write the transactions to ``path``."""


class TransactionImporterPort(Protocol):
    """Port reading transactions from a file."""

    def import_file(self, path: Path) -> ImportResult:
        """Parse ``path`` and return the parsed transactions and errors."""


__all__ = [
    "ImportResult",
    "TransactionExporterPort",
    "TransactionImporterPort",
]
