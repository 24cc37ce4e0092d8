"""Semicolon-delimited CSV export and import of transaction ledgers."""

from collections.abc import Sequence
import csv
from datetime import datetime
from pathlib import Path

from finance_tracker.application.ports.transaction_files import (
    ImportResult,
    TransactionExporterPort,
    TransactionImporterPort,
)
from finance_tracker.domain.models import Transaction, TransactionType
from finance_tracker.utils.decimal_utils import format_plain, parse_money

DELIMITER = ";"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HEADER = ("ID", "Type", "Amount", "Category", "Date", "Description")
FIELD_COUNT = len(HEADER)

TYPE_LABELS = {
    TransactionType.INCOME: "Income",
    TransactionType.EXPENSE: "Expense",
}

_TYPE_BY_LABEL = {
    "income": TransactionType.INCOME,
    "expense": TransactionType.EXPENSE,
}

_FALLBACK_DATE_FORMATS = ("%Y-%m-%d %H:%M",)


def _format_row(transaction: Transaction) -> list[str]:
    return [
        transaction.id,
        TYPE_LABELS[transaction.type],
        format_plain(transaction.amount),
        transaction.category,
        transaction.created_at.strftime(DATE_FORMAT),
        transaction.description or "",
    ]


def parse_date_time(raw: str) -> datetime:
    """Parse a ledger timestamp.

    Accepts ``YYYY-MM-DD HH:MM:SS``, ISO-8601 local date-times and
    ``YYYY-MM-DD HH:MM``.

    Raises:
        ValueError: If none of the formats match.
    """
    try:
        return datetime.strptime(raw, DATE_FORMAT)
    except ValueError:
        pass
    if "T" in raw:
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            pass
    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {raw}")


def parse_row(fields: list[str]) -> Transaction:
    """Turn one ledger record into a transaction.

    Raises:
        ValueError: With a readable reason when the record is invalid.
    """
    if len(fields) < FIELD_COUNT:
        raise ValueError(
            f"Not enough fields (expected {FIELD_COUNT}, got {len(fields)})"
        )
    transaction_id, raw_type, raw_amount, category, raw_date = (
        value.strip() for value in fields[:5]
    )
    description = fields[5].strip()

    transaction_type = _TYPE_BY_LABEL.get(raw_type.lower())
    if transaction_type is None:
        raise ValueError(f"Unknown transaction type: {raw_type}")
    amount = parse_money(raw_amount)
    if amount <= 0:
        raise ValueError("Amount must be positive")
    created_at = parse_date_time(raw_date)
    if not category:
        raise ValueError("Category must not be empty")

    return Transaction(
        id=transaction_id,
        type=transaction_type,
        amount=amount,
        category=category,
        description=description,
        created_at=created_at,
    )


def _ensure_utf8(fields: list[str]) -> None:
    """Reject a record holding bytes that were not valid UTF-8.

    Raises:
        ValueError: If any field carries an escaped undecodable byte.
    """
    for value in fields:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("Invalid UTF-8 data") from None


def _is_header(fields: list[str]) -> bool:
    lowered = [value.strip().lower() for value in fields]
    return "id" in lowered and "type" in lowered


class CsvTransactionExporter(TransactionExporterPort):
    """Write transactions as a ``;``-delimited UTF-8 ledger."""

    file_extension = "csv"
    format_name = "CSV"

    def export(self, transactions: Sequence[Transaction], path: Path) -> None:
        """Write the header and one record per transaction.

        Fields containing the delimiter, a quote or a newline are quoted.

        Raises:
            OSError: If the file cannot be written.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(
                handle,
                delimiter=DELIMITER,
                quoting=csv.QUOTE_MINIMAL,
                lineterminator="\n",
            )
            writer.writerow(HEADER)
            for transaction in transactions:
                writer.writerow(_format_row(transaction))


class CsvTransactionImporter(TransactionImporterPort):
    """Read a ledger written by :class:`CsvTransactionExporter`."""

    def import_file(self, path: Path) -> ImportResult:
        """Parse every record of ``path``.

        Blank records and a leading header are skipped. Invalid records,
        including records that are not valid UTF-8 or that the CSV reader
        rejects, are reported as ``"Line N: reason"``, N counting data
        records.

        Returns:
            ImportResult: Parsed transactions and per-record errors.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        transactions: list[Transaction] = []
        errors: list[str] = []
        total_lines = 0
        first_record = True
        # Undecodable bytes survive as surrogates and fail only their record.
        with path.open(
            "r",
            encoding="utf-8",
            errors="surrogateescape",
            newline="",
        ) as handle:
            reader = csv.reader(handle, delimiter=DELIMITER)
            while True:
                try:
                    fields = next(reader)
                except StopIteration:
                    break
                except csv.Error as exc:
                    first_record = False
                    total_lines += 1
                    errors.append(f"Line {total_lines}: {exc}")
                    continue
                if not any(value.strip() for value in fields):
                    continue
                if first_record:
                    first_record = False
                    if _is_header(fields):
                        continue
                total_lines += 1
                try:
                    _ensure_utf8(fields)
                    transactions.append(parse_row(fields))
                except ValueError as exc:
                    errors.append(f"Line {total_lines}: {exc}")

        return ImportResult(
            transactions=transactions,
            total_lines=total_lines,
            successful_lines=len(transactions),
            errors=errors,
        )


__all__ = [
    "CsvTransactionExporter",
    "CsvTransactionImporter",
    "parse_date_time",
    "parse_row",
]
