"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

import dotenv

from finance_tracker.domain.constants import BUDGET_WARNING_THRESHOLD
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.utils import get_project_root

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _default_data_file() -> Path:
    return get_project_root() / "data" / "users.json"


def _default_db_url() -> str:
    return f"sqlite:///{get_project_root() / 'data' / 'finance.db'}"


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for storage and notification behaviour.

    Attributes:
        backend: Storage backend identifier (json or sqlalchemy).
        data_file: JSON file holding every user.
        db_url: SQLAlchemy URL used by the sqlalchemy backend.
        budget_warning_threshold: Usage percent raising a budget warning.
        currency: Currency label used by the user interfaces.
        use_colors: Whether console notifications use ANSI colors.
    """

    backend: str = "json"
    data_file: Path = Path("data/users.json")
    db_url: str = "sqlite:///data/finance.db"
    budget_warning_threshold: float = BUDGET_WARNING_THRESHOLD
    currency: str = "RUB"
    use_colors: bool = True

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from ``.env`` and environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("FINANCE_BACKEND", "json").strip().lower()
        raw_file = os.getenv("FINANCE_DATA_FILE")
        data_file = (
            Path(raw_file).expanduser() if raw_file else _default_data_file()
        )
        db_url = os.getenv("FINANCE_DB_URL") or _default_db_url()
        threshold = cls._parse_threshold(
            os.getenv("FINANCE_BUDGET_WARNING_THRESHOLD"),
            logger=logger,
        )
        currency = os.getenv("FINANCE_CURRENCY", "RUB").strip() or "RUB"
        use_colors = cls._parse_flag(
            os.getenv("FINANCE_USE_COLORS"),
            default=True,
            logger=logger,
        )
        return cls(
            backend=backend,
            data_file=data_file,
            db_url=db_url,
            budget_warning_threshold=threshold,
            currency=currency,
            use_colors=use_colors,
        )

    @staticmethod
    def _parse_threshold(raw_value: str | None, logger) -> float:
        """Parse the warning threshold, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            float: Threshold within (0, 100].
        """
        if raw_value is None or not raw_value.strip():
            return BUDGET_WARNING_THRESHOLD
        try:
            value = float(raw_value.strip())
        except ValueError:
            logger.warning(
                f"Invalid FINANCE_BUDGET_WARNING_THRESHOLD: {raw_value}"
            )
            return BUDGET_WARNING_THRESHOLD
        if not 0 < value <= 100:
            logger.warning(
                f"FINANCE_BUDGET_WARNING_THRESHOLD out of range: {raw_value}"
            )
            return BUDGET_WARNING_THRESHOLD
        return value

    @staticmethod
    def _parse_flag(raw_value: str | None, default: bool, logger) -> bool:
        if raw_value is None or not raw_value.strip():
            return default
        normalized = raw_value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean flag value: {raw_value}")
        return default


__all__ = ["FinanceSettings"]
