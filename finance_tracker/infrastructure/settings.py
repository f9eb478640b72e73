"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from finance_tracker.domain.constants import (
    DEFAULT_DUE_SOON_DAYS,
    DEFAULT_RENEWAL_WINDOW_DAYS,
    DEFAULT_TREND_MONTHS,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.utils import get_project_root


@dataclass(frozen=True)
class FinanceSettings:
    """Runtime settings for the finance tracker.

    Attributes:
        db_url: SQLAlchemy URL of the record store database.
        trend_months: Number of months pre-seeded in trend series.
        renewal_window_days: Days ahead scanned for upcoming renewals.
        due_soon_days: Threshold for due-soon notifications.
    """

    db_url: str
    trend_months: int = DEFAULT_TREND_MONTHS
    renewal_window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            FinanceSettings: Settings sourced from the environment.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("FINANCE_DB_URL", "").strip() or cls._default_db_url()
        return cls(
            db_url=db_url,
            trend_months=cls._read_int(
                "FINANCE_TREND_MONTHS", DEFAULT_TREND_MONTHS, logger
            ),
            renewal_window_days=cls._read_int(
                "FINANCE_RENEWAL_WINDOW_DAYS",
                DEFAULT_RENEWAL_WINDOW_DAYS,
                logger,
            ),
            due_soon_days=cls._read_int(
                "FINANCE_DUE_SOON_DAYS", DEFAULT_DUE_SOON_DAYS, logger
            ),
        )

    @staticmethod
    def _default_db_url() -> str:
        """Return a SQLite database under the project ``data/`` directory."""
        data_dir = get_project_root() / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{data_dir / 'finance.db'}"

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a non-negative integer, falling back to the default.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid integer for {name}: '{raw}'. Using {default}.")
            return default
        if value < 0:
            logger.warning(f"Negative value for {name}: {value}. Using {default}.")
            return default
        return value


__all__ = ["FinanceSettings"]
