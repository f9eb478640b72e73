"""CLI adapter creating the record store tables."""

import sys

from finance_tracker.application.ports.record_store import RecordStoreError
from finance_tracker.infrastructure.container import build_database_adapter
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.record_store import ensure_schema


def main() -> None:
    """Create the transactions and subscriptions tables if missing."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    try:
        ensure_schema(db_adapter)
    except RecordStoreError as exc:
        logger.error(str(exc))
        sys.exit(1)
    logger.info("Record store schema is ready")
    print("Record store tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
