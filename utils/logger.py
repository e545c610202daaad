import logging
import os
from typing import Optional


def _get_log_level() -> int:
     """Read LOG_LEVEL from the environment, defaulting to INFO."""
     level_str = os.getenv("LOG_LEVEL", "INFO").upper()
     return getattr(logging, level_str, logging.INFO)


# Configured once, on first import
logging.basicConfig(
     level=_get_log_level(),
     format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)

logger = logging.getLogger("kos_app")
logger.setLevel(_get_log_level())


def log_db_operation(
     operation: str,
     table: str,
     success: bool,
     rows: Optional[int] = None,
     error: Optional[str] = None,
) -> None:
     """Uniform log line for database writes.

     Args:
          operation: "SELECT", "INSERT", "UPDATE" or "DELETE"
          table: table name
          success: whether the statement succeeded
          rows: affected row count (optional)
          error: error message when the statement failed
     """
     status = "SUCCESS" if success else "FAILED"
     base_msg = f"[DB] {operation} {table} - {status}"

     if rows is not None:
          base_msg += f" (rows={rows})"

     if error and not success:
          base_msg += f" | error={error}"

     if success:
          logger.info(base_msg)
     else:
          logger.error(base_msg)
