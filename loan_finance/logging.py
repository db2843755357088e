"""Logging setup for applications embedding loan-finance.

Package modules log through ``logging.getLogger(__name__)`` and attach
record context (``loan_id``, ``user_id``, counts) as ``extra=`` fields.
The JSON formatter lifts those fields to top-level keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from loan_finance.config import DEFAULT_CONFIG, LoanFinanceConfig
from loan_finance.serialization import serialize_value

logger = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def setup_logging(
    config: LoanFinanceConfig | None = None,
    *,
    level: str | None = None,
    format_type: str = "standard",
) -> None:
    """Configure the root logger for loan-finance.

    Parameters
    ----------
    config : LoanFinanceConfig | None
        Source of ``log_level``; defaults to ``DEFAULT_CONFIG``.
    level : str | None
        Explicit level overriding ``config.log_level``. Unknown names fall
        back to INFO.
    format_type : str
        Format type: "standard" or "json".
    """
    config = config or DEFAULT_CONFIG
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("loan_finance").setLevel(log_level)

    # Babel and Faker are chatty at DEBUG
    logging.getLogger("babel").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)

    logger.debug("Logging configured", extra={"settings": config.to_dict()})


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra=`` context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in log_data:
                log_data[key] = serialize_value(value)

        return json.dumps(log_data, default=str)
