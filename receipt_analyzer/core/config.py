"""
Runtime configuration read from environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "receipt_items"
DEFAULT_LOG_LEVEL = "INFO"


def _log_level(value: Optional[str]) -> str:
    """Known logging level name, or INFO for anything else."""
    name = (value or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        logger.warning("Unknown LOG_LEVEL %r, using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return name


@dataclass(frozen=True)
class Settings:
    """Settings for the receipt function and CLI."""
    timestream_database: Optional[str]
    timestream_table: Optional[str]
    region: Optional[str]
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            timestream_database=os.getenv("TIMESTREAM_DATABASE_NAME"),
            timestream_table=os.getenv("TIMESTREAM_TABLE_NAME", DEFAULT_TABLE_NAME),
            region=os.getenv("AWS_REGION") or None,
            log_level=_log_level(os.getenv("LOG_LEVEL")),
        )

    def require_sink(self):
        """Raise if the Timestream target is not configured."""
        missing = [name for name, value in (
            ("TIMESTREAM_DATABASE_NAME", self.timestream_database),
            ("TIMESTREAM_TABLE_NAME", self.timestream_table),
        ) if not value]
        if missing:
            raise ConfigurationError(f"Missing environment variable(s): {', '.join(missing)}")
