"""Core module - Shared configuration, dates, and history types."""

from grabbit.core.config import (
    DEFAULT_BATCH_SIZE,
    EXCLUDE_PATHS_DELIMITER,
    WORKFLOW_CONFIGS_DELIMITER,
    GrabbitConfiguration,
    PathConfiguration,
    ServerConfig,
)
from grabbit.core.dates import get_date_from_iso_string, get_iso_string_from_date
from grabbit.core.types import (
    BatchStatus,
    ConfigurationError,
    GrabbitError,
    HistoryIntegrityError,
    JobExecutionRecord,
)

__all__ = [
    # Config
    "DEFAULT_BATCH_SIZE",
    "EXCLUDE_PATHS_DELIMITER",
    "GrabbitConfiguration",
    "PathConfiguration",
    "ServerConfig",
    "WORKFLOW_CONFIGS_DELIMITER",
    # Dates
    "get_date_from_iso_string",
    "get_iso_string_from_date",
    # Types
    "BatchStatus",
    "ConfigurationError",
    "GrabbitError",
    "HistoryIntegrityError",
    "JobExecutionRecord",
]
