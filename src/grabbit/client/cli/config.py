"""File and logging utilities for the grabbit CLI.

This module provides shared functions used across CLI commands.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from grabbit.core.dates import get_date_from_iso_string
from grabbit.core.types import BatchStatus, JobExecutionRecord

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class HistoryFileError(Exception):
    """A job history file could not be read."""


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes records to stderr through click.

    The stream is looked up on every record so output follows
    click's stream redirection.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure the grabbit logger for CLI use.

    Args:
        verbose: Log DEBUG messages instead of INFO and above.
    """
    grabbit_logger = logging.getLogger("grabbit")
    grabbit_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Replace handlers installed by a previous invocation
    for handler in grabbit_logger.handlers[:]:
        if isinstance(handler, ClickEchoHandler):
            grabbit_logger.removeHandler(handler)

    echo_handler = ClickEchoHandler()
    echo_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    grabbit_logger.addHandler(echo_handler)


def record_from_dict(data: dict[str, Any]) -> JobExecutionRecord:
    """Create a JobExecutionRecord from a history file entry.

    Entries look like {"path": ..., "status": "COMPLETED",
    "endTime": "2015-06-01T10:15:30.000Z", "executionId": 3}.
    """
    end_time = data.get("endTime")
    return JobExecutionRecord(
        path=data["path"],
        status=BatchStatus(data["status"].upper()),
        end_time=get_date_from_iso_string(end_time) if end_time else None,
        execution_id=data.get("executionId"),
    )


def load_history(path: Path) -> list[JobExecutionRecord]:
    """Load job execution history from a JSON file.

    Raises:
        HistoryFileError: If the file is missing or malformed.
    """
    try:
        entries = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise HistoryFileError(f"Cannot read job history {path}: {e}") from e

    if not isinstance(entries, list):
        raise HistoryFileError(f"Job history {path} must be a JSON list")

    try:
        return [record_from_dict(entry) for entry in entries]
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise HistoryFileError(f"Invalid entry in job history {path}: {e}") from e
