"""Shared types for grabbit.

This module defines the job history types and exceptions used by both
the property walk and the job configuration builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class GrabbitError(Exception):
    """Base exception for grabbit errors."""


class ConfigurationError(GrabbitError, ValueError):
    """Invalid server or path configuration."""


class HistoryIntegrityError(GrabbitError):
    """Job execution history is inconsistent.

    Raised when a record claims to be COMPLETED but carries no end time,
    which would otherwise produce a corrupt delta start date.
    """


class BatchStatus(str, Enum):
    """Status of a batch job execution."""

    STARTING = "STARTING"
    STARTED = "STARTED"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"
    FAILED = "FAILED"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class JobExecutionRecord:
    """One historical execution of a client job.

    Attributes:
        path: Root path the execution targeted.
        status: Final (or current) status of the execution.
        end_time: When the execution ended; only meaningful when COMPLETED.
            Naive values are taken as UTC.
        execution_id: Identifier assigned by the job orchestrator, if known.
    """

    path: str
    status: BatchStatus
    end_time: datetime | None = None
    execution_id: int | None = None

    def __post_init__(self) -> None:
        """Normalize naive end times to UTC."""
        if self.end_time is not None and self.end_time.tzinfo is None:
            object.__setattr__(self, "end_time", self.end_time.replace(tzinfo=timezone.utc))

    @property
    def is_successful(self) -> bool:
        """Check if the execution completed."""
        return self.status is BatchStatus.COMPLETED
