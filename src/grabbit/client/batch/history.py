"""Lookup of prior job executions for delta transfers."""

from __future__ import annotations

from collections.abc import Iterable

from grabbit.core.types import HistoryIntegrityError, JobExecutionRecord


def find_last_successful_execution(
    executions: Iterable[JobExecutionRecord] | None, path: str
) -> JobExecutionRecord | None:
    """Find the most recent completed execution for a path.

    The execution with the latest end time wins, whatever the order of
    the supplied history.

    Args:
        executions: Job history of the client (may be None).
        path: Exact root path to match.

    Returns:
        The matching record, or None if the path never completed.

    Raises:
        HistoryIntegrityError: If a completed execution for the path has
            no end time.
    """
    latest: JobExecutionRecord | None = None
    for execution in executions or ():
        if execution.path != path or not execution.is_successful:
            continue
        if execution.end_time is None:
            raise HistoryIntegrityError(
                f"Completed execution {execution.execution_id} for {path} has no end time"
            )
        if latest is None or execution.end_time > latest.end_time:  # type: ignore[operator]
            latest = execution
    return latest
