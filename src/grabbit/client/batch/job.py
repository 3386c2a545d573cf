"""Client batch job configuration.

A ClientBatchJob is assembled through a chain of builder stages, each
returning the next one, so a job cannot be built before the server,
credentials, job history and path configuration are all known:

    job = (
        ClientBatchJob.builder(job_operator)
        .and_server("http", "localhost", "4503")
        .and_credentials("admin", "admin", "admin")
        .and_client_job_executions(history)
        .with_transaction_id(transaction_id)
        .and_configuration(path_configuration)
        .build()
    )
    execution_id = job.start()

When the path configuration asks for delta content, the last successful
execution for the same path decides the "contentAfterDate" parameter. If
there is none, the job silently runs as a full transfer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Protocol

from grabbit.client.batch.history import find_last_successful_execution
from grabbit.core.config import (
    EXCLUDE_PATHS_DELIMITER,
    WORKFLOW_CONFIGS_DELIMITER,
    PathConfiguration,
    ServerConfig,
)
from grabbit.core.dates import get_iso_string_from_date
from grabbit.core.types import JobExecutionRecord

logger = logging.getLogger(__name__)

JOB_NAME = "clientJob"

# Job parameter keys, matched exactly by the job steps
TIMESTAMP = "timestamp"
PATH = "path"
EXCLUDE_PATHS = "excludePaths"
WORKFLOW_CONFIGS = "workflowConfigIds"
SCHEME = "scheme"
HOST = "host"
PORT = "port"
SERVER_USERNAME = "serverUsername"
SERVER_PASSWORD = "serverPassword"
TRANSACTION_ID = "transactionID"
CLIENT_USERNAME = "clientUsername"
CONTENT_AFTER_DATE = "contentAfterDate"
DELETE_BEFORE_WRITE = "deleteBeforeWrite"
PATH_DELTA_CONTENT = "pathDeltaContent"
BATCH_SIZE = "batchSize"

# Type alias for an immutable job parameter set
JobParameters = Mapping[str, str]


class JobOperator(Protocol):
    """Protocol for the orchestrator that runs client jobs."""

    def start(self, job_name: str, parameters: str) -> int:
        """Start a job and return its execution id."""
        ...


def _to_string(value: bool | int | str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ClientBatchJob:
    """One configured client job, ready to be started.

    Attributes:
        job_parameters: Read-only parameters handed to the orchestrator.
    """

    def __init__(self, job_parameters: Mapping[str, str], job_operator: JobOperator) -> None:
        if job_parameters is None:
            raise ValueError("job_parameters is None")
        if job_operator is None:
            raise ValueError("job_operator is None")

        self.job_parameters: JobParameters = MappingProxyType(dict(job_parameters))
        self._job_operator = job_operator

    @staticmethod
    def builder(
        job_operator: JobOperator, clock: Callable[[], float] = time.time
    ) -> ServerBuilder:
        """Start a builder chain for a job submitted to job_operator."""
        return ServerBuilder(job_operator=job_operator, clock=clock)

    @property
    def is_delta(self) -> bool:
        """Check if the job only transfers content changed since a prior run."""
        return CONTENT_AFTER_DATE in self.job_parameters

    def start(self) -> int:
        """Start the job.

        Returns:
            Execution id assigned by the job operator.
        """
        parameters = ",".join(f"{key}={value}" for key, value in self.job_parameters.items())
        logger.debug("Current job params: %s", parameters)
        execution_id = self._job_operator.start(JOB_NAME, parameters)
        logger.info("Kicked off job with ID: %s", execution_id)
        return execution_id

    def __repr__(self) -> str:
        """Representation without the server password."""
        return (
            f"ClientBatchJob(path={self.job_parameters.get(PATH)!r}, "
            f"transaction_id={self.job_parameters.get(TRANSACTION_ID)!r}, "
            f"delta={self.is_delta})"
        )


# =============================================================================
# Builder stages
# =============================================================================


@dataclass(frozen=True)
class ServerBuilder:
    """First stage: the source server."""

    job_operator: JobOperator
    clock: Callable[[], float] = time.time

    def and_server(self, scheme: str, host: str, port: str | int) -> CredentialsBuilder:
        """Set the server to pull content from."""
        return CredentialsBuilder(
            server_builder=self,
            server=ServerConfig(scheme=scheme, host=host, port=str(port)),
        )

    def and_server_config(self, server: ServerConfig) -> CredentialsBuilder:
        """Set the server from an existing ServerConfig."""
        return CredentialsBuilder(server_builder=self, server=server)


@dataclass(frozen=True)
class CredentialsBuilder:
    """Second stage: client and server credentials."""

    server_builder: ServerBuilder
    server: ServerConfig

    def and_credentials(
        self, client_username: str, server_username: str, server_password: str
    ) -> JobExecutionsBuilder:
        """Set the client user and the server login."""
        return JobExecutionsBuilder(
            credentials_builder=self,
            client_username=client_username,
            server_username=server_username,
            server_password=server_password,
        )


@dataclass(frozen=True)
class JobExecutionsBuilder:
    """Third stage: prior executions of client jobs."""

    credentials_builder: CredentialsBuilder
    client_username: str
    server_username: str
    server_password: str

    def and_client_job_executions(
        self, job_executions: Sequence[JobExecutionRecord] | None
    ) -> ConfigurationBuilder:
        """Set the job history used to resolve delta transfers."""
        return ConfigurationBuilder(
            job_executions_builder=self,
            job_executions=tuple(job_executions or ()),
        )


@dataclass(frozen=True)
class ConfigurationBuilder:
    """Fourth stage: the path configuration and transaction."""

    job_executions_builder: JobExecutionsBuilder
    job_executions: tuple[JobExecutionRecord, ...]
    transaction_id: int = 0

    def with_transaction_id(self, transaction_id: int) -> ConfigurationBuilder:
        """Set the transaction grouping the jobs of one configuration run."""
        return replace(self, transaction_id=transaction_id)

    def and_configuration(self, path_configuration: PathConfiguration) -> Builder:
        """Set the subtree to transfer."""
        return Builder(
            configuration_builder=self,
            path_configuration=path_configuration,
            will_delete_before_write=path_configuration.delete_before_write,
            do_path_delta_content=path_configuration.path_delta_content,
        )


@dataclass(frozen=True)
class Builder:
    """Final stage: assembles the ClientBatchJob."""

    configuration_builder: ConfigurationBuilder
    path_configuration: PathConfiguration
    will_delete_before_write: bool
    do_path_delta_content: bool

    def build(self) -> ClientBatchJob:
        """Build the job, resolving delta content from the job history.

        Raises:
            HistoryIntegrityError: If a completed execution for the path
                has no end time.
        """
        config_builder = self.configuration_builder
        executions_builder = config_builder.job_executions_builder
        server_builder = executions_builder.credentials_builder.server_builder
        server = executions_builder.credentials_builder.server
        path_config = self.path_configuration

        job_parameters: dict[str, str] = {
            TIMESTAMP: str(int(server_builder.clock() * 1000)),
            PATH: path_config.path,
            SCHEME: server.scheme,
            HOST: server.host,
            PORT: server.port,
            CLIENT_USERNAME: executions_builder.client_username,
            SERVER_USERNAME: executions_builder.server_username,
            SERVER_PASSWORD: executions_builder.server_password,
            TRANSACTION_ID: str(config_builder.transaction_id),
            EXCLUDE_PATHS: EXCLUDE_PATHS_DELIMITER.join(path_config.exclude_paths),
            WORKFLOW_CONFIGS: WORKFLOW_CONFIGS_DELIMITER.join(path_config.workflow_config_ids),
            DELETE_BEFORE_WRITE: _to_string(self.will_delete_before_write),
            PATH_DELTA_CONTENT: _to_string(self.do_path_delta_content),
            BATCH_SIZE: _to_string(path_config.batch_size),
        }

        if self.do_path_delta_content:
            last_success = find_last_successful_execution(
                config_builder.job_executions, path_config.path
            )
            if last_success is not None:
                content_after_date = get_iso_string_from_date(last_success.end_time)  # type: ignore[arg-type]
                logger.info(
                    "Last successful run for %s was on %s", path_config.path, content_after_date
                )
                job_parameters[CONTENT_AFTER_DATE] = content_after_date
            else:
                logger.warning(
                    "There was no successful job run for %s. Defaulting to normal content grab",
                    path_config.path,
                )

        return ClientBatchJob(job_parameters, server_builder.job_operator)
