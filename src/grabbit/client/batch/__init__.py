"""Client batch jobs.

This package provides:
- job: parameter vocabulary, ClientBatchJob and its builder stages
- history: lookup of the last successful execution for delta transfers
"""

from grabbit.client.batch.history import find_last_successful_execution
from grabbit.client.batch.job import (
    BATCH_SIZE,
    CLIENT_USERNAME,
    CONTENT_AFTER_DATE,
    DELETE_BEFORE_WRITE,
    EXCLUDE_PATHS,
    HOST,
    JOB_NAME,
    PATH,
    PATH_DELTA_CONTENT,
    PORT,
    SCHEME,
    SERVER_PASSWORD,
    SERVER_USERNAME,
    TIMESTAMP,
    TRANSACTION_ID,
    WORKFLOW_CONFIGS,
    Builder,
    ClientBatchJob,
    ConfigurationBuilder,
    CredentialsBuilder,
    JobExecutionsBuilder,
    JobOperator,
    JobParameters,
    ServerBuilder,
)

__all__ = [
    # Parameter keys
    "BATCH_SIZE",
    "CLIENT_USERNAME",
    "CONTENT_AFTER_DATE",
    "DELETE_BEFORE_WRITE",
    "EXCLUDE_PATHS",
    "HOST",
    "JOB_NAME",
    "PATH",
    "PATH_DELTA_CONTENT",
    "PORT",
    "SCHEME",
    "SERVER_PASSWORD",
    "SERVER_USERNAME",
    "TIMESTAMP",
    "TRANSACTION_ID",
    "WORKFLOW_CONFIGS",
    # Job
    "ClientBatchJob",
    "JobOperator",
    "JobParameters",
    # Builder stages
    "Builder",
    "ConfigurationBuilder",
    "CredentialsBuilder",
    "JobExecutionsBuilder",
    "ServerBuilder",
    # History
    "find_last_successful_execution",
]
