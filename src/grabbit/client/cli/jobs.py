"""Job configuration commands for the grabbit CLI.

Commands:
- params: Print the job parameters for every path of a configuration
- transaction-id: Extract the transaction id from a resource path
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from grabbit.client.batch.job import SERVER_PASSWORD, ClientBatchJob
from grabbit.client.cli.config import HistoryFileError, load_history
from grabbit.client.resources import transaction_id_from_path
from grabbit.core.config import GrabbitConfiguration
from grabbit.core.types import GrabbitError, JobExecutionRecord

MASKED = "********"


class DryRunJobOperator:
    """Job operator for commands that only build jobs."""

    def start(self, job_name: str, parameters: str) -> int:
        raise click.ClickException(f"Dry run: {job_name} is not submitted")


def build_jobs(
    config: GrabbitConfiguration,
    history: list[JobExecutionRecord],
    transaction_id: int | None = None,
) -> list[ClientBatchJob]:
    """Build one ClientBatchJob per path configuration."""
    operator = DryRunJobOperator()
    configuration_stage = (
        ClientBatchJob.builder(operator)
        .and_server_config(config.server)
        .and_credentials(config.client_username, config.server_username, config.server_password)
        .and_client_job_executions(history)
        .with_transaction_id(
            config.transaction_id if transaction_id is None else transaction_id
        )
    )
    return [
        configuration_stage.and_configuration(path_config).build()
        for path_config in config.path_configurations
    ]


@click.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--history",
    "history_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with prior job executions (enables delta content).",
)
@click.option(
    "--transaction-id",
    type=int,
    default=None,
    help="Transaction id (default: randomly generated).",
)
@click.option("--json", "as_json", is_flag=True, help="Print parameters as JSON.")
@click.option("--show-password", is_flag=True, help="Do not mask the server password.")
def params(
    config_file: Path,
    history_file: Path | None,
    transaction_id: int | None,
    as_json: bool,
    show_password: bool,
) -> None:
    """Print the job parameters for each path of CONFIG_FILE."""
    try:
        config = GrabbitConfiguration.from_file(config_file)
        history = load_history(history_file) if history_file else []
        jobs = build_jobs(config, history, transaction_id)
    except (GrabbitError, HistoryFileError) as e:
        raise click.ClickException(str(e)) from e

    parameter_sets = []
    for job in jobs:
        parameters = dict(job.job_parameters)
        if not show_password:
            parameters[SERVER_PASSWORD] = MASKED
        parameter_sets.append(parameters)

    if as_json:
        click.echo(json.dumps(parameter_sets, indent=2))
        return

    for i, parameters in enumerate(parameter_sets):
        if i:
            click.echo()
        for key, value in parameters.items():
            click.echo(f"{key}={value}")


@click.command("transaction-id")
@click.argument("resource_path")
def transaction_id(resource_path: str) -> None:
    """Print the transaction id of RESOURCE_PATH."""
    value = transaction_id_from_path(resource_path)
    if not value:
        raise click.ClickException(f"Not a transaction resource: {resource_path}")
    click.echo(value)
