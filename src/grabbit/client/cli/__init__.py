"""Command-line interface for grabbit.

This module provides the main CLI entry point and assembles all commands.

Commands:
- params: Print the job parameters built from a configuration file
- transaction-id: Extract the transaction id from a resource path
"""

from __future__ import annotations

import click

from grabbit.client.cli.config import load_history, setup_logging
from grabbit.client.cli.jobs import build_jobs, params, transaction_id


@click.group()
@click.version_option(package_name="grabbit")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Grabbit - Content subtree synchronization client."""
    setup_logging(verbose)


# Job commands
cli.add_command(params)
cli.add_command(transaction_id)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "build_jobs",
    "cli",
    "load_history",
    "main",
]
