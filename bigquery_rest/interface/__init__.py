"""Interface modules for the CLI."""

from bigquery_rest.interface.cli import main as cli_main

__all__ = ["cli_main"]
