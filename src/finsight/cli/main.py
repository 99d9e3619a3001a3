"""Main CLI entry point."""

import click

from finsight.data.factories import create_json_provider
from finsight.utils.logger import setup_logging

# Import and register all commands at module level
from finsight.cli.commands import budgets, forecast, health, patterns

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--data-path",
    type=click.Path(dir_okay=False),
    help="Path to JSON data file (overrides FINSIGHT_DATA_PATH environment variable)",
    envvar="FINSIGHT_DATA_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="FINSIGHT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, data_path: str | None, log_level: str):
    """Finsight - Financial intelligence for your transactions.

    Forecast cash flow, score financial health, spot spending anomalies and
    get recommendations from a JSON export of wallets and transactions.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Only resolve the data source when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        ctx.obj["provider"] = create_json_provider(data_path=data_path)


# Register all commands
forecast.register_commands(cli)
health.register_commands(cli)
patterns.register_commands(cli)
budgets.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
