"""Forecast command."""

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.cli.output import as_of_option, echo_json, json_option, money, resolve_as_of
from finsight.domain.entities import ForecastRisk
from finsight.domain.errors import DomainError
from finsight.domain.insights import InsightsService

RISK_LABELS = {
    ForecastRisk.HIGH: "Alto",
    ForecastRisk.MEDIUM: "Médio",
    ForecastRisk.LOW: "Baixo",
}


@click.command("forecast")
@click.option("--months", type=click.IntRange(min=0), default=6, show_default=True, help="Months to project")
@as_of_option
@json_option
@click.pass_context
def forecast(ctx, months: int, as_of: str | None, as_json: bool):
    """Project the total balance for the coming months.

    Examples:
        finsight forecast
        finsight forecast --months 12 --as-of 2024-06-15
    """
    service = InsightsService(ctx.obj["provider"])
    today = resolve_as_of(ctx, as_of)

    try:
        summary = service.forecast(months=months, today=today)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(summary)
        return

    click.echo(
        f"\n{'Month':<10} {'Income':>14} {'Expense':>14} {'Balance':>16} {'Worst case':>16} {'Best case':>16}"
    )
    click.echo("-" * 92)
    for point in summary.points:
        marker = "*" if point.is_prediction else " "
        click.echo(
            f"{point.month:<8}{marker:<2} {money(point.income):>14} {money(point.expense):>14} "
            f"{money(point.balance):>16} {money(point.worst_case):>16} {money(point.best_case):>16}"
        )
    click.echo("\n* projected")
    click.echo(f"Risk: {RISK_LABELS[summary.risk]}")


def register_commands(cli):
    """Register forecast command with main CLI."""
    cli.add_command(forecast)
