"""Budget and savings goal commands."""

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.cli.output import as_of_option, echo_json, json_option, money, resolve_as_of
from finsight.domain.errors import DomainError
from finsight.domain.insights import InsightsService
from finsight.utils.amount_parser import format_fixed


@click.command("budgets")
@as_of_option
@json_option
@click.pass_context
def budgets(ctx, as_of: str | None, as_json: bool):
    """List categories that exceeded their budget this month."""
    service = InsightsService(ctx.obj["provider"])
    reference_date = resolve_as_of(ctx, as_of)

    try:
        alerts = service.budget_alerts(reference_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(alerts)
        return

    if not alerts:
        click.echo("All budgets on track.")
        return

    for alert in alerts:
        click.echo(
            f"{alert.category_name}: spent {money(alert.spent)} of {money(alert.budget)} "
            f"(over by {money(alert.exceeded_amount)})"
        )


@click.command("goals")
@as_of_option
@json_option
@click.pass_context
def goals(ctx, as_of: str | None, as_json: bool):
    """Show savings goal progress and the monthly deposits to reach them."""
    service = InsightsService(ctx.obj["provider"])
    reference_date = resolve_as_of(ctx, as_of)

    try:
        progress = service.goal_progress(reference_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(progress)
        return

    if not progress:
        click.echo("No savings goals set.")
        return

    for item in progress:
        if item.is_finished:
            click.echo(f"{item.name}: {format_fixed(item.progress)}% saved (Reached)")
            continue
        click.echo(
            f"{item.name}: {format_fixed(item.progress)}% saved, "
            f"{money(item.remaining)} left over {item.months_left} months"
        )
        click.echo(
            f"  Monthly: {money(item.base_monthly)} | "
            f"moderate {money(item.moderate_monthly)} | "
            f"aggressive {money(item.aggressive_monthly)}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budgets)
    cli.add_command(goals)
