"""Pattern analysis commands."""

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.cli.output import (
    as_of_option,
    echo_json,
    echo_section,
    json_option,
    money,
    resolve_as_of,
)
from finsight.domain.errors import DomainError
from finsight.domain.insights import InsightsService
from finsight.domain.patterns import UNCATEGORIZED_LABEL


def _run(ctx, as_of, method_name):
    """Call an InsightsService method for the reference date."""
    service = InsightsService(ctx.obj["provider"])
    reference_date = resolve_as_of(ctx, as_of)
    try:
        return service, getattr(service, method_name)(reference_date)
    except DomainError as e:
        handle_domain_error(ctx, e)


def _category_label(names: dict[str, str], category_id: str | None) -> str:
    if category_id is None:
        return UNCATEGORIZED_LABEL
    return names.get(category_id, category_id)


@click.command("cashflow")
@as_of_option
@json_option
@click.pass_context
def cashflow(ctx, as_of: str | None, as_json: bool):
    """Compare this month's cash flow with the previous month."""
    _, analysis = _run(ctx, as_of, "cash_flow")
    if as_json:
        echo_json(analysis)
        return

    click.echo(f"Income:      {money(analysis.total_income)}")
    click.echo(f"Expense:     {money(analysis.total_expense)}")
    click.echo(f"Balance:     {money(analysis.monthly_balance)}")
    click.echo(f"vs previous: {money(analysis.previous_month_comparison)} ({analysis.growth_percentage:+.1f}%)")


@click.command("anomalies")
@as_of_option
@json_option
@click.pass_context
def anomalies(ctx, as_of: str | None, as_json: bool):
    """List categories spending well above their recent average."""
    service, found = _run(ctx, as_of, "anomalies")
    if as_json:
        echo_json(found)
        return

    if not found:
        click.echo("No anomalies found.")
        return

    names = service.category_names()
    click.echo(f"\n{'Category':<30} {'Current':>14} {'Average':>14} {'Above':>8} {'Risk':>6}")
    click.echo("-" * 76)
    for anomaly in found:
        click.echo(
            f"{_category_label(names, anomaly.category_id):<30} {money(anomaly.current_amount):>14} "
            f"{money(anomaly.average_amount):>14} {anomaly.percent_above_average:>7}% "
            f"{anomaly.risk_level.value:>6}"
        )


@click.command("top-expenses")
@as_of_option
@json_option
@click.pass_context
def top_expenses(ctx, as_of: str | None, as_json: bool):
    """Show the five categories with the largest spend this month."""
    service, ranked = _run(ctx, as_of, "top_expenses")
    if as_json:
        echo_json(ranked)
        return

    if not ranked:
        click.echo("No expenses found.")
        return

    names = service.category_names()
    for position, expense in enumerate(ranked, start=1):
        click.echo(f"{position}. {_category_label(names, expense.category_id):<30} {money(expense.amount):>14}")


@click.command("projection")
@as_of_option
@json_option
@click.pass_context
def projection(ctx, as_of: str | None, as_json: bool):
    """Project next month's balance from the last three months."""
    _, result = _run(ctx, as_of, "projection")
    if as_json:
        echo_json(result)
        return

    click.echo(f"Projected balance: {money(result.projected_balance)}")
    click.echo(f"Confidence:        {result.confidence}%")
    if result.deficit_risk:
        click.echo("Warning: deficit projected.")


@click.command("score")
@as_of_option
@json_option
@click.pass_context
def score(ctx, as_of: str | None, as_json: bool):
    """Show the composite health score and tier."""
    _, result = _run(ctx, as_of, "health_score")
    if as_json:
        echo_json(result)
        return

    click.echo(f"Score: {result.score}/100 ({result.tier.value})")
    echo_section("Recommendations", result.recommendations)


@click.command("report")
@as_of_option
@json_option
@click.pass_context
def report(ctx, as_of: str | None, as_json: bool):
    """Print the monthly report."""
    _, result = _run(ctx, as_of, "monthly_report")
    if as_json:
        echo_json(result)
        return

    echo_section("Positive points", result.positive_points)
    echo_section("Attention points", result.attention_points)
    echo_section("Trends", result.trends)
    echo_section("Recommendations", result.recommendations)


def register_commands(cli):
    """Register pattern analysis commands with main CLI."""
    cli.add_command(cashflow)
    cli.add_command(anomalies)
    cli.add_command(top_expenses)
    cli.add_command(projection)
    cli.add_command(score)
    cli.add_command(report)
