"""Health metrics and advisor commands."""

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
from finsight.domain.scoring import ScoringStrategy


@click.command("health")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in ScoringStrategy]),
    default=ScoringStrategy.METRICS.value,
    show_default=True,
    help="Scoring table to use",
)
@as_of_option
@json_option
@click.pass_context
def health(ctx, strategy: str, as_of: str | None, as_json: bool):
    """Show savings rate, burn, runway and health score for the last month."""
    service = InsightsService(ctx.obj["provider"])
    today = resolve_as_of(ctx, as_of)

    try:
        metrics = service.health_metrics(today=today, strategy=ScoringStrategy(strategy))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(metrics)
        return

    runway = metrics.runway_months
    click.echo(f"Health score:  {metrics.health_score}/100")
    click.echo(f"Savings rate:  {metrics.savings_rate}%")
    click.echo(f"Monthly burn:  {money(metrics.monthly_burn)}")
    click.echo(f"Runway:        {runway} months")


@click.command("advice")
@as_of_option
@json_option
@click.pass_context
def advice(ctx, as_of: str | None, as_json: bool):
    """Diagnose the current month and list recommendations."""
    service = InsightsService(ctx.obj["provider"])
    today = resolve_as_of(ctx, as_of)

    try:
        diagnosis = service.diagnosis(today=today)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(diagnosis)
        return

    click.echo(f"Score: {diagnosis.score}/100 ({diagnosis.status.value})")
    click.echo(diagnosis.diagnosis)
    benchmarks = diagnosis.benchmarks
    click.echo(
        f"\nNeeds {benchmarks.needs}% | Wants {benchmarks.wants}% | Savings {benchmarks.savings}%"
    )
    echo_section("Insights", (f"[{i.type.value}] {i.text}" for i in diagnosis.insights))
    echo_section(
        "Recommendations",
        (
            f"{rec.title} ({rec.impact.value}): {rec.description}"
            for rec in diagnosis.recommendations
        ),
    )


def register_commands(cli):
    """Register health commands with main CLI."""
    cli.add_command(health)
    cli.add_command(advice)
