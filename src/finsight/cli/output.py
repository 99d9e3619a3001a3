"""Shared CLI options and output helpers."""

import json
from datetime import date
from typing import Any

import click

from finsight.utils.amount_parser import format_amount
from finsight.utils.date_parser import parse_date

as_of_option = click.option(
    "--as-of",
    "as_of",
    help="Reference date (YYYY-MM-DD or relative like 'today', 'last month')",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")


def resolve_as_of(ctx: click.Context, as_of: str | None) -> date | None:
    """Parse the --as-of option, exiting with an error when invalid."""
    if not as_of:
        return None
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid reference date: {e}", err=True)
        ctx.exit(1)


def echo_json(data: Any) -> None:
    """Print a result (or list of results) as indented JSON."""
    if isinstance(data, (list, tuple)):
        payload = [item.to_dict() for item in data]
    else:
        payload = data.to_dict()
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def money(value) -> str:
    """Format an amount for terminal output."""
    return f"R$ {format_amount(value)}"


def echo_section(title: str, lines) -> None:
    """Print a titled bullet list, skipping it when empty."""
    lines = list(lines)
    if not lines:
        return
    click.echo(f"\n{title}:")
    for line in lines:
        click.echo(f"  - {line}")
