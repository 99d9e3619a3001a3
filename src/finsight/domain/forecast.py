"""Cash-flow forecast engine."""

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from finsight.domain.entities import (
    ForecastPoint,
    ForecastRisk,
    ForecastSummary,
    Transaction,
    Wallet,
)
from finsight.domain.errors import ValidationError, negative_forecast_horizon
from finsight.domain.policy import DEFAULT_FORECAST_POLICY, ForecastPolicy
from finsight.utils.amount_parser import round_half_up
from finsight.utils.date_parser import (
    DateLike,
    add_months,
    full_month_name,
    resolve_reference,
    short_month_label,
    start_of_month,
)

logger = logging.getLogger(__name__)


def total_balance(wallets: Iterable[Wallet]) -> float:
    """Sum the balances of all wallets."""
    return sum((float(wallet.balance) for wallet in wallets), 0.0)


def historical_averages(
    transactions: Iterable[Transaction],
    today: Optional[DateLike] = None,
    policy: ForecastPolicy = DEFAULT_FORECAST_POLICY,
) -> tuple[float, float]:
    """Average monthly (income, expense) of recent one-off transactions.

    Only transactions strictly inside the window ending at ``today`` count,
    and recurring ones are left out. The sum is divided by the full window
    length no matter how many months actually had activity.
    """
    now = resolve_reference(today)
    window_start = add_months(now, -policy.history_months)

    income = 0.0
    expense = 0.0
    for txn in transactions:
        if txn.is_recurring or not (window_start < txn.date < now):
            continue
        if txn.is_income:
            income += float(txn.amount)
        else:
            expense += float(txn.amount)

    return income / policy.average_divisor, expense / policy.average_divisor


def recurring_totals(transactions: Iterable[Transaction]) -> tuple[float, float]:
    """Face-value (income, expense) totals of recurring transactions."""
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if not txn.is_recurring:
            continue
        if txn.is_income:
            income += float(txn.amount)
        else:
            expense += float(txn.amount)
    return income, expense


def calculate_forecast(
    transactions: Iterable[Transaction],
    initial_balance: float,
    months_to_forecast: int = DEFAULT_FORECAST_POLICY.default_months,
    today: Optional[DateLike] = None,
    policy: ForecastPolicy = DEFAULT_FORECAST_POLICY,
) -> list[ForecastPoint]:
    """Project month-end balances for the next ``months_to_forecast`` months.

    Each projected month earns the recurring totals plus the recent monthly
    averages. The first point is the current month and carries
    ``initial_balance`` untouched; later balances are rounded as they
    accumulate.

    Args:
        transactions: Full transaction history
        initial_balance: Current total wallet balance
        months_to_forecast: Number of future months to project
        today: Reference instant (defaults to now)
        policy: Forecast policy constants

    Returns:
        ``months_to_forecast + 1`` forecast points

    Raises:
        ValidationError: If ``months_to_forecast`` is negative
    """
    if months_to_forecast < 0:
        raise ValidationError(negative_forecast_horizon(months_to_forecast))

    now = resolve_reference(today)
    history = list(transactions)

    avg_income, avg_expense = historical_averages(history, now, policy)
    recurring_income, recurring_expense = recurring_totals(history)
    projected_income = recurring_income + avg_income
    projected_expense = recurring_expense + avg_expense

    logger.debug(
        "Forecast inputs: avg income %.2f, avg expense %.2f, recurring income %.2f, recurring expense %.2f",
        avg_income,
        avg_expense,
        recurring_income,
        recurring_expense,
    )

    month_start = start_of_month(now)
    balance = initial_balance
    points: list[ForecastPoint] = []

    for i in range(months_to_forecast + 1):
        projection_date = add_months(month_start, i)
        if i > 0:
            balance = round_half_up(float(balance) + projected_income - projected_expense)

        points.append(
            ForecastPoint(
                month=short_month_label(projection_date),
                month_name=full_month_name(projection_date),
                income=round_half_up(projected_income),
                expense=round_half_up(projected_expense),
                balance=balance,
                is_prediction=i > 0,
            )
        )

    return points


def apply_confidence_bands(
    points: Sequence[ForecastPoint],
    policy: ForecastPolicy = DEFAULT_FORECAST_POLICY,
) -> list[ForecastPoint]:
    """Attach best/worst-case balances that widen with every month out."""
    banded = []
    for months_out, point in enumerate(points):
        if not point.is_prediction:
            banded.append(replace(point, best_case=point.balance, worst_case=point.balance))
            continue

        variance = policy.band_step * months_out
        banded.append(
            replace(
                point,
                best_case=round_half_up(float(point.balance) * (1 + variance)),
                worst_case=round_half_up(float(point.balance) * (1 - variance)),
            )
        )
    return banded


def classify_forecast_risk(
    points: Sequence[ForecastPoint],
    initial_balance: float,
    policy: ForecastPolicy = DEFAULT_FORECAST_POLICY,
) -> ForecastRisk:
    """Classify the deficit risk from the last forecast point."""
    if not points:
        return ForecastRisk.LOW

    last = points[-1]
    worst_case = last.worst_case if last.worst_case is not None else last.balance
    if worst_case < 0:
        return ForecastRisk.HIGH
    if float(last.balance) < float(initial_balance) * policy.medium_risk_ratio:
        return ForecastRisk.MEDIUM
    return ForecastRisk.LOW


def build_forecast(
    transactions: Iterable[Transaction],
    initial_balance: float,
    months_to_forecast: int = DEFAULT_FORECAST_POLICY.default_months,
    today: Optional[DateLike] = None,
    policy: ForecastPolicy = DEFAULT_FORECAST_POLICY,
) -> ForecastSummary:
    """Forecast with confidence bands and its risk classification."""
    points = apply_confidence_bands(
        calculate_forecast(transactions, initial_balance, months_to_forecast, today, policy),
        policy,
    )
    return ForecastSummary(
        points=tuple(points),
        risk=classify_forecast_risk(points, initial_balance, policy),
    )
