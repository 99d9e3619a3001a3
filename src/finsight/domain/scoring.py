"""Financial health scoring.

Two point tables exist. ``ScoringStrategy.ADVISOR`` feeds the advisor
diagnosis and is the default; ``ScoringStrategy.METRICS`` is the older
dashboard metrics table, kept so those figures stay reproducible. Callers
pick one explicitly.
"""

import logging
from enum import Enum
from typing import Iterable, Optional, Union

from finsight.domain.entities import (
    HealthAssessment,
    HealthMetrics,
    HealthStatus,
    Transaction,
)
from finsight.domain.policy import (
    ADVISOR_SCORING,
    DEFAULT_STATUS_POLICY,
    METRICS_SCORING,
    ScoringPolicy,
    StatusPolicy,
)
from finsight.utils.amount_parser import round_half_up, round_to_tenth
from finsight.utils.date_parser import DateLike, add_months, resolve_reference

logger = logging.getLogger(__name__)

RUNWAY_OVERFLOW = "24+"


class ScoringStrategy(str, Enum):
    ADVISOR = "advisor"
    METRICS = "metrics"

    @property
    def policy(self) -> ScoringPolicy:
        return ADVISOR_SCORING if self is ScoringStrategy.ADVISOR else METRICS_SCORING


def savings_rate(income: float, expense: float) -> float:
    """Percentage of income left after expenses; 0 without income."""
    income = float(income)
    if income <= 0:
        return 0.0
    return (income - float(expense)) / income * 100


def monthly_burn(expense: float) -> float:
    """Monthly expense used as the runway divisor, never below 1."""
    return max(float(expense), 1.0)


def runway_months(balance: float, expense: float) -> float:
    """Months the balance lasts at the current expense rate."""
    return float(balance) / monthly_burn(expense)


def score_health(
    rate: float,
    runway: float,
    strategy: ScoringStrategy = ScoringStrategy.ADVISOR,
) -> int:
    """Score a savings rate (percent) and runway (months) from 0 to 100."""
    policy = strategy.policy
    score = policy.base_score

    for threshold, points in policy.savings_steps:
        if rate > threshold:
            score += points
            break
    else:
        score += policy.savings_fallback

    for threshold, points in policy.runway_steps:
        if runway > threshold:
            score += points
            break
    else:
        critical_threshold, penalty = policy.runway_critical
        if runway < critical_threshold:
            score += penalty

    return min(100, max(0, score))


def classify_status(score: int, policy: StatusPolicy = DEFAULT_STATUS_POLICY) -> HealthStatus:
    """Map a score to its qualitative status."""
    if score >= policy.excellent:
        return HealthStatus.EXCELLENT
    if score >= policy.good:
        return HealthStatus.GOOD
    if score < policy.critical:
        return HealthStatus.CRITICAL
    return HealthStatus.WARNING


def assess_health(
    balance: float,
    income: float,
    expense: float,
    strategy: ScoringStrategy = ScoringStrategy.ADVISOR,
    status_policy: StatusPolicy = DEFAULT_STATUS_POLICY,
) -> HealthAssessment:
    """Score period income/expense against the current total balance.

    Args:
        balance: Current total wallet balance
        income: Income of the period
        expense: Expense of the period
        strategy: Point table to score with
        status_policy: Status band thresholds

    Returns:
        HealthAssessment with score, status and the raw ratios
    """
    rate = savings_rate(income, expense)
    runway = runway_months(balance, expense)
    score = score_health(rate, runway, strategy)
    logger.debug(
        "Health (%s): savings %.2f%%, runway %.2f months, score %d",
        strategy.value,
        rate,
        runway,
        score,
    )
    return HealthAssessment(
        score=score,
        status=classify_status(score, status_policy),
        savings_rate=rate,
        runway=runway,
        monthly_burn=monthly_burn(expense),
    )


def format_runway(
    runway: float, policy: StatusPolicy = DEFAULT_STATUS_POLICY
) -> Union[float, str]:
    """Runway for display: one decimal, or ``"24+"`` past the cap."""
    if runway > policy.runway_cap:
        return RUNWAY_OVERFLOW
    return round_to_tenth(runway)


def calculate_health_metrics(
    transactions: Iterable[Transaction],
    current_balance: float,
    today: Optional[DateLike] = None,
    strategy: ScoringStrategy = ScoringStrategy.METRICS,
) -> HealthMetrics:
    """Health metrics over transactions dated within the month up to ``today``.

    The displayed savings rate never goes below zero, while the score is
    computed from the signed rate.
    """
    now = resolve_reference(today)
    window_start = add_months(now, -1)

    income = 0.0
    expense = 0.0
    for txn in transactions:
        if not (window_start < txn.date <= now):
            continue
        if txn.is_income:
            income += float(txn.amount)
        else:
            expense += float(txn.amount)

    rate = savings_rate(income, expense)
    runway = runway_months(current_balance, expense)

    return HealthMetrics(
        savings_rate=max(0, round_half_up(rate)),
        monthly_burn=round_half_up(monthly_burn(expense)),
        runway_months=format_runway(runway),
        health_score=score_health(rate, runway, strategy),
    )
