"""Spending pattern analysis.

Month-over-month cash flow, category anomalies, top expenses, a next-month
balance projection, a composite health tier and the narrative monthly
report. All functions work on calendar months around ``reference_date``
(defaults to now) and never assume the transactions are sorted.
"""

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Optional

from finsight.domain.entities import (
    AnomalyRisk,
    CashFlowAnalysis,
    CategoryAnomaly,
    CategoryExpense,
    FinancialHealthScore,
    HealthTier,
    MonthlyReport,
    NextMonthProjection,
    Transaction,
)
from finsight.domain.policy import DEFAULT_PATTERN_POLICY, PatternPolicy
from finsight.utils.amount_parser import format_amount, format_fixed, round_half_up
from finsight.utils.date_parser import (
    DateLike,
    in_month,
    month_bounds,
    month_key,
    resolve_reference,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED_LABEL = "Sem categoria"

TIER_RECOMMENDATIONS = {
    HealthTier.DIAMOND: (
        "Excelente gestão! Considere investir o excedente.",
        "Mantenha o controle rigoroso de categorias.",
    ),
    HealthTier.GOLD: (
        "Bom controle. Tente reduzir gastos variáveis em 10%.",
        "Sua reserva de emergência está crescendo.",
    ),
    HealthTier.SILVER: (
        "Atenção ao fluxo de caixa.",
        "Revise seus gastos fixos do mês.",
    ),
    HealthTier.BRONZE: ("Tente poupar pelo menos 20% da sua renda.",),
}


def month_totals(
    transactions: Iterable[Transaction], bounds
) -> tuple[float, float]:
    """Income and expense of the transactions inside month bounds."""
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if not in_month(txn.date, bounds):
            continue
        if txn.is_income:
            income += float(txn.amount)
        else:
            expense += float(txn.amount)
    return income, expense


def calculate_cash_flow_analysis(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
) -> CashFlowAnalysis:
    """Compare the reference month's cash flow with the month before."""
    now = resolve_reference(reference_date)
    history = list(transactions)

    income, expense = month_totals(history, month_bounds(now))
    previous_income, previous_expense = month_totals(history, month_bounds(now, -1))

    balance = income - expense
    previous_balance = previous_income - previous_expense
    comparison = balance - previous_balance
    growth = comparison / abs(previous_balance) * 100 if previous_balance != 0 else 0.0

    return CashFlowAnalysis(
        total_income=income,
        total_expense=expense,
        monthly_balance=balance,
        previous_month_comparison=comparison,
        growth_percentage=growth,
    )


def detect_category_anomalies(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
    policy: PatternPolicy = DEFAULT_PATTERN_POLICY,
) -> list[CategoryAnomaly]:
    """Flag categories whose spend this month jumped above their baseline.

    The baseline is the spend over the preceding full months divided by the
    number of those months that actually saw spending in the category.
    """
    now = resolve_reference(reference_date)
    current_bounds = month_bounds(now)
    baseline_bounds = (month_bounds(now, -policy.baseline_months)[0], current_bounds[0])

    current_spend: dict[Optional[str], float] = {}
    past_spend: dict[Optional[str], float] = defaultdict(float)
    past_months: dict[Optional[str], set[str]] = defaultdict(set)

    for txn in transactions:
        if not txn.is_expense:
            continue
        current_spend.setdefault(txn.category_id, 0.0)
        if in_month(txn.date, current_bounds):
            current_spend[txn.category_id] += float(txn.amount)
        elif in_month(txn.date, baseline_bounds):
            past_spend[txn.category_id] += float(txn.amount)
            past_months[txn.category_id].add(month_key(txn.date))

    anomalies = []
    for category_id, spend in current_spend.items():
        divisor = max(len(past_months[category_id]), 1)
        average = past_spend[category_id] / divisor

        if average <= 0 or spend <= average * policy.anomaly_threshold:
            continue

        excess = (spend / average - 1) * 100
        anomalies.append(
            CategoryAnomaly(
                category_id=category_id,
                percent_above_average=round_half_up(excess),
                current_amount=spend,
                average_amount=average,
                risk_level=(
                    AnomalyRisk.HIGH if excess > policy.high_risk_excess else AnomalyRisk.MEDIUM
                ),
            )
        )

    logger.debug("Detected %d category anomalies", len(anomalies))
    return anomalies


def calculate_top_expenses(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
    policy: PatternPolicy = DEFAULT_PATTERN_POLICY,
) -> list[CategoryExpense]:
    """Categories with the largest spend in the reference month."""
    bounds = month_bounds(resolve_reference(reference_date))

    totals: dict[Optional[str], float] = {}
    for txn in transactions:
        if txn.is_expense and in_month(txn.date, bounds):
            totals[txn.category_id] = totals.get(txn.category_id, 0.0) + float(txn.amount)

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryExpense(category_id=category_id, amount=amount)
        for category_id, amount in ranked[: policy.top_expenses_limit]
    ]


def project_next_month_balance(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
    policy: PatternPolicy = DEFAULT_PATTERN_POLICY,
) -> NextMonthProjection:
    """Project next month's balance from the trend of the last full months."""
    now = resolve_reference(reference_date)
    history = list(transactions)

    balances = []
    for offset in range(-policy.baseline_months, 0):
        income, expense = month_totals(history, month_bounds(now, offset))
        balances.append(income - expense)

    average = sum(balances) / len(balances) if balances else 0.0
    trend = (balances[-1] - balances[0]) / (len(balances) - 1) if len(balances) > 1 else 0.0
    projection = average + trend * policy.trend_weight

    logger.debug("Projection from balances %s: %.2f", balances, projection)

    return NextMonthProjection(
        projected_balance=round_half_up(projection),
        deficit_risk=projection < 0,
        confidence=(
            policy.confident if all(balance > 0 for balance in balances) else policy.unconfident
        ),
    )


def classify_tier(score: int, policy: PatternPolicy = DEFAULT_PATTERN_POLICY) -> HealthTier:
    if score >= policy.diamond:
        return HealthTier.DIAMOND
    if score >= policy.gold:
        return HealthTier.GOLD
    if score >= policy.silver:
        return HealthTier.SILVER
    return HealthTier.BRONZE


def calculate_financial_health_score(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
    policy: PatternPolicy = DEFAULT_PATTERN_POLICY,
) -> FinancialHealthScore:
    """Composite 0-100 score from savings, stability, growth and control.

    Args:
        transactions: Transaction history
        reference_date: Month to score (defaults to now)
        policy: Pattern policy constants

    Returns:
        FinancialHealthScore with tier and fixed recommendations
    """
    history = list(transactions)
    analysis = calculate_cash_flow_analysis(history, reference_date)
    anomalies = detect_category_anomalies(history, reference_date, policy)

    rate = analysis.monthly_balance / analysis.total_income if analysis.total_income > 0 else 0.0
    savings = _clamp(rate / policy.savings_target * 100, 0, 100) * policy.savings_weight
    stability = (100 if analysis.monthly_balance > 0 else 0) * policy.stability_weight
    growth = _clamp(analysis.growth_percentage, 0, 100) * policy.growth_weight
    has_high_risk = any(a.risk_level == AnomalyRisk.HIGH for a in anomalies)
    control = (100 * policy.control_penalty if has_high_risk else 100) * policy.control_weight

    score = round_half_up(savings + stability + growth + control)
    tier = classify_tier(score, policy)

    return FinancialHealthScore(
        score=score,
        tier=tier,
        recommendations=TIER_RECOMMENDATIONS[tier],
    )


def generate_monthly_report(
    transactions: Iterable[Transaction],
    reference_date: Optional[DateLike] = None,
    category_names: Optional[Mapping[str, str]] = None,
    policy: PatternPolicy = DEFAULT_PATTERN_POLICY,
) -> MonthlyReport:
    """Assemble the narrative report for the reference month.

    Args:
        transactions: Transaction history
        reference_date: Month to report on (defaults to now)
        category_names: Display names keyed by category ID
        policy: Pattern policy constants

    Returns:
        MonthlyReport with positive points, attention points, trends and
        recommendations
    """
    history = list(transactions)
    now = resolve_reference(reference_date)
    category_names = category_names or {}

    analysis = calculate_cash_flow_analysis(history, now)
    health = calculate_financial_health_score(history, now, policy)
    anomalies = detect_category_anomalies(history, now, policy)
    projection = project_next_month_balance(history, now, policy)

    positive_points: list[str] = []
    attention_points: list[str] = []
    trends: list[str] = []

    if analysis.monthly_balance > 0:
        positive_points.append(f"Saldo positivo de R$ {format_amount(analysis.monthly_balance)}.")
    else:
        attention_points.append("O fechamento do mês está negativo.")

    if analysis.growth_percentage != 0:
        is_positive = analysis.previous_month_comparison > 0
        growth_value = abs(analysis.growth_percentage)
        if growth_value > 100:
            growth_text = "Variação expressiva (acima de 100%) em relação ao mês anterior"
        else:
            direction = "Crescimento" if is_positive else "Redução"
            growth_text = f"{direction} de {format_fixed(growth_value)}% em relação ao mês anterior"
        (positive_points if is_positive else attention_points).append(growth_text + ".")

    for anomaly in anomalies:
        name = _category_label(anomaly.category_id, category_names)
        attention_points.append(
            f"Gasto atípico em {name} ({anomaly.percent_above_average}% acima da média)."
        )

    trends.append(
        f"Projeção de R$ {format_amount(projection.projected_balance)} para o próximo período."
    )
    if projection.deficit_risk:
        trends.append("Alerta: Risco de déficit projetado.")

    return MonthlyReport(
        positive_points=tuple(positive_points),
        attention_points=tuple(attention_points),
        trends=tuple(trends),
        recommendations=health.recommendations,
    )


def _category_label(category_id: Optional[str], category_names: Mapping[str, str]) -> str:
    if category_id is None:
        return UNCATEGORIZED_LABEL
    return category_names.get(category_id) or category_id


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
