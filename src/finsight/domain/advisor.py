"""Financial advisor: diagnosis, 50/30/20 benchmarks and recommendations."""

import logging
from typing import Iterable, Mapping, Optional

from finsight.domain.entities import (
    Benchmarks,
    Bucket,
    Category,
    DashboardInsight,
    FinancialDiagnosis,
    HealthStatus,
    Impact,
    InsightType,
    Recommendation,
    RecommendationIcon,
    Transaction,
)
from finsight.domain.policy import DEFAULT_ADVISOR_POLICY, AdvisorPolicy
from finsight.domain.scoring import ScoringStrategy, assess_health
from finsight.utils.amount_parser import format_fixed, round_half_up
from finsight.utils.date_parser import DateLike, in_month, month_bounds, resolve_reference

logger = logging.getLogger(__name__)

DIAGNOSIS_MESSAGES = {
    HealthStatus.EXCELLENT: (
        "Sua saúde financeira está em nível institucional. "
        "Você tem controle total e alta capacidade de investimento."
    ),
    HealthStatus.GOOD: (
        "Bom desempenho. Você está no caminho certo, mas pequenos ajustes "
        "em gastos variáveis podem acelerar sua independência."
    ),
    HealthStatus.WARNING: (
        "Sinal amarelo. Sua margem de manobra é limitada. "
        "É hora de auditar suas categorias de 'Desejos'."
    ),
    HealthStatus.CRITICAL: (
        "Diagnóstico crítico. Suas despesas fixas ou recorrentes estão "
        "sufocando seu fluxo de caixa. Reestruturação imediata necessária."
    ),
}


class BucketClassifier:
    """Assign expenses to the needs or wants bucket.

    An explicit category mapping takes precedence; otherwise the description
    is matched against keyword lists. Anything unmatched counts as a need.
    """

    def __init__(
        self,
        category_buckets: Optional[Mapping[str, Bucket]] = None,
        policy: AdvisorPolicy = DEFAULT_ADVISOR_POLICY,
    ):
        """Initialize the classifier.

        Args:
            category_buckets: Category ID to bucket mapping
            policy: Advisor policy holding the keyword lists
        """
        self.category_buckets = dict(category_buckets or {})
        self.policy = policy

    @classmethod
    def from_categories(
        cls,
        categories: Iterable[Category],
        policy: AdvisorPolicy = DEFAULT_ADVISOR_POLICY,
    ) -> "BucketClassifier":
        """Build a classifier from categories that declare a bucket."""
        return cls(
            {cat.id: cat.bucket for cat in categories if cat.bucket is not None},
            policy,
        )

    def classify(self, txn: Transaction) -> Bucket:
        if txn.category_id is not None and txn.category_id in self.category_buckets:
            return self.category_buckets[txn.category_id]

        description = (txn.description or "").lower()
        if any(keyword in description for keyword in self.policy.needs_keywords):
            return Bucket.NEEDS
        if any(keyword in description for keyword in self.policy.wants_keywords):
            return Bucket.WANTS
        return Bucket.NEEDS


def bucket_totals(
    transactions: Iterable[Transaction], classifier: BucketClassifier
) -> dict[Bucket, float]:
    """Sum expense amounts per bucket."""
    totals = {Bucket.NEEDS: 0.0, Bucket.WANTS: 0.0}
    for txn in transactions:
        if txn.is_expense:
            totals[classifier.classify(txn)] += float(txn.amount)
    return totals


def current_period_totals(
    transactions: Iterable[Transaction], today: Optional[DateLike] = None
) -> tuple[float, float]:
    """Income and expense dated within the calendar month of ``today``."""
    bounds = month_bounds(resolve_reference(today))
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


def build_insights(
    rate: float, runway: float, policy: AdvisorPolicy = DEFAULT_ADVISOR_POLICY
) -> list[DashboardInsight]:
    insights = []

    if rate > policy.healthy_savings:
        insights.append(
            DashboardInsight(
                InsightType.POSITIVE,
                "Sua taxa de poupança está acima da média de mercado (20%).",
            )
        )
    elif 0 < rate < policy.tight_savings:
        insights.append(
            DashboardInsight(
                InsightType.NEUTRAL,
                "Sua margem de segurança está apertada. Considere reduzir custos variáveis.",
            )
        )
    elif rate <= 0:
        insights.append(
            DashboardInsight(
                InsightType.NEGATIVE,
                "Atenção: Suas despesas superaram sua receita este mês.",
            )
        )

    if runway < policy.critical_runway:
        insights.append(
            DashboardInsight(
                InsightType.NEGATIVE,
                "Runway crítico: Você tem menos de 2 meses de sobrevivência sem renda.",
            )
        )

    return insights


def build_recommendations(
    rate: float,
    runway: float,
    wants_percentage: float,
    policy: AdvisorPolicy = DEFAULT_ADVISOR_POLICY,
) -> list[Recommendation]:
    recommendations = []

    if wants_percentage > policy.wants_limit:
        recommendations.append(
            Recommendation(
                id="cut-wants",
                title="Reduzir Desejos",
                description=(
                    f"Seus gastos não-essenciais estão em {format_fixed(wants_percentage)}%. "
                    "O ideal é 30%."
                ),
                action_label="Ver Gastos Lazer",
                impact=Impact.HIGH,
                icon=RecommendationIcon.TRENDING_DOWN,
            )
        )

    if runway < policy.reserve_months:
        recommendations.append(
            Recommendation(
                id="build-reserve",
                title="Reserva de Emergência",
                description=(
                    "Sua reserva cobre menos de 3 meses. "
                    "Foque em poupar 20% até atingir 6 meses."
                ),
                action_label="Simular Reserva",
                impact=Impact.HIGH,
                icon=RecommendationIcon.SHIELD_ALERT,
            )
        )

    if rate > policy.invest_savings:
        recommendations.append(
            Recommendation(
                id="invest-surplus",
                title="Oportunidade de Investimento",
                description=(
                    "Você tem um excedente saudável. "
                    "Considere diversificar sua carteira."
                ),
                action_label="Ver Opções",
                impact=Impact.MEDIUM,
                icon=RecommendationIcon.PIE_CHART,
            )
        )

    return recommendations


def analyze_financial_health(
    transactions: Iterable[Transaction],
    current_balance: float,
    income: float,
    expense: float,
    classifier: Optional[BucketClassifier] = None,
    policy: AdvisorPolicy = DEFAULT_ADVISOR_POLICY,
) -> FinancialDiagnosis:
    """Diagnose financial health and suggest next steps.

    Args:
        transactions: Transactions to split into needs and wants
        current_balance: Current total wallet balance
        income: Income of the current period
        expense: Expense of the current period
        classifier: Bucket classifier (keyword-only when omitted)
        policy: Advisor policy constants

    Returns:
        FinancialDiagnosis with score, benchmarks, insights and recommendations
    """
    classifier = classifier or BucketClassifier(policy=policy)
    assessment = assess_health(current_balance, income, expense, ScoringStrategy.ADVISOR)

    totals = bucket_totals(transactions, classifier)
    income = float(income)
    needs_percentage = totals[Bucket.NEEDS] / income * 100 if income > 0 else 0.0
    wants_percentage = totals[Bucket.WANTS] / income * 100 if income > 0 else 0.0

    logger.debug(
        "Buckets: needs %.2f (%.1f%%), wants %.2f (%.1f%%)",
        totals[Bucket.NEEDS],
        needs_percentage,
        totals[Bucket.WANTS],
        wants_percentage,
    )

    return FinancialDiagnosis(
        score=assessment.score,
        status=assessment.status,
        diagnosis=DIAGNOSIS_MESSAGES[assessment.status],
        benchmarks=Benchmarks(
            needs=round_half_up(needs_percentage),
            wants=round_half_up(wants_percentage),
            savings=round_half_up(assessment.savings_rate),
        ),
        insights=tuple(build_insights(assessment.savings_rate, assessment.runway, policy)),
        recommendations=tuple(
            build_recommendations(
                assessment.savings_rate, assessment.runway, wants_percentage, policy
            )
        ),
    )
