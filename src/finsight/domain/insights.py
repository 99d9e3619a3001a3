"""Insights domain service."""

import logging
from typing import TYPE_CHECKING, Optional

from finsight.domain.advisor import (
    BucketClassifier,
    analyze_financial_health,
    current_period_totals,
)
from finsight.domain.budgets import detect_budget_overruns, goal_progress
from finsight.domain.entities import (
    BudgetAlert,
    CashFlowAnalysis,
    CategoryAnomaly,
    CategoryExpense,
    FinancialDiagnosis,
    FinancialHealthScore,
    ForecastSummary,
    GoalProgress,
    HealthMetrics,
    MonthlyReport,
    NextMonthProjection,
)
from finsight.domain.forecast import build_forecast, total_balance
from finsight.domain.patterns import (
    calculate_cash_flow_analysis,
    calculate_financial_health_score,
    calculate_top_expenses,
    detect_category_anomalies,
    generate_monthly_report,
    project_next_month_balance,
)
from finsight.domain.policy import DEFAULT_FORECAST_POLICY
from finsight.domain.scoring import ScoringStrategy, calculate_health_metrics
from finsight.utils.date_parser import DateLike, resolve_reference

if TYPE_CHECKING:
    from finsight.data.base import DataProvider

logger = logging.getLogger(__name__)


class InsightsService:
    """Service running the analytics over a data provider's records."""

    def __init__(self, provider: "DataProvider"):
        """Initialize insights service.

        Args:
            provider: Data provider instance
        """
        self.provider = provider

    def total_balance(self) -> float:
        """Current total balance across all wallets."""
        return total_balance(self.provider.list_wallets())

    def category_names(self) -> dict[str, str]:
        """Category display names keyed by ID."""
        return {cat.id: cat.name for cat in self.provider.list_categories()}

    def forecast(
        self,
        months: int = DEFAULT_FORECAST_POLICY.default_months,
        today: Optional[DateLike] = None,
    ) -> ForecastSummary:
        """Forecast the total balance with confidence bands and risk."""
        balance = self.total_balance()
        logger.debug("Forecasting %d months from balance %.2f", months, balance)
        return build_forecast(self.provider.list_transactions(), balance, months, today)

    def health_metrics(
        self,
        today: Optional[DateLike] = None,
        strategy: ScoringStrategy = ScoringStrategy.METRICS,
    ) -> HealthMetrics:
        """Trailing-month health metrics."""
        return calculate_health_metrics(
            self.provider.list_transactions(), self.total_balance(), today, strategy
        )

    def diagnosis(self, today: Optional[DateLike] = None) -> FinancialDiagnosis:
        """Advisor diagnosis for the current month.

        Categories that declare a bucket override the description keywords.
        """
        transactions = self.provider.list_transactions()
        income, expense = current_period_totals(transactions, today)
        classifier = BucketClassifier.from_categories(self.provider.list_categories())
        return analyze_financial_health(
            transactions, self.total_balance(), income, expense, classifier
        )

    def cash_flow(self, reference_date: Optional[DateLike] = None) -> CashFlowAnalysis:
        return calculate_cash_flow_analysis(self.provider.list_transactions(), reference_date)

    def anomalies(self, reference_date: Optional[DateLike] = None) -> list[CategoryAnomaly]:
        return detect_category_anomalies(self.provider.list_transactions(), reference_date)

    def top_expenses(self, reference_date: Optional[DateLike] = None) -> list[CategoryExpense]:
        return calculate_top_expenses(self.provider.list_transactions(), reference_date)

    def projection(self, reference_date: Optional[DateLike] = None) -> NextMonthProjection:
        return project_next_month_balance(self.provider.list_transactions(), reference_date)

    def health_score(self, reference_date: Optional[DateLike] = None) -> FinancialHealthScore:
        return calculate_financial_health_score(self.provider.list_transactions(), reference_date)

    def monthly_report(self, reference_date: Optional[DateLike] = None) -> MonthlyReport:
        return generate_monthly_report(
            self.provider.list_transactions(), reference_date, self.category_names()
        )

    def budget_alerts(self, reference_date: Optional[DateLike] = None) -> list[BudgetAlert]:
        return detect_budget_overruns(
            self.provider.list_transactions(),
            self.provider.list_budgets(),
            reference_date,
            self.category_names(),
        )

    def goal_progress(self, reference_date: Optional[DateLike] = None) -> list[GoalProgress]:
        """Progress of every savings goal, in provider order."""
        now = resolve_reference(reference_date)
        return [goal_progress(goal, now) for goal in self.provider.list_goals()]
