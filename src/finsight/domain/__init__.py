"""Domain layer for finsight application."""

from finsight.domain.forecast import calculate_forecast, build_forecast, total_balance
from finsight.domain.scoring import ScoringStrategy, assess_health, calculate_health_metrics
from finsight.domain.advisor import BucketClassifier, analyze_financial_health
from finsight.domain.patterns import (
    calculate_cash_flow_analysis,
    detect_category_anomalies,
    calculate_top_expenses,
    project_next_month_balance,
    calculate_financial_health_score,
    generate_monthly_report,
)
from finsight.domain.budgets import detect_budget_overruns, goal_progress

__all__ = [
    "calculate_forecast",
    "build_forecast",
    "total_balance",
    "ScoringStrategy",
    "assess_health",
    "calculate_health_metrics",
    "BucketClassifier",
    "analyze_financial_health",
    "calculate_cash_flow_analysis",
    "detect_category_anomalies",
    "calculate_top_expenses",
    "project_next_month_balance",
    "calculate_financial_health_score",
    "generate_monthly_report",
    "detect_budget_overruns",
    "goal_progress",
]
