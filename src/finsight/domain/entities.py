"""Domain model entities for finsight.

These are pure data classes representing the records the engine consumes
(transactions, wallets, categories, budgets) and the reports it derives from
them. Derived records expose ``to_dict()`` so callers can hand them straight
to a JSON encoder.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class Serializable:
    """Mixin rendering a dataclass as plain JSON-compatible values."""

    def to_dict(self) -> dict[str, Any]:
        return {f.name: _serialize(getattr(self, f.name)) for f in fields(self)}


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Bucket(str, Enum):
    """50/30/20 spending buckets."""

    NEEDS = "needs"
    WANTS = "wants"


@dataclass(frozen=True)
class Transaction(Serializable):
    """Transaction domain entity."""

    amount: Decimal
    type: TransactionType
    date: datetime
    description: Optional[str] = None
    is_recurring: bool = False
    recurrence_interval: Optional[str] = None
    category_id: Optional[str] = None
    id: Optional[str] = None
    wallet_id: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


@dataclass(frozen=True)
class Wallet(Serializable):
    """Wallet domain entity."""

    balance: Decimal
    id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Category(Serializable):
    """Category domain entity."""

    id: str
    name: str
    type: Optional[TransactionType] = None
    bucket: Optional[Bucket] = None


@dataclass(frozen=True)
class Budget(Serializable):
    """Monthly spending limit for a category."""

    category_id: str
    amount: Decimal
    month: str  # YYYY-MM


# Forecast


class ForecastRisk(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ForecastPoint(Serializable):
    """One month of a cash-flow forecast."""

    month: str
    month_name: str
    income: int
    expense: int
    balance: float
    is_prediction: bool
    best_case: Optional[float] = None
    worst_case: Optional[float] = None


@dataclass(frozen=True)
class ForecastSummary(Serializable):
    """Forecast points with confidence bands and the deficit risk level."""

    points: tuple[ForecastPoint, ...]
    risk: ForecastRisk


# Health scoring


class HealthStatus(str, Enum):
    EXCELLENT = "Excelente"
    GOOD = "Bom"
    WARNING = "Alerta"
    CRITICAL = "Crítico"


@dataclass(frozen=True)
class HealthAssessment(Serializable):
    """Score of a balance/income/expense triple under one scoring strategy."""

    score: int
    status: HealthStatus
    savings_rate: float
    runway: float
    monthly_burn: float


@dataclass(frozen=True)
class HealthMetrics(Serializable):
    """Display-ready health metrics for the trailing month."""

    savings_rate: int
    monthly_burn: int
    runway_months: Union[float, str]
    health_score: int


# Advisor


class InsightType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationIcon(str, Enum):
    TRENDING_DOWN = "TrendingDown"
    SHIELD_ALERT = "ShieldAlert"
    PIE_CHART = "PieChart"
    ZAP = "Zap"
    TRENDING_UP = "TrendingUp"


@dataclass(frozen=True)
class DashboardInsight(Serializable):
    type: InsightType
    text: str
    category: Optional[str] = None


@dataclass(frozen=True)
class Recommendation(Serializable):
    id: str
    title: str
    description: str
    action_label: str
    impact: Impact
    icon: RecommendationIcon


@dataclass(frozen=True)
class Benchmarks(Serializable):
    """Share of income (percent) going to needs, wants and savings."""

    needs: int
    wants: int
    savings: int


@dataclass(frozen=True)
class FinancialDiagnosis(Serializable):
    score: int
    status: HealthStatus
    diagnosis: str
    benchmarks: Benchmarks
    insights: tuple[DashboardInsight, ...]
    recommendations: tuple[Recommendation, ...]


# Pattern analysis


class AnomalyRisk(str, Enum):
    LOW = "baixo"
    MEDIUM = "médio"
    HIGH = "alto"


class HealthTier(str, Enum):
    DIAMOND = "Diamante"
    GOLD = "Ouro"
    SILVER = "Prata"
    BRONZE = "Bronze"


@dataclass(frozen=True)
class CashFlowAnalysis(Serializable):
    total_income: float
    total_expense: float
    monthly_balance: float
    previous_month_comparison: float
    growth_percentage: float


@dataclass(frozen=True)
class CategoryAnomaly(Serializable):
    category_id: Optional[str]
    percent_above_average: int
    current_amount: float
    average_amount: float
    risk_level: AnomalyRisk


@dataclass(frozen=True)
class CategoryExpense(Serializable):
    category_id: Optional[str]
    amount: float


@dataclass(frozen=True)
class NextMonthProjection(Serializable):
    projected_balance: int
    deficit_risk: bool
    confidence: int


@dataclass(frozen=True)
class FinancialHealthScore(Serializable):
    score: int
    tier: HealthTier
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class MonthlyReport(Serializable):
    positive_points: tuple[str, ...]
    attention_points: tuple[str, ...]
    trends: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class BudgetAlert(Serializable):
    category_id: str
    category_name: str
    spent: float
    budget: float
    exceeded_amount: float


# Savings goals


@dataclass(frozen=True)
class SavingsGoal(Serializable):
    """Amount the user is saving towards, optionally by a deadline."""

    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: Optional[datetime] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class GoalProgress(Serializable):
    """Progress of a savings goal and the monthly deposits that reach it."""

    goal_id: Optional[str]
    name: str
    progress: float
    remaining: float
    months_left: int
    base_monthly: float
    moderate_monthly: float
    aggressive_monthly: float
    is_finished: bool
