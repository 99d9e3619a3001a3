"""Policy constants for the analytics engine.

Every threshold, weight and window the engine applies lives here, grouped per
component. Functions accept an optional policy object so callers can tune
them; the defaults below are the published behaviour and bump
``POLICY_VERSION`` whenever one of them changes.
"""

from dataclasses import dataclass

POLICY_VERSION = "1"


@dataclass(frozen=True)
class ForecastPolicy:
    history_months: int = 3
    # Always divide by the full window, even when some months had no activity.
    average_divisor: int = 3
    default_months: int = 6
    band_step: float = 0.05
    medium_risk_ratio: float = 0.5


@dataclass(frozen=True)
class ScoringPolicy:
    """Point table of a health scoring strategy.

    Steps are ``(threshold, points)`` pairs checked in order with a strict
    ``>``; the first match wins.
    """

    base_score: int
    savings_steps: tuple[tuple[float, int], ...]
    savings_fallback: int
    runway_steps: tuple[tuple[float, int], ...]
    # Applied when runway is strictly below the threshold and no step matched.
    runway_critical: tuple[float, int]


ADVISOR_SCORING = ScoringPolicy(
    base_score=50,
    savings_steps=((20, 25), (10, 15), (0, 5)),
    savings_fallback=-20,
    runway_steps=((6, 25), (3, 15)),
    runway_critical=(1, -15),
)

METRICS_SCORING = ScoringPolicy(
    base_score=50,
    savings_steps=((20, 20), (0, 10)),
    savings_fallback=-10,
    runway_steps=((6, 30), (3, 15)),
    runway_critical=(1, -20),
)


@dataclass(frozen=True)
class StatusPolicy:
    excellent: int = 85
    good: int = 65
    critical: int = 40
    runway_cap: float = 24


@dataclass(frozen=True)
class AdvisorPolicy:
    needs_keywords: tuple[str, ...] = ("aluguel", "luz", "internet", "mercado")
    wants_keywords: tuple[str, ...] = ("ifood", "netflix", "lazer")
    healthy_savings: float = 20
    tight_savings: float = 10
    critical_runway: float = 2
    wants_limit: float = 30
    reserve_months: float = 3
    invest_savings: float = 25


@dataclass(frozen=True)
class PatternPolicy:
    baseline_months: int = 3
    anomaly_threshold: float = 1.25
    high_risk_excess: float = 50
    top_expenses_limit: int = 5
    trend_weight: float = 0.5
    confident: int = 85
    unconfident: int = 60
    savings_target: float = 0.3
    savings_weight: float = 0.4
    stability_weight: float = 0.25
    growth_weight: float = 0.25
    control_weight: float = 0.1
    control_penalty: float = 0.5
    diamond: int = 80
    gold: int = 60
    silver: int = 40


@dataclass(frozen=True)
class GoalPolicy:
    """Multipliers of the faster deposit tracks over the even split."""

    moderate_factor: float = 1.3
    aggressive_factor: float = 1.8


DEFAULT_FORECAST_POLICY = ForecastPolicy()
DEFAULT_STATUS_POLICY = StatusPolicy()
DEFAULT_ADVISOR_POLICY = AdvisorPolicy()
DEFAULT_PATTERN_POLICY = PatternPolicy()
DEFAULT_GOAL_POLICY = GoalPolicy()
