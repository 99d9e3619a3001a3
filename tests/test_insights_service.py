"""Tests for the insights service over a data provider."""

import pytest

from finsight.data import InMemoryProvider, JsonFileProvider
from finsight.data.mappers import (
    budget_from_record,
    category_from_record,
    goal_from_record,
    transaction_from_record,
    wallet_from_record,
)
from finsight.domain.entities import AnomalyRisk, ForecastRisk, HealthStatus, HealthTier
from finsight.domain.errors import NotFoundError
from finsight.domain.insights import InsightsService
from finsight.domain.scoring import ScoringStrategy


@pytest.fixture
def service(sample_records):
    """InsightsService over the sample records held in memory."""
    provider = InMemoryProvider(
        transactions=[transaction_from_record(r) for r in sample_records["transactions"]],
        wallets=[wallet_from_record(r) for r in sample_records["wallets"]],
        categories=[category_from_record(r) for r in sample_records["categories"]],
        budgets=[budget_from_record(r) for r in sample_records["budgets"]],
        goals=[goal_from_record(r) for r in sample_records["goals"]],
    )
    return InsightsService(provider)


def test_total_balance(service):
    assert service.total_balance() == 10000


def test_category_names(service):
    assert service.category_names() == {
        "food": "Alimentação",
        "fun": "Lazer",
        "salary": "Salário",
    }


def test_forecast(service, reference_date):
    summary = service.forecast(months=6, today=reference_date)

    assert len(summary.points) == 7
    assert summary.points[0].balance == 10000
    assert summary.points[1].income == 5500
    assert summary.points[1].expense == 2400
    assert summary.points[1].balance == 13100
    assert (summary.points[1].best_case, summary.points[1].worst_case) == (13755, 12445)
    assert summary.points[-1].balance == 28600
    assert summary.risk == ForecastRisk.LOW


def test_health_metrics_default_to_metrics_table(service, reference_date):
    metrics = service.health_metrics(today=reference_date)

    assert metrics.savings_rate == 54
    assert metrics.monthly_burn == 3000
    assert metrics.runway_months == 3.3
    assert metrics.health_score == 85
    assert service.health_metrics(reference_date, ScoringStrategy.ADVISOR).health_score == 90


def test_diagnosis_uses_category_buckets(service, reference_date):
    diagnosis = service.diagnosis(today=reference_date)

    assert diagnosis.score == 90
    assert diagnosis.status == HealthStatus.EXCELLENT
    assert (diagnosis.benchmarks.needs, diagnosis.benchmarks.wants, diagnosis.benchmarks.savings) == (60, 6, 40)
    assert [r.id for r in diagnosis.recommendations] == ["invest-surplus"]


def test_cash_flow(service, reference_date):
    analysis = service.cash_flow(reference_date)

    assert analysis.monthly_balance == 2000
    assert analysis.previous_month_comparison == 600
    assert analysis.growth_percentage == pytest.approx(42.857, abs=1e-3)


def test_anomalies(service, reference_date):
    anomalies = service.anomalies(reference_date)

    assert [(a.category_id, a.percent_above_average, a.risk_level) for a in anomalies] == [
        ("food", 600, AnomalyRisk.HIGH)
    ]


def test_top_expenses(service, reference_date):
    ranked = service.top_expenses(reference_date)

    assert [(e.category_id, e.amount) for e in ranked] == [(None, 2000), ("food", 700), ("fun", 300)]


def test_projection(service, reference_date):
    projection = service.projection(reference_date)

    assert projection.projected_balance == 775
    assert projection.deficit_risk is False
    assert projection.confidence == 60


def test_health_score(service, reference_date):
    health = service.health_score(reference_date)

    assert health.score == 81
    assert health.tier == HealthTier.DIAMOND


def test_monthly_report_uses_category_names(service, reference_date):
    report = service.monthly_report(reference_date)

    assert report.positive_points == (
        "Saldo positivo de R$ 2.000.",
        "Crescimento de 42.9% em relação ao mês anterior.",
    )
    assert report.attention_points == ("Gasto atípico em Alimentação (600% acima da média).",)
    assert report.trends == ("Projeção de R$ 775 para o próximo período.",)


def test_budget_alerts(service, reference_date):
    alerts = service.budget_alerts(reference_date)

    assert len(alerts) == 1
    assert alerts[0].category_name == "Alimentação"
    assert alerts[0].exceeded_amount == 200


def test_goal_progress(service, reference_date):
    progress = service.goal_progress(reference_date)

    assert [p.goal_id for p in progress] == ["g1", "g2"]
    assert progress[0].months_left == 6
    assert progress[0].base_monthly == 1000
    assert not progress[0].is_finished
    assert progress[1].is_finished


def test_json_provider_gives_same_results(data_file, service, reference_date):
    from_file = InsightsService(JsonFileProvider(data_file))

    assert from_file.monthly_report(reference_date) == service.monthly_report(reference_date)
    assert from_file.forecast(3, reference_date) == service.forecast(3, reference_date)


def test_missing_data_file_surfaces_not_found(tmp_path, reference_date):
    service = InsightsService(JsonFileProvider(tmp_path / "missing.json"))

    with pytest.raises(NotFoundError):
        service.cash_flow(reference_date)
