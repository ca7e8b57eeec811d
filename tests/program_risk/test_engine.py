"""
Tests for the Program Risk Engine.

============================================================
COVERAGE
============================================================
- Insufficient data (every domain unavailable)
- Budget overrun and funding shortfall scenarios
- Full five-domain assessment
- Score bounds for every availability combination
- Output helpers (to_dict, format_risk_summary)

============================================================
"""

import itertools

import pytest

from program_risk import (
    ActionConfig,
    ActionPriority,
    ComplianceSummary,
    FundingSummary,
    IndicatorSummary,
    ProgramRiskConfig,
    ProgramRiskEngine,
    RiskCategory,
    RiskLevel,
    ScheduleSummary,
    assess_risk,
    format_risk_summary,
    get_default_config,
    get_risk_level_from_score,
)


# =============================================================
# TEST: Insufficient data
# =============================================================

class TestInsufficientData:
    """No domain available."""

    def test_all_none(self, engine):
        assessment = engine.assess(None, None, None, None, None)

        assert assessment.overall_score == 0
        assert assessment.overall_level == RiskLevel.LOW
        assert list(assessment.factors) == []
        assert list(assessment.actions) == []
        assert assessment.has_data is False

    def test_unscored_inputs_count_as_unavailable(self, engine):
        assessment = engine.assess(
            funding=FundingSummary(total_expected=0, total_received=0),
            indicators=IndicatorSummary(),
        )
        assert assessment.has_data is False
        assert assessment.overall_score == 0


# =============================================================
# TEST: Scenarios
# =============================================================

class TestBudgetOverrun:
    """Overrun with every other domain unavailable."""

    def test_score_and_level(self, engine, overrun_budget):
        assessment = engine.assess(budget=overrun_budget)

        assert assessment.overall_score == 100
        assert assessment.overall_level == RiskLevel.CRITICAL
        assert len(assessment.factors) == 1
        assert assessment.factors[0].category == RiskCategory.BUDGET

    def test_two_urgent_budget_actions(self, engine, overrun_budget):
        assessment = engine.assess(budget=overrun_budget)

        assert len(assessment.actions) == 2
        assert all(a.category == RiskCategory.BUDGET for a in assessment.actions)
        assert all(a.priority == ActionPriority.URGENT for a in assessment.actions)
        assert "stop new spending immediately" in [a.description for a in assessment.actions]

    def test_action_text_is_exact(self, overrun_budget):
        assessment = assess_risk(overrun_budget, None, None, None, None)

        assert [a.description for a in assessment.actions] == [
            "review budget and control spending",
            "stop new spending immediately",
        ]


class TestFundingShortfall:
    """40% of expected funding received."""

    def test_generic_and_rule_actions(self, engine, underfunded):
        assessment = engine.assess(funding=underfunded)

        assert assessment.overall_score == 80
        assert [(a.priority, a.description) for a in assessment.actions] == [
            (ActionPriority.URGENT, "follow up on pending funding"),
            (ActionPriority.HIGH, "follow up on 600,000 XOF of outstanding funding"),
        ]


class TestFullAssessment:
    """All five domains available."""

    def test_every_domain_scored(
        self,
        engine,
        overrun_budget,
        delayed_schedule,
        underfunded,
        sparse_indicators,
        empty_compliance,
    ):
        assessment = engine.assess(
            overrun_budget,
            delayed_schedule,
            underfunded,
            sparse_indicators,
            empty_compliance,
            program_id="PRG-001",
        )

        assert [f.category for f in assessment.factors] == RiskCategory.all_categories()
        assert [f.score for f in assessment.factors] == [100, 60, 80, 40, 20]
        assert assessment.overall_score == 69
        assert assessment.overall_level == RiskLevel.HIGH
        assert assessment.program_id == "PRG-001"

    def test_action_ranking(
        self,
        engine,
        overrun_budget,
        delayed_schedule,
        underfunded,
        sparse_indicators,
        empty_compliance,
    ):
        assessment = engine.assess(
            overrun_budget,
            delayed_schedule,
            underfunded,
            sparse_indicators,
            empty_compliance,
        )

        assert [(a.priority, a.category) for a in assessment.actions] == [
            (ActionPriority.URGENT, RiskCategory.BUDGET),
            (ActionPriority.URGENT, RiskCategory.FUNDING),
            (ActionPriority.URGENT, RiskCategory.BUDGET),
            (ActionPriority.HIGH, RiskCategory.SCHEDULE),
            (ActionPriority.HIGH, RiskCategory.SCHEDULE),
            (ActionPriority.HIGH, RiskCategory.FUNDING),
        ]
        assert len(assessment.urgent_actions) == 3
        assert assessment.is_high_or_critical

    def test_healthy_program(self, engine, healthy_budget):
        assessment = engine.assess(
            budget=healthy_budget,
            schedule=ScheduleSummary(total_milestones=4, overdue_milestones=0, completion_rate=75.0),
            funding=FundingSummary(total_expected=100, total_received=100),
            compliance=ComplianceSummary(document_count=3, report_count=2),
        )

        assert assessment.overall_score == 0
        assert assessment.overall_level == RiskLevel.LOW
        assert assessment.has_data
        assert list(assessment.actions) == []


class TestScoreBounds:
    """Score is within 0-100 for every combination of available domains."""

    def test_every_availability_combination(
        self,
        engine,
        overrun_budget,
        delayed_schedule,
        underfunded,
        sparse_indicators,
        empty_compliance,
    ):
        summaries = [overrun_budget, delayed_schedule, underfunded, sparse_indicators, empty_compliance]

        for mask in itertools.product([True, False], repeat=5):
            inputs = [s if present else None for s, present in zip(summaries, mask)]
            assessment = engine.assess(*inputs)

            assert 0 <= assessment.overall_score <= 100
            assert assessment.overall_level == RiskLevel.from_score(assessment.overall_score)
            assert len(assessment.factors) == sum(mask)

    def test_assessments_are_independent(self, engine, overrun_budget):
        first = engine.assess(budget=overrun_budget)
        second = engine.assess()

        assert first.overall_score == 100
        assert second.overall_score == 0
        assert first.assessment_id != second.assessment_id

    def test_identical_inputs_compare_equal(self, engine, overrun_budget, underfunded):
        first = engine.assess(budget=overrun_budget, funding=underfunded, program_id="PRG-001")
        second = engine.assess(budget=overrun_budget, funding=underfunded, program_id="PRG-001")

        assert first.assessment_id != second.assessment_id
        assert first == second
        assert first != engine.assess(budget=overrun_budget, program_id="PRG-001")


# =============================================================
# TEST: Convenience functions and output helpers
# =============================================================

class TestConvenienceFunctions:
    def test_assess_risk(self, overrun_budget):
        assessment = assess_risk(overrun_budget, None, None, None, None)
        assert assessment.overall_score == 100

    def test_assess_risk_with_config(self, underfunded):
        config = ProgramRiskConfig(actions=ActionConfig(currency_code="EUR"))
        assessment = assess_risk(None, None, underfunded, None, None, config=config)

        assert assessment.factors[0].detail.endswith("EUR)")
        assert assessment.actions[-1].description == "follow up on 600,000 EUR of outstanding funding"

    @pytest.mark.parametrize("score,level", [
        (10, RiskLevel.LOW),
        (30, RiskLevel.MEDIUM),
        (60, RiskLevel.HIGH),
        (90, RiskLevel.CRITICAL),
    ])
    def test_get_risk_level_from_score(self, score, level):
        assert get_risk_level_from_score(score) == level

    def test_default_config(self):
        config = get_default_config()
        weights = config.aggregation.weights

        assert sum(weights.values()) == pytest.approx(1.0)
        assert config.to_dict()["aggregation"]["weights"]["budget"] == 0.30
        assert ProgramRiskEngine(config).get_config() is config


class TestOutputHelpers:
    def test_to_dict(self, engine, overrun_budget):
        data = engine.assess(budget=overrun_budget, program_id="PRG-9").to_dict()

        assert data["program_id"] == "PRG-9"
        assert data["overall_score"] == 100
        assert data["overall_level"] == "critical"
        assert data["has_data"] is True
        assert data["factors"] == [{
            "category": "budget",
            "score": 100.0,
            "level": "critical",
            "detail": "Budget overrun",
        }]
        assert data["actions"][1]["description"] == "stop new spending immediately"
        assert data["engine_version"] == "1.0.0"

    def test_get_factor(self, engine, overrun_budget):
        assessment = engine.assess(budget=overrun_budget)

        assert assessment.get_factor(RiskCategory.BUDGET).score == 100
        assert assessment.get_factor(RiskCategory.FUNDING) is None

    def test_format_summary(self, engine, overrun_budget):
        text = format_risk_summary(engine.assess(budget=overrun_budget))

        assert "PROGRAM RISK ASSESSMENT" in text
        assert "Overall Score: 100/100" in text
        assert "Risk Level: CRITICAL" in text
        assert "[URGENT] BUDGET: stop new spending immediately" in text

    def test_format_summary_without_data(self, engine):
        text = format_risk_summary(engine.assess())

        assert "Insufficient data" in text
        assert "Overall Score" not in text
