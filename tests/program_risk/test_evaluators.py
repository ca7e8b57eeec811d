"""
Tests for the domain evaluators.

Each domain's decision table is checked rule by rule,
plus the None passthrough and the division-by-zero guards.
"""

import pytest

from program_risk import (
    RiskCategory,
    RiskLevel,
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorRecord,
    IndicatorSummary,
    ComplianceSummary,
    IndicatorType,
    BudgetRiskEvaluator,
    ScheduleRiskEvaluator,
    FundingRiskEvaluator,
    IndicatorRiskEvaluator,
    ComplianceRiskEvaluator,
    RiskFactor,
)


# =============================================================
# TEST: Severity mapping
# =============================================================

class TestRiskLevelMapping:
    """Shared score -> level mapping."""

    @pytest.mark.parametrize("score,level", [
        (0, RiskLevel.LOW),
        (24.9, RiskLevel.LOW),
        (25, RiskLevel.MEDIUM),
        (49.9, RiskLevel.MEDIUM),
        (50, RiskLevel.HIGH),
        (74.9, RiskLevel.HIGH),
        (75, RiskLevel.CRITICAL),
        (100, RiskLevel.CRITICAL),
    ])
    def test_boundaries(self, score, level):
        assert RiskLevel.from_score(score) == level

    def test_factor_level_follows_score(self):
        factor = RiskFactor.from_score(RiskCategory.BUDGET, 60, "detail")
        assert factor.level == RiskLevel.HIGH


class TestNonePassthrough:
    """Unavailable domains are excluded, not scored."""

    @pytest.mark.parametrize("evaluator", [
        BudgetRiskEvaluator(),
        ScheduleRiskEvaluator(),
        FundingRiskEvaluator(),
        IndicatorRiskEvaluator(),
        ComplianceRiskEvaluator(),
    ])
    def test_none_returns_none(self, evaluator):
        assert evaluator.evaluate(None) is None


# =============================================================
# TEST: Budget
# =============================================================

class TestBudgetRiskEvaluator:
    """Budget decision table."""

    def setup_method(self):
        self.evaluator = BudgetRiskEvaluator()

    def _score(self, **kwargs):
        return self.evaluator.evaluate(BudgetSummary(**kwargs)).score

    def test_overrun_scores_100(self, overrun_budget):
        factor = self.evaluator.evaluate(overrun_budget)

        assert factor.category == RiskCategory.BUDGET
        assert factor.score == 100
        assert factor.level == RiskLevel.CRITICAL
        assert factor.detail == "Budget overrun"

    def test_overrun_wins_over_spending(self):
        assert self._score(total_allocated=100, total_spent=95, total_available=-1) == 100

    @pytest.mark.parametrize("spent,expected", [
        (95, 90),
        (91, 90),
        (90, 70),
        (80, 70),
        (75, 20),
        (60, 20),
        (50, 0),
        (10, 0),
    ])
    def test_spent_rate_thresholds(self, spent, expected):
        assert self._score(total_allocated=100, total_spent=spent, total_committed=0) == expected

    @pytest.mark.parametrize("committed,expected", [
        (95, 60),
        (80, 40),
        (75, 0),
    ])
    def test_commit_rate_thresholds(self, committed, expected):
        assert self._score(total_allocated=100, total_spent=10, total_committed=committed) == expected

    def test_spending_checked_before_commitments(self):
        assert self._score(total_allocated=100, total_spent=80, total_committed=95) == 70

    def test_commitments_checked_before_elevated_spending(self):
        assert self._score(total_allocated=100, total_spent=60, total_committed=80) == 40

    def test_zero_allocation_does_not_divide(self):
        factor = self.evaluator.evaluate(
            BudgetSummary(total_allocated=0, total_spent=500, total_committed=500, total_available=0)
        )
        assert factor.score == 0
        assert factor.detail == "Spent: 0.0% | Committed: 0.0%"

    def test_missing_fields_score_zero(self):
        assert self._score() == 0

    def test_detail_reports_rates(self, healthy_budget):
        factor = self.evaluator.evaluate(healthy_budget)
        assert factor.detail == "Spent: 30.0% | Committed: 20.0%"
        assert factor.level == RiskLevel.LOW

    def test_score_never_decreases_as_spending_rises(self):
        for committed in (0, 80, 95):
            previous = -1.0
            for spent in range(0, 101, 5):
                score = self._score(
                    total_allocated=100,
                    total_committed=committed,
                    total_spent=spent,
                    total_available=None,
                )
                assert score >= previous, f"committed={committed} spent={spent}"
                previous = score


# =============================================================
# TEST: Schedule
# =============================================================

class TestScheduleRiskEvaluator:
    """Schedule decision table."""

    def setup_method(self):
        self.evaluator = ScheduleRiskEvaluator()

    def test_overdue_milestones(self, delayed_schedule):
        factor = self.evaluator.evaluate(delayed_schedule)

        assert factor.score == 60
        assert factor.level == RiskLevel.HIGH
        assert factor.detail == "3 overdue milestone(s)"

    def test_overdue_score_is_capped(self):
        factor = self.evaluator.evaluate(ScheduleSummary(total_milestones=10, overdue_milestones=9))
        assert factor.score == 100

    def test_overdue_takes_precedence_over_completion(self):
        factor = self.evaluator.evaluate(
            ScheduleSummary(total_milestones=20, overdue_milestones=1, completion_rate=10.0)
        )
        assert factor.score == 35

    @pytest.mark.parametrize("completion,expected", [
        (10.0, 50),
        (49.9, 50),
        (50.0, 30),
        (69.9, 30),
        (70.0, 0),
        (100.0, 0),
    ])
    def test_completion_thresholds(self, completion, expected):
        factor = self.evaluator.evaluate(
            ScheduleSummary(total_milestones=10, overdue_milestones=0, completion_rate=completion)
        )
        assert factor.score == expected

    def test_overdue_without_total_falls_through(self):
        factor = self.evaluator.evaluate(
            ScheduleSummary(total_milestones=0, overdue_milestones=2, completion_rate=60.0)
        )
        assert factor.score == 30

    def test_missing_completion_rate_scores_zero(self):
        factor = self.evaluator.evaluate(ScheduleSummary(total_milestones=4, overdue_milestones=0))
        assert factor.score == 0
        assert factor.detail == "Completion: 0.0%"


# =============================================================
# TEST: Funding
# =============================================================

class TestFundingRiskEvaluator:
    """Funding decision table."""

    def setup_method(self):
        self.evaluator = FundingRiskEvaluator()

    def test_forty_percent_received(self, underfunded):
        factor = self.evaluator.evaluate(underfunded)

        assert factor.score == 80
        assert factor.level == RiskLevel.CRITICAL
        assert factor.detail == "40.0% received (400,000 / 1,000,000 XOF)"

    @pytest.mark.parametrize("received,expected", [
        (0, 80),
        (499, 80),
        (500, 50),
        (699, 50),
        (700, 30),
        (849, 30),
        (850, 0),
        (1000, 0),
    ])
    def test_received_rate_thresholds(self, received, expected):
        factor = self.evaluator.evaluate(FundingSummary(total_expected=1000, total_received=received))
        assert factor.score == expected

    @pytest.mark.parametrize("expected_total", [None, 0, -10])
    def test_not_scored_without_expected_funding(self, expected_total):
        summary = FundingSummary(total_expected=expected_total, total_received=100)
        assert self.evaluator.evaluate(summary) is None

    def test_missing_received_counts_as_nothing_received(self):
        factor = self.evaluator.evaluate(FundingSummary(total_expected=1000))
        assert factor.score == 80


# =============================================================
# TEST: Indicators
# =============================================================

class TestIndicatorRiskEvaluator:
    """Indicator coverage."""

    def setup_method(self):
        self.evaluator = IndicatorRiskEvaluator()

    def test_low_coverage(self, sparse_indicators):
        factor = self.evaluator.evaluate(sparse_indicators)

        assert factor.score == 40
        assert factor.level == RiskLevel.MEDIUM
        assert factor.detail == "4 indicators tracked, 1 with targets"

    def test_half_covered_is_enough(self):
        summary = IndicatorSummary(indicators=(
            IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=10.0),
            IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=20.0),
            IndicatorRecord(type=IndicatorType.QUALITATIVE),
            IndicatorRecord(type=IndicatorType.QUALITATIVE),
        ))
        assert self.evaluator.evaluate(summary).score == 0

    def test_zero_target_is_not_coverage(self):
        summary = IndicatorSummary(indicators=(
            IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=0.0),
            IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=0.0),
        ))
        assert self.evaluator.evaluate(summary).score == 40

    def test_qualitative_targets_do_not_count(self):
        summary = IndicatorSummary(indicators=(
            IndicatorRecord(type=IndicatorType.QUALITATIVE, target=5.0),
            IndicatorRecord(type=IndicatorType.QUALITATIVE, target=5.0),
        ))
        assert self.evaluator.evaluate(summary).score == 40

    def test_empty_listing_is_not_scored(self):
        assert self.evaluator.evaluate(IndicatorSummary()) is None


# =============================================================
# TEST: Compliance
# =============================================================

class TestComplianceRiskEvaluator:
    """Documents and reports."""

    def setup_method(self):
        self.evaluator = ComplianceRiskEvaluator()

    @pytest.mark.parametrize("documents,reports,expected", [
        (0, 0, 20),
        (0, 3, 20),
        (2, 0, 15),
        (2, 3, 0),
        (None, None, 0),
        (None, 0, 15),
    ])
    def test_scores(self, documents, reports, expected):
        factor = self.evaluator.evaluate(
            ComplianceSummary(document_count=documents, report_count=reports)
        )
        assert factor.score == expected
        assert factor.level == RiskLevel.LOW

    def test_detail(self, empty_compliance):
        factor = self.evaluator.evaluate(empty_compliance)
        assert factor.detail == "0 documents, 0 reports"
