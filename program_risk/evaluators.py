"""
Program Risk Engine - Domain Evaluators.

============================================================
PURPOSE
============================================================
Individual risk evaluators, one per program domain.

Each evaluator:
1. Takes that domain's summary (or None)
2. Walks an ordered decision table
3. Returns a RiskFactor with score, level and detail
   (or None when the domain is unavailable)

============================================================
DESIGN PRINCIPLES
============================================================
- Pure functions: same input = same output
- No external state or side effects
- First matching rule wins
- Division by zero is the only input guarded against

============================================================
DECISION TABLE PATTERN
============================================================
    rules = [
        (condition_1, score_1),
        (condition_2, score_2),
        ...
    ]
    score = first score whose condition holds, else 0

============================================================
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from .types import (
    RiskCategory,
    RiskFactor,
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorSummary,
    ComplianceSummary,
)
from .config import (
    BudgetRiskConfig,
    ScheduleRiskConfig,
    FundingRiskConfig,
    IndicatorRiskConfig,
    ComplianceRiskConfig,
)


# (condition, score)
DecisionRule = Tuple[bool, float]


def _pct(part: Optional[float], whole: Optional[float]) -> float:
    """part / whole * 100, or 0 when whole is missing or zero."""
    if not whole:
        return 0.0
    return (part or 0.0) * 100.0 / whole


# ============================================================
# BASE EVALUATOR
# ============================================================


class BaseDomainEvaluator(ABC):
    """
    Abstract base class for domain evaluators.

    Provides the decision table walk and the None passthrough.
    """

    @property
    @abstractmethod
    def category(self) -> RiskCategory:
        """Return the category this evaluator handles."""
        pass

    @abstractmethod
    def _score(self, summary: Any) -> Optional[RiskFactor]:
        """Score a present summary."""
        pass

    def evaluate(self, summary: Optional[Any]) -> Optional[RiskFactor]:
        """
        Evaluate one domain.

        Args:
            summary: The domain summary, or None if unavailable

        Returns:
            RiskFactor, or None when the domain is excluded
        """
        if summary is None:
            return None
        return self._score(summary)

    def _first_match(self, rules: List[DecisionRule], default: float = 0.0) -> float:
        """Return the score of the first rule whose condition holds."""
        for condition, score in rules:
            if condition:
                return score
        return default

    def _factor(self, score: float, detail: str) -> RiskFactor:
        return RiskFactor.from_score(self.category, score, detail)


# ============================================================
# BUDGET EVALUATOR
# ============================================================


class BudgetRiskEvaluator(BaseDomainEvaluator):
    """
    Evaluate budget execution risk.

    ============================================================
    METRICS EVALUATED
    ============================================================
    1. Available balance (overrun detection)
    2. Spent rate (spent / allocated)
    3. Commitment rate (committed / allocated)

    ============================================================
    """

    def __init__(self, config: Optional[BudgetRiskConfig] = None):
        self.config = config or BudgetRiskConfig()

    @property
    def category(self) -> RiskCategory:
        return RiskCategory.BUDGET

    def _score(self, summary: BudgetSummary) -> RiskFactor:
        cfg = self.config
        spent_rate = _pct(summary.total_spent, summary.total_allocated)
        commit_rate = _pct(summary.total_committed, summary.total_allocated)
        overrun = summary.total_available is not None and summary.total_available < 0

        score = self._first_match([
            (overrun, cfg.overrun_score),
            (spent_rate > cfg.spent_critical_pct, cfg.spent_critical_score),
            (spent_rate > cfg.spent_high_pct, cfg.spent_high_score),
            (commit_rate > cfg.commit_critical_pct, cfg.commit_critical_score),
            (commit_rate > cfg.commit_high_pct, cfg.commit_high_score),
            (spent_rate > cfg.spent_elevated_pct, cfg.spent_elevated_score),
        ])

        if overrun:
            detail = "Budget overrun"
        else:
            detail = f"Spent: {spent_rate:.1f}% | Committed: {commit_rate:.1f}%"

        return self._factor(score, detail)


# ============================================================
# SCHEDULE EVALUATOR
# ============================================================


class ScheduleRiskEvaluator(BaseDomainEvaluator):
    """
    Evaluate milestone schedule risk.

    Overdue milestones dominate; completion rate is only
    consulted when nothing is overdue.
    """

    def __init__(self, config: Optional[ScheduleRiskConfig] = None):
        self.config = config or ScheduleRiskConfig()

    @property
    def category(self) -> RiskCategory:
        return RiskCategory.SCHEDULE

    def _score(self, summary: ScheduleSummary) -> RiskFactor:
        cfg = self.config
        overdue = summary.overdue_milestones or 0
        total = summary.total_milestones or 0
        completion = summary.completion_rate

        has_overdue = overdue > 0 and total > 0
        overdue_score = 0.0
        if has_overdue:
            overdue_score = min(cfg.max_score, overdue * 100.0 / total + cfg.overdue_base_score)

        # A missing completion rate matches neither threshold
        score = self._first_match([
            (has_overdue, overdue_score),
            (completion is not None and completion < cfg.completion_low_pct, cfg.completion_low_score),
            (completion is not None and completion < cfg.completion_partial_pct, cfg.completion_partial_score),
        ])

        if overdue > 0:
            detail = f"{overdue} overdue milestone(s)"
        else:
            detail = f"Completion: {completion or 0.0:.1f}%"

        return self._factor(score, detail)


# ============================================================
# FUNDING EVALUATOR
# ============================================================


class FundingRiskEvaluator(BaseDomainEvaluator):
    """
    Evaluate funding receipt risk.

    Not scored (None) when no funding is expected.
    """

    def __init__(
        self,
        config: Optional[FundingRiskConfig] = None,
        currency_code: str = "XOF",
    ):
        self.config = config or FundingRiskConfig()
        self.currency_code = currency_code

    @property
    def category(self) -> RiskCategory:
        return RiskCategory.FUNDING

    def _score(self, summary: FundingSummary) -> Optional[RiskFactor]:
        cfg = self.config
        expected = summary.total_expected
        if expected is None or expected <= 0:
            return None

        received = summary.total_received or 0.0
        received_rate = received * 100.0 / expected

        score = self._first_match([
            (received_rate < cfg.received_critical_pct, cfg.received_critical_score),
            (received_rate < cfg.received_low_pct, cfg.received_low_score),
            (received_rate < cfg.received_partial_pct, cfg.received_partial_score),
        ])

        detail = (
            f"{received_rate:.1f}% received "
            f"({received:,.0f} / {expected:,.0f} {self.currency_code})"
        )
        return self._factor(score, detail)


# ============================================================
# INDICATOR EVALUATOR
# ============================================================


class IndicatorRiskEvaluator(BaseDomainEvaluator):
    """
    Evaluate indicator coverage risk.

    Only checks whether the program is tracking: quantitative
    indicators with a target count as covered. Measured values
    are never compared against targets.
    """

    def __init__(self, config: Optional[IndicatorRiskConfig] = None):
        self.config = config or IndicatorRiskConfig()

    @property
    def category(self) -> RiskCategory:
        return RiskCategory.INDICATORS

    def _score(self, summary: IndicatorSummary) -> Optional[RiskFactor]:
        cfg = self.config
        total = summary.total
        if total == 0:
            return None

        covered = summary.quantitative_with_target
        score = self._first_match([
            (covered < total * cfg.min_coverage_ratio, cfg.low_coverage_score),
        ])

        return self._factor(score, f"{total} indicators tracked, {covered} with targets")


# ============================================================
# COMPLIANCE EVALUATOR
# ============================================================


class ComplianceRiskEvaluator(BaseDomainEvaluator):
    """Evaluate documentation and reporting completeness."""

    def __init__(self, config: Optional[ComplianceRiskConfig] = None):
        self.config = config or ComplianceRiskConfig()

    @property
    def category(self) -> RiskCategory:
        return RiskCategory.COMPLIANCE

    def _score(self, summary: ComplianceSummary) -> RiskFactor:
        cfg = self.config
        score = 0.0
        if summary.document_count == 0:
            score = cfg.missing_documents_score
        if summary.report_count == 0:
            score = max(score, cfg.missing_reports_score)

        detail = f"{summary.document_count or 0} documents, {summary.report_count or 0} reports"
        return self._factor(score, detail)
