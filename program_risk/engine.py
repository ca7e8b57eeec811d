"""
Program Risk Engine - Main Entry Point.

============================================================
PURPOSE
============================================================
The ProgramRiskEngine turns five optional domain summaries
into one RiskAssessment.

It orchestrates:
1. Domain evaluations (one evaluator per domain)
2. Weighted aggregation with renormalization
3. Corrective action generation and ranking
4. Result packaging

============================================================
DESIGN PRINCIPLES
============================================================
- Synchronous, no I/O, no shared mutable state
- Safe to call concurrently from many threads
- Never raises for well-typed input
- A missing domain is passed as None, never as zeros

============================================================
USAGE
============================================================
    from program_risk import assess_risk, BudgetSummary

    assessment = assess_risk(
        budget=BudgetSummary(total_allocated=1_000_000, total_spent=800_000),
        schedule=None,
        funding=None,
        indicators=None,
        compliance=None,
    )

    print(f"Risk Level: {assessment.overall_level.name}")
    print(f"Score: {assessment.overall_score}/100")

============================================================
"""

import logging
from typing import List, Optional

from .types import (
    RiskLevel,
    RiskFactor,
    RiskAssessment,
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorSummary,
    ComplianceSummary,
)
from .config import ProgramRiskConfig
from .evaluators import (
    BudgetRiskEvaluator,
    ScheduleRiskEvaluator,
    FundingRiskEvaluator,
    IndicatorRiskEvaluator,
    ComplianceRiskEvaluator,
)
from .aggregator import RiskAggregator
from .prioritizer import ActionPrioritizer

logger = logging.getLogger(__name__)


class ProgramRiskEngine:
    """
    Main orchestrator for the Program Risk Engine.

    ============================================================
    RESPONSIBILITIES
    ============================================================
    1. Initialize evaluators, aggregator and prioritizer
    2. Evaluate each available domain
    3. Aggregate into an overall score and level
    4. Rank corrective actions
    5. Package output

    ============================================================
    STATE
    ============================================================
    Configuration only. Nothing is kept between calls.

    ============================================================
    """

    def __init__(self, config: Optional[ProgramRiskConfig] = None):
        """
        Initialize the Program Risk Engine.

        Args:
            config: Engine configuration. Uses defaults if not provided.
        """
        self.config = config or ProgramRiskConfig()

        self._budget_evaluator = BudgetRiskEvaluator(self.config.budget)
        self._schedule_evaluator = ScheduleRiskEvaluator(self.config.schedule)
        self._funding_evaluator = FundingRiskEvaluator(
            self.config.funding,
            currency_code=self.config.actions.currency_code,
        )
        self._indicator_evaluator = IndicatorRiskEvaluator(self.config.indicators)
        self._compliance_evaluator = ComplianceRiskEvaluator(self.config.compliance)

        self._aggregator = RiskAggregator(self.config.aggregation)
        self._prioritizer = ActionPrioritizer(self.config.actions)

    def assess(
        self,
        budget: Optional[BudgetSummary] = None,
        schedule: Optional[ScheduleSummary] = None,
        funding: Optional[FundingSummary] = None,
        indicators: Optional[IndicatorSummary] = None,
        compliance: Optional[ComplianceSummary] = None,
        program_id: Optional[str] = None,
    ) -> RiskAssessment:
        """
        Perform a complete risk assessment.

        Args:
            budget: Budget summary or None if unavailable
            schedule: Milestone summary or None if unavailable
            funding: Funding summary or None if unavailable
            indicators: Indicator listing or None if unavailable
            compliance: Document/report counts or None if unavailable
            program_id: Optional identifier carried into the result

        Returns:
            RiskAssessment, fully populated on every path
        """
        # --------------------------------------------------
        # Step 1: Evaluate domains (canonical order)
        # --------------------------------------------------
        evaluated = [
            self._budget_evaluator.evaluate(budget),
            self._schedule_evaluator.evaluate(schedule),
            self._funding_evaluator.evaluate(funding),
            self._indicator_evaluator.evaluate(indicators),
            self._compliance_evaluator.evaluate(compliance),
        ]
        factors: List[RiskFactor] = [f for f in evaluated if f is not None]

        # --------------------------------------------------
        # Step 2: Aggregate
        # --------------------------------------------------
        overall_score, overall_level = self._aggregator.aggregate(factors)

        # --------------------------------------------------
        # Step 3: Corrective actions
        # --------------------------------------------------
        actions = self._prioritizer.prioritize(
            factors,
            budget=budget,
            schedule=schedule,
            funding=funding,
        )

        logger.debug(
            f"Assessed program {program_id or '-'}: score={overall_score} "
            f"level={overall_level.name} factors={len(factors)} actions={len(actions)}"
        )

        return RiskAssessment(
            overall_score=overall_score,
            overall_level=overall_level,
            factors=tuple(factors),
            actions=tuple(actions),
            program_id=program_id,
            engine_version=self.config.engine_version,
        )

    def get_config(self) -> ProgramRiskConfig:
        """Return the current engine configuration."""
        return self.config


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def assess_risk(
    budget: Optional[BudgetSummary],
    schedule: Optional[ScheduleSummary],
    funding: Optional[FundingSummary],
    indicators: Optional[IndicatorSummary],
    compliance: Optional[ComplianceSummary],
    config: Optional[ProgramRiskConfig] = None,
) -> RiskAssessment:
    """
    Assess program risk in one call.

    Pass None for every domain whose provider failed or timed out.

    Args:
        budget: Budget summary or None
        schedule: Milestone summary or None
        funding: Funding summary or None
        indicators: Indicator listing or None
        compliance: Document/report counts or None
        config: Optional engine configuration

    Returns:
        RiskAssessment
    """
    engine = ProgramRiskEngine(config=config)
    return engine.assess(
        budget=budget,
        schedule=schedule,
        funding=funding,
        indicators=indicators,
        compliance=compliance,
    )


def get_risk_level_from_score(score: float) -> RiskLevel:
    """Classify a 0-100 score."""
    return RiskLevel.from_score(score)


def format_risk_summary(assessment: RiskAssessment) -> str:
    """
    Format a human-readable risk summary.

    Useful for logging and reports.

    Args:
        assessment: Risk assessment

    Returns:
        Formatted summary string
    """
    lines = [
        "=" * 50,
        "PROGRAM RISK ASSESSMENT",
        "=" * 50,
    ]

    if not assessment.has_data:
        lines.append("Insufficient data: no domain available")
    else:
        lines.append(f"Overall Score: {assessment.overall_score}/100")
        lines.append(f"Risk Level: {assessment.overall_level.name}")

    lines.append(f"Assessed At: {assessment.assessed_at.isoformat()}")

    if assessment.factors:
        lines.append("")
        lines.append("Factors:")
        for factor in assessment.factors:
            lines.append(
                f"  {factor.category.name:<11} {factor.score:>5.1f}  "
                f"{factor.level.name:<8} {factor.detail}"
            )

    if assessment.actions:
        lines.append("")
        lines.append("Actions:")
        for action in assessment.actions:
            lines.append(
                f"  [{action.priority.name}] {action.category.name}: {action.description}"
            )

    lines.append("=" * 50)
    return "\n".join(lines)
