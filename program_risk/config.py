"""
Program Risk Engine - Configuration.

============================================================
PURPOSE
============================================================
Defines all configuration dataclasses, thresholds, weights
and remediation phrases for the Program Risk Engine.

============================================================
DESIGN PRINCIPLES
============================================================
- Thresholds are percentages (0-100) unless stated otherwise
- Scores are on the 0-100 scale
- Each threshold has documentation
- Immutable configurations

============================================================
DECISION TABLES
============================================================
Each domain is scored by an ordered decision table: rules
are checked top to bottom and the first match sets the
score. No match = score 0.

============================================================
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict

from dotenv import load_dotenv

from .types import RiskCategory


# ============================================================
# BUDGET RISK CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class BudgetRiskConfig:
    """
    Configuration for Budget risk.

    ============================================================
    WHAT WE MEASURE
    ============================================================
    - Available balance (negative = overrun)
    - Spent rate: spent / allocated
    - Commitment rate: committed / allocated

    ============================================================
    DECISION TABLE (first match wins)
    ============================================================
    available < 0          -> 100
    spent rate > 90%       -> 90
    spent rate > 75%       -> 70
    commitment rate > 90%  -> 60
    commitment rate > 75%  -> 40
    spent rate > 50%       -> 20

    ============================================================
    """

    overrun_score: float = 100.0

    spent_critical_pct: float = 90.0
    spent_critical_score: float = 90.0

    spent_high_pct: float = 75.0
    spent_high_score: float = 70.0

    commit_critical_pct: float = 90.0
    commit_critical_score: float = 60.0

    commit_high_pct: float = 75.0
    commit_high_score: float = 40.0

    spent_elevated_pct: float = 50.0
    spent_elevated_score: float = 20.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overrun_score": self.overrun_score,
            "spent_critical_pct": self.spent_critical_pct,
            "spent_critical_score": self.spent_critical_score,
            "spent_high_pct": self.spent_high_pct,
            "spent_high_score": self.spent_high_score,
            "commit_critical_pct": self.commit_critical_pct,
            "commit_critical_score": self.commit_critical_score,
            "commit_high_pct": self.commit_high_pct,
            "commit_high_score": self.commit_high_score,
            "spent_elevated_pct": self.spent_elevated_pct,
            "spent_elevated_score": self.spent_elevated_score,
        }


# ============================================================
# SCHEDULE RISK CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class ScheduleRiskConfig:
    """
    Configuration for Schedule (milestone) risk.

    ============================================================
    DECISION TABLE (first match wins)
    ============================================================
    overdue milestones   -> min(100, overdue% + 30)
    completion < 50%     -> 50
    completion < 70%     -> 30

    ============================================================
    """

    overdue_base_score: float = 30.0    # Added to the overdue percentage
    max_score: float = 100.0

    completion_low_pct: float = 50.0
    completion_low_score: float = 50.0

    completion_partial_pct: float = 70.0
    completion_partial_score: float = 30.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overdue_base_score": self.overdue_base_score,
            "max_score": self.max_score,
            "completion_low_pct": self.completion_low_pct,
            "completion_low_score": self.completion_low_score,
            "completion_partial_pct": self.completion_partial_pct,
            "completion_partial_score": self.completion_partial_score,
        }


# ============================================================
# FUNDING RISK CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class FundingRiskConfig:
    """
    Configuration for Funding risk.

    Only scored when some funding is expected.

    ============================================================
    DECISION TABLE (first match wins)
    ============================================================
    received < 50%   -> 80
    received < 70%   -> 50
    received < 85%   -> 30

    ============================================================
    """

    received_critical_pct: float = 50.0
    received_critical_score: float = 80.0

    received_low_pct: float = 70.0
    received_low_score: float = 50.0

    received_partial_pct: float = 85.0
    received_partial_score: float = 30.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "received_critical_pct": self.received_critical_pct,
            "received_critical_score": self.received_critical_score,
            "received_low_pct": self.received_low_pct,
            "received_low_score": self.received_low_score,
            "received_partial_pct": self.received_partial_pct,
            "received_partial_score": self.received_partial_score,
        }


# ============================================================
# INDICATOR RISK CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class IndicatorRiskConfig:
    """
    Configuration for Indicator coverage risk.

    Scores measurement presence, not target attainment:
    fewer than half of the listed indicators being quantitative
    with a target -> 40.
    """

    min_coverage_ratio: float = 0.5
    low_coverage_score: float = 40.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_coverage_ratio": self.min_coverage_ratio,
            "low_coverage_score": self.low_coverage_score,
        }


# ============================================================
# COMPLIANCE RISK CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class ComplianceRiskConfig:
    """
    Configuration for Compliance risk.

    No documents -> 20. No reports -> at least 15.
    """

    missing_documents_score: float = 20.0
    missing_reports_score: float = 15.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "missing_documents_score": self.missing_documents_score,
            "missing_reports_score": self.missing_reports_score,
        }


# ============================================================
# AGGREGATION CONFIGURATION
# ============================================================


def _default_weights() -> Dict[RiskCategory, float]:
    return {
        RiskCategory.BUDGET: 0.30,
        RiskCategory.SCHEDULE: 0.25,
        RiskCategory.FUNDING: 0.20,
        RiskCategory.INDICATORS: 0.15,
        RiskCategory.COMPLIANCE: 0.10,
    }


@dataclass(frozen=True)
class AggregationConfig:
    """
    Canonical domain weights (sum = 1.0).

    Missing domains are renormalized away, never counted as zero risk.
    """

    weights: Dict[RiskCategory, float] = field(default_factory=_default_weights)

    def weight_for(self, category: RiskCategory) -> float:
        return self.weights.get(category, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": {category.value: weight for category, weight in self.weights.items()},
        }


# ============================================================
# ACTION CONFIGURATION
# ============================================================


def _default_remediations() -> Dict[RiskCategory, str]:
    return {
        RiskCategory.BUDGET: "review budget and control spending",
        RiskCategory.SCHEDULE: "accelerate activities or revise deadlines",
        RiskCategory.FUNDING: "follow up on pending funding",
        RiskCategory.INDICATORS: "analyze performance gaps",
        RiskCategory.COMPLIANCE: "update documents and reports",
    }


@dataclass(frozen=True)
class ActionConfig:
    """
    Configuration for corrective action generation.

    ============================================================
    GENERIC PASS
    ============================================================
    score >= 75 -> URGENT priority, CRITICAL impact
    score >= 50 -> HIGH priority, HIGH impact

    ============================================================
    RULE PASS
    ============================================================
    Funding gap rule fires when the outstanding amount exceeds
    funding_gap_ratio of the expected amount.

    ============================================================
    """

    urgent_score: float = 75.0
    action_score: float = 50.0

    remediations: Dict[RiskCategory, str] = field(default_factory=_default_remediations)
    default_remediation: str = "corrective action required"

    funding_gap_ratio: float = 0.3

    # Amount formatting in descriptions
    currency_code: str = "XOF"

    def remediation_for(self, category: RiskCategory) -> str:
        return self.remediations.get(category, self.default_remediation)

    def format_amount(self, amount: float) -> str:
        return f"{amount:,.0f} {self.currency_code}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "urgent_score": self.urgent_score,
            "action_score": self.action_score,
            "remediations": {category.value: text for category, text in self.remediations.items()},
            "default_remediation": self.default_remediation,
            "funding_gap_ratio": self.funding_gap_ratio,
            "currency_code": self.currency_code,
        }


# ============================================================
# SERVICE CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class ServiceConfig:
    """
    Configuration for the assessment service fan-out.

    A provider exceeding fetch_timeout_seconds is treated as
    unavailable for that assessment.
    """

    fetch_timeout_seconds: float = 10.0
    parallel_fetch: bool = True

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """
        Build from environment variables (a .env file is honoured).

        - PROGRAM_RISK_FETCH_TIMEOUT_SECONDS
        - PROGRAM_RISK_PARALLEL_FETCH ("true"/"false")
        """
        load_dotenv()
        timeout = os.getenv("PROGRAM_RISK_FETCH_TIMEOUT_SECONDS")
        parallel = os.getenv("PROGRAM_RISK_PARALLEL_FETCH")
        return cls(
            fetch_timeout_seconds=float(timeout) if timeout else cls.fetch_timeout_seconds,
            parallel_fetch=(
                parallel.strip().lower() in ("1", "true", "yes")
                if parallel is not None
                else cls.parallel_fetch
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fetch_timeout_seconds": self.fetch_timeout_seconds,
            "parallel_fetch": self.parallel_fetch,
        }


# ============================================================
# MASTER CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class ProgramRiskConfig:
    """
    Master configuration for the Program Risk Engine.

    Aggregates all domain configs and engine settings.
    """

    # Domain configurations
    budget: BudgetRiskConfig = field(default_factory=BudgetRiskConfig)
    schedule: ScheduleRiskConfig = field(default_factory=ScheduleRiskConfig)
    funding: FundingRiskConfig = field(default_factory=FundingRiskConfig)
    indicators: IndicatorRiskConfig = field(default_factory=IndicatorRiskConfig)
    compliance: ComplianceRiskConfig = field(default_factory=ComplianceRiskConfig)

    # Aggregation and actions
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    actions: ActionConfig = field(default_factory=ActionConfig)

    # Engine settings
    engine_version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "budget": self.budget.to_dict(),
            "schedule": self.schedule.to_dict(),
            "funding": self.funding.to_dict(),
            "indicators": self.indicators.to_dict(),
            "compliance": self.compliance.to_dict(),
            "aggregation": self.aggregation.to_dict(),
            "actions": self.actions.to_dict(),
            "engine_version": self.engine_version,
        }


# ============================================================
# DEFAULT CONFIGURATION
# ============================================================


def get_default_config() -> ProgramRiskConfig:
    """Return the default Program Risk Engine configuration."""
    return ProgramRiskConfig()
