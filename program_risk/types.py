"""
Program Risk Engine - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the Program Risk Engine.

This module defines the enums, domain summaries and result
types used by the evaluators, the aggregator, the action
prioritizer and the assessment service.

============================================================
DESIGN PRINCIPLES
============================================================
- All types are immutable
- Every summary field is optional (providers fail independently)
- Enums for discrete values
- Clear separation between input and output types

============================================================
RISK CATEGORIES
============================================================
The engine evaluates exactly five domains, in this order:

1. BUDGET      - Budget execution (weight 30%)
2. SCHEDULE    - Milestone schedule (weight 25%)
3. FUNDING     - Funding receipts (weight 20%)
4. INDICATORS  - Indicator coverage (weight 15%)
5. COMPLIANCE  - Documents and reports (weight 10%)

Each domain produces a score from 0 to 100.

============================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID, uuid4


# ============================================================
# ENUMS
# ============================================================


class RiskCategory(str, Enum):
    """
    The five program domains evaluated by the engine.

    Declaration order is the canonical evaluation order.
    """

    BUDGET = "budget"
    SCHEDULE = "schedule"
    FUNDING = "funding"
    INDICATORS = "indicators"
    COMPLIANCE = "compliance"

    @classmethod
    def all_categories(cls) -> List["RiskCategory"]:
        """Return all categories in evaluation order."""
        return [cls.BUDGET, cls.SCHEDULE, cls.FUNDING, cls.INDICATORS, cls.COMPLIANCE]


class RiskLevel(str, Enum):
    """
    Severity level derived from a 0-100 score.

    Score Range:
    - LOW: below 25
    - MEDIUM: 25 to below 50
    - HIGH: 50 to below 75
    - CRITICAL: 75 and above
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """
        Classify a 0-100 score.

        Args:
            score: Risk score (0-100)

        Returns:
            Appropriate RiskLevel classification
        """
        if score >= 75:
            return cls.CRITICAL
        elif score >= 50:
            return cls.HIGH
        elif score >= 25:
            return cls.MEDIUM
        else:
            return cls.LOW

    @property
    def severity_order(self) -> int:
        """Numeric ordering for severity comparison."""
        return {"low": 0, "medium": 1, "high": 2, "critical": 3}[self.value]


class ActionPriority(str, Enum):
    """Priority tier of a corrective action. Lower rank sorts first."""

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"urgent": 0, "high": 1, "medium": 2, "low": 3}[self.value]


class ActionImpact(str, Enum):
    """Expected impact of leaving a corrective action undone."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IndicatorType(str, Enum):
    """Indicator measurement type."""

    QUANTITATIVE = "quantitative"
    QUALITATIVE = "qualitative"


class MilestoneStatus(str, Enum):
    """Milestone lifecycle status as stored by the records layer."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    ACHIEVED = "achieved"
    DELAYED = "delayed"


class FundingStatus(str, Enum):
    """Funding entry status as stored by the records layer."""

    PLANNED = "planned"
    CONFIRMED = "confirmed"
    RECEIVED = "received"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


# ============================================================
# INPUT DATA CONTRACTS
# ============================================================


@dataclass(frozen=True)
class BudgetSummary:
    """
    Budget execution totals for one program.

    All amounts share the same currency unit.
    """

    total_allocated: Optional[float] = None
    total_committed: Optional[float] = None
    total_spent: Optional[float] = None
    total_available: Optional[float] = None  # Negative = overrun


@dataclass(frozen=True)
class ScheduleSummary:
    """Milestone counts and precomputed completion percentage."""

    total_milestones: Optional[int] = None
    achieved_milestones: Optional[int] = None
    overdue_milestones: Optional[int] = None
    completion_rate: Optional[float] = None  # 0-100
    in_progress_milestones: Optional[int] = None


@dataclass(frozen=True)
class FundingSummary:
    """
    Expected vs. received funding totals.

    total_expected excludes cancelled funding.
    """

    total_expected: Optional[float] = None
    total_received: Optional[float] = None

    # Breakdown by status (informational)
    total_planned: Optional[float] = None
    total_confirmed: Optional[float] = None
    total_delayed: Optional[float] = None
    total_cancelled: Optional[float] = None

    @property
    def outstanding(self) -> float:
        """Expected amount not yet received."""
        return (self.total_expected or 0.0) - (self.total_received or 0.0)


@dataclass(frozen=True)
class IndicatorRecord:
    """One tracked indicator: its type and target, if any."""

    type: IndicatorType
    target: Optional[float] = None


@dataclass(frozen=True)
class IndicatorSummary:
    """Ordered list of a program's indicators."""

    indicators: Tuple[IndicatorRecord, ...] = ()

    @property
    def total(self) -> int:
        return len(self.indicators)

    @property
    def quantitative_with_target(self) -> int:
        """Quantitative indicators carrying a positive target."""
        return sum(
            1 for ind in self.indicators
            if ind.type == IndicatorType.QUANTITATIVE
            and ind.target is not None
            and ind.target > 0
        )


@dataclass(frozen=True)
class ComplianceSummary:
    """Documentation and reporting counts."""

    document_count: Optional[int] = None
    report_count: Optional[int] = None


# ============================================================
# OUTPUT DATA CONTRACTS
# ============================================================


@dataclass(frozen=True)
class RiskFactor:
    """
    Scored assessment of one domain.

    level is always RiskLevel.from_score(score); build through
    from_score() to keep the two consistent.
    """

    category: RiskCategory
    score: float
    level: RiskLevel

    # Display-only explanation of the numbers behind the score
    detail: str = ""

    @classmethod
    def from_score(cls, category: RiskCategory, score: float, detail: str) -> "RiskFactor":
        return cls(
            category=category,
            score=score,
            level=RiskLevel.from_score(score),
            detail=detail,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "level": self.level.value,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class CorrectiveAction:
    """A recommended remediation with its priority and impact tier."""

    priority: ActionPriority
    category: RiskCategory
    description: str
    impact: ActionImpact

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": self.priority.value,
            "category": self.category.value,
            "description": self.description,
            "impact": self.impact.value,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """
    Complete output of the Program Risk Engine.

    ============================================================
    OUTPUT GUARANTEES
    ============================================================
    - overall_score: Always 0-100
    - overall_level: Always one of LOW, MEDIUM, HIGH, CRITICAL
    - factors: Only the domains that were available, canonical order
    - actions: Sorted by priority, insertion order kept on ties

    ============================================================
    INSUFFICIENT DATA
    ============================================================
    An empty factors list means no domain was available.
    That is "insufficient data", not "no risk": check has_data
    before presenting a score of 0 as healthy.

    ============================================================
    """

    overall_score: int = 0
    overall_level: RiskLevel = RiskLevel.LOW
    factors: Tuple[RiskFactor, ...] = ()
    actions: Tuple[CorrectiveAction, ...] = ()

    # Metadata (per-run; excluded from equality)
    assessment_id: UUID = field(default_factory=uuid4, compare=False)
    assessed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc), compare=False)
    program_id: Optional[str] = None
    engine_version: str = "1.0.0"

    @property
    def has_data(self) -> bool:
        """True when at least one domain contributed a factor."""
        return len(self.factors) > 0

    @property
    def is_high_or_critical(self) -> bool:
        return self.overall_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)

    @property
    def urgent_actions(self) -> List[CorrectiveAction]:
        return [a for a in self.actions if a.priority == ActionPriority.URGENT]

    def get_factor(self, category: RiskCategory) -> Optional[RiskFactor]:
        """Return the factor for a category, or None if it was unavailable."""
        for factor in self.factors:
            if factor.category == category:
                return factor
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "assessment_id": str(self.assessment_id),
            "program_id": self.program_id,
            "overall_score": self.overall_score,
            "overall_level": self.overall_level.value,
            "has_data": self.has_data,
            "factors": [f.to_dict() for f in self.factors],
            "actions": [a.to_dict() for a in self.actions],
            "assessed_at": self.assessed_at.isoformat(),
            "engine_version": self.engine_version,
        }


# ============================================================
# ERROR TYPES
# ============================================================


class ProgramRiskError(Exception):
    """Base exception for program risk errors."""

    def __init__(self, message: str, category: Optional[RiskCategory] = None) -> None:
        super().__init__(message)
        self.category = category


class SummaryProviderError(ProgramRiskError):
    """
    Raised by a summary provider that could not produce its summary.

    NOTE: The assessment service turns this into an unavailable
    domain. It never reaches the engine.
    """
    pass
