"""
Program Risk Engine - Package.

============================================================
PURPOSE
============================================================
Turns independently collected program domain summaries
into one risk assessment: an overall 0-100 score with a
severity level, and a ranked list of corrective actions.

============================================================
WHAT IT IS
============================================================
- Pure, synchronous computation over five optional inputs
- Deterministic decision tables per domain
- Weighted aggregation renormalized over available domains
- Ranked, explainable corrective actions

============================================================
WHAT IT IS NOT
============================================================
- NOT a records store (summaries come from providers)
- NOT a target-attainment evaluator for indicators
- NOT stateful: nothing outlives one assessment

============================================================
FIVE DOMAINS
============================================================
1. BUDGET      (30%): Spending, commitments, overrun
2. SCHEDULE    (25%): Overdue milestones, completion
3. FUNDING     (20%): Received vs. expected
4. INDICATORS  (15%): Indicator coverage
5. COMPLIANCE  (10%): Documents and reports

============================================================
LEVELS
============================================================
- LOW (< 25)
- MEDIUM (25-49)
- HIGH (50-74)
- CRITICAL (>= 75)

============================================================
USAGE
============================================================
    from program_risk import (
        assess_risk,
        BudgetSummary,
        ScheduleSummary,
        FundingSummary,
    )

    assessment = assess_risk(
        budget=BudgetSummary(
            total_allocated=1_000_000,
            total_committed=0,
            total_spent=0,
            total_available=-50_000,
        ),
        schedule=ScheduleSummary(total_milestones=10, overdue_milestones=3),
        funding=FundingSummary(total_expected=1_000_000, total_received=400_000),
        indicators=None,   # provider failed
        compliance=None,   # provider failed
    )

    print(f"Risk Level: {assessment.overall_level.name}")
    print(f"Score: {assessment.overall_score}/100")
    for action in assessment.actions:
        print(f"[{action.priority.name}] {action.description}")

============================================================
"""

# Types
from .types import (
    # Enums
    RiskCategory,
    RiskLevel,
    ActionPriority,
    ActionImpact,
    IndicatorType,
    MilestoneStatus,
    FundingStatus,

    # Input types
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorRecord,
    IndicatorSummary,
    ComplianceSummary,

    # Output types
    RiskFactor,
    CorrectiveAction,
    RiskAssessment,

    # Exceptions
    ProgramRiskError,
    SummaryProviderError,
)

# Configuration
from .config import (
    BudgetRiskConfig,
    ScheduleRiskConfig,
    FundingRiskConfig,
    IndicatorRiskConfig,
    ComplianceRiskConfig,
    AggregationConfig,
    ActionConfig,
    ServiceConfig,
    ProgramRiskConfig,
    get_default_config,
)

# Evaluators
from .evaluators import (
    BaseDomainEvaluator,
    BudgetRiskEvaluator,
    ScheduleRiskEvaluator,
    FundingRiskEvaluator,
    IndicatorRiskEvaluator,
    ComplianceRiskEvaluator,
)

# Aggregation and actions
from .aggregator import RiskAggregator, round_half_up
from .prioritizer import ActionPrioritizer, sort_actions

# Engine
from .engine import (
    ProgramRiskEngine,
    assess_risk,
    get_risk_level_from_score,
    format_risk_summary,
)

# Summaries and providers
from .summaries import (
    summarize_budget_lines,
    summarize_milestones,
    summarize_funding_entries,
    summarize_indicators,
    summarize_compliance,
)
from .providers import SummaryProvider, ProgramSummaryProviders
from .service import RiskAssessmentService

# Records
from .models import (
    Program,
    BudgetLine,
    Milestone,
    FundingEntry,
    Indicator,
    ProgramDocument,
    ProgramReport,
)
from .repository import ProgramRecordsRepository, SqlSummaryProviders


__all__ = [
    # Enums
    "RiskCategory",
    "RiskLevel",
    "ActionPriority",
    "ActionImpact",
    "IndicatorType",
    "MilestoneStatus",
    "FundingStatus",

    # Input types
    "BudgetSummary",
    "ScheduleSummary",
    "FundingSummary",
    "IndicatorRecord",
    "IndicatorSummary",
    "ComplianceSummary",

    # Output types
    "RiskFactor",
    "CorrectiveAction",
    "RiskAssessment",

    # Exceptions
    "ProgramRiskError",
    "SummaryProviderError",

    # Configuration
    "BudgetRiskConfig",
    "ScheduleRiskConfig",
    "FundingRiskConfig",
    "IndicatorRiskConfig",
    "ComplianceRiskConfig",
    "AggregationConfig",
    "ActionConfig",
    "ServiceConfig",
    "ProgramRiskConfig",
    "get_default_config",

    # Evaluators
    "BaseDomainEvaluator",
    "BudgetRiskEvaluator",
    "ScheduleRiskEvaluator",
    "FundingRiskEvaluator",
    "IndicatorRiskEvaluator",
    "ComplianceRiskEvaluator",

    # Aggregation and actions
    "RiskAggregator",
    "round_half_up",
    "ActionPrioritizer",
    "sort_actions",

    # Engine
    "ProgramRiskEngine",
    "assess_risk",
    "get_risk_level_from_score",
    "format_risk_summary",

    # Summaries and providers
    "summarize_budget_lines",
    "summarize_milestones",
    "summarize_funding_entries",
    "summarize_indicators",
    "summarize_compliance",
    "SummaryProvider",
    "ProgramSummaryProviders",
    "RiskAssessmentService",

    # Records
    "Program",
    "BudgetLine",
    "Milestone",
    "FundingEntry",
    "Indicator",
    "ProgramDocument",
    "ProgramReport",
    "ProgramRecordsRepository",
    "SqlSummaryProviders",
]


__version__ = "1.0.0"
