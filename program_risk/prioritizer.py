"""
Program Risk Engine - Action Prioritizer.

============================================================
PURPOSE
============================================================
Derives a ranked list of corrective actions from the domain
factors and the raw domain summaries.

============================================================
GENERATION
============================================================
1. Generic pass: one action per factor scoring >= 50,
   using the category's remediation phrase.
2. Rule pass: domain-specific triggers read from the raw
   summaries, independent of the score.

Both passes walk the domains in canonical order. The passes
are concatenated and stable-sorted by priority rank, so ties
keep generic actions before rule actions.

No deduplication: a domain may appear once per pass.

============================================================
"""

import logging
from typing import Iterable, List, Optional

from .types import (
    ActionImpact,
    ActionPriority,
    CorrectiveAction,
    RiskCategory,
    RiskFactor,
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
)
from .config import ActionConfig

logger = logging.getLogger(__name__)


def sort_actions(actions: Iterable[CorrectiveAction]) -> List[CorrectiveAction]:
    """Stable sort by priority rank (URGENT first)."""
    return sorted(actions, key=lambda action: action.priority.rank)


class ActionPrioritizer:
    """
    Builds and ranks corrective actions.

    ============================================================
    RULES
    ============================================================
    - Budget overrun        -> URGENT / CRITICAL
    - Overdue milestones    -> HIGH / HIGH
    - Large funding gap     -> HIGH / HIGH

    ============================================================
    """

    def __init__(self, config: Optional[ActionConfig] = None):
        self.config = config or ActionConfig()

    def prioritize(
        self,
        factors: Iterable[Optional[RiskFactor]],
        budget: Optional[BudgetSummary] = None,
        schedule: Optional[ScheduleSummary] = None,
        funding: Optional[FundingSummary] = None,
    ) -> List[CorrectiveAction]:
        """
        Generate and rank corrective actions.

        Args:
            factors: Domain factors in canonical order (None entries skipped)
            budget: Raw budget summary for rule checks
            schedule: Raw schedule summary for rule checks
            funding: Raw funding summary for rule checks

        Returns:
            Actions sorted by priority, insertion order kept on ties
        """
        actions = self._generic_actions(factors)
        actions.extend(self._rule_actions(budget, schedule, funding))
        return sort_actions(actions)

    # --------------------------------------------------------
    # GENERIC PASS
    # --------------------------------------------------------

    def _generic_actions(self, factors: Iterable[Optional[RiskFactor]]) -> List[CorrectiveAction]:
        cfg = self.config
        actions: List[CorrectiveAction] = []

        for factor in factors:
            if factor is None or factor.score < cfg.action_score:
                continue
            urgent = factor.score >= cfg.urgent_score
            actions.append(CorrectiveAction(
                priority=ActionPriority.URGENT if urgent else ActionPriority.HIGH,
                category=factor.category,
                description=cfg.remediation_for(factor.category),
                impact=ActionImpact.CRITICAL if urgent else ActionImpact.HIGH,
            ))

        return actions

    # --------------------------------------------------------
    # RULE PASS
    # --------------------------------------------------------

    def _rule_actions(
        self,
        budget: Optional[BudgetSummary],
        schedule: Optional[ScheduleSummary],
        funding: Optional[FundingSummary],
    ) -> List[CorrectiveAction]:
        cfg = self.config
        actions: List[CorrectiveAction] = []

        if budget is not None and budget.total_available is not None and budget.total_available < 0:
            actions.append(CorrectiveAction(
                priority=ActionPriority.URGENT,
                category=RiskCategory.BUDGET,
                description="stop new spending immediately",
                impact=ActionImpact.CRITICAL,
            ))

        if schedule is not None and (schedule.overdue_milestones or 0) > 0:
            actions.append(CorrectiveAction(
                priority=ActionPriority.HIGH,
                category=RiskCategory.SCHEDULE,
                description=f"review {schedule.overdue_milestones} overdue milestone(s)",
                impact=ActionImpact.HIGH,
            ))

        if funding is not None and funding.total_expected is not None:
            outstanding = funding.outstanding
            if outstanding > cfg.funding_gap_ratio * funding.total_expected:
                actions.append(CorrectiveAction(
                    priority=ActionPriority.HIGH,
                    category=RiskCategory.FUNDING,
                    description=(
                        f"follow up on {cfg.format_amount(outstanding)} "
                        f"of outstanding funding"
                    ),
                    impact=ActionImpact.HIGH,
                ))

        if actions:
            logger.debug(f"Rule pass produced {len(actions)} action(s)")

        return actions
