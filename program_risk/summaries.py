"""
Program Risk Engine - Summary Builders.

============================================================
PURPOSE
============================================================
Turns raw program records into the domain summaries the
engine consumes. Used by the records repository and usable
by any other collaborator holding the same records.

Records are read by attribute, so ORM rows and plain
objects both work:

- Budget line:    allocated_amount, committed_amount, spent_amount
- Milestone:      status (MilestoneStatus)
- Funding entry:  amount, status (FundingStatus)
- Indicator:      indicator_type (IndicatorType), target

============================================================
"""

from decimal import Decimal
from typing import Any, Iterable, Optional, Union

from .types import (
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorRecord,
    IndicatorSummary,
    ComplianceSummary,
    IndicatorType,
    MilestoneStatus,
    FundingStatus,
)


Amount = Union[int, float, Decimal, None]


def _amount(value: Amount) -> float:
    return float(value) if value is not None else 0.0


def summarize_budget_lines(lines: Iterable[Any]) -> BudgetSummary:
    """
    Sum budget lines into totals.

    available = allocated - committed - spent
    """
    allocated = committed = spent = 0.0
    for line in lines:
        allocated += _amount(line.allocated_amount)
        committed += _amount(line.committed_amount)
        spent += _amount(line.spent_amount)

    return BudgetSummary(
        total_allocated=allocated,
        total_committed=committed,
        total_spent=spent,
        total_available=allocated - committed - spent,
    )


def summarize_milestones(milestones: Iterable[Any]) -> ScheduleSummary:
    """
    Count milestones by status.

    completion_rate = achieved / total * 100, two decimals.
    """
    total = achieved = in_progress = delayed = 0
    for milestone in milestones:
        total += 1
        status = MilestoneStatus(milestone.status)
        if status == MilestoneStatus.ACHIEVED:
            achieved += 1
        elif status == MilestoneStatus.IN_PROGRESS:
            in_progress += 1
        elif status == MilestoneStatus.DELAYED:
            delayed += 1

    completion = round(achieved * 100.0 / total, 2) if total > 0 else 0.0

    return ScheduleSummary(
        total_milestones=total,
        achieved_milestones=achieved,
        overdue_milestones=delayed,
        completion_rate=completion,
        in_progress_milestones=in_progress,
    )


def summarize_funding_entries(entries: Iterable[Any]) -> FundingSummary:
    """
    Sum funding entries by status.

    expected = everything planned minus cancelled
    received = RECEIVED entries only
    """
    planned = confirmed = received = delayed = cancelled = 0.0
    for entry in entries:
        amount = _amount(entry.amount)
        planned += amount
        status = FundingStatus(entry.status)
        if status == FundingStatus.CONFIRMED:
            confirmed += amount
        elif status == FundingStatus.RECEIVED:
            received += amount
        elif status == FundingStatus.DELAYED:
            delayed += amount
        elif status == FundingStatus.CANCELLED:
            cancelled += amount

    return FundingSummary(
        total_expected=planned - cancelled,
        total_received=received,
        total_planned=planned,
        total_confirmed=confirmed,
        total_delayed=delayed,
        total_cancelled=cancelled,
    )


def summarize_indicators(indicators: Iterable[Any]) -> IndicatorSummary:
    """Keep each indicator's type and target, in listing order."""
    records = []
    for indicator in indicators:
        target: Optional[float] = None
        if indicator.target is not None:
            target = float(indicator.target)
        records.append(IndicatorRecord(
            type=IndicatorType(indicator.indicator_type),
            target=target,
        ))
    return IndicatorSummary(indicators=tuple(records))


def summarize_compliance(document_count: int, report_count: int) -> ComplianceSummary:
    return ComplianceSummary(document_count=document_count, report_count=report_count)
