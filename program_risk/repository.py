"""
Program Risk Engine - Records Repository.

============================================================
PURPOSE
============================================================
Repository pattern implementation over the program records.

Provides one summary query per domain and an adapter that
exposes them as async summary providers for the assessment
service.

============================================================
"""

import asyncio
import logging
from typing import Callable, TypeVar

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import (
    Program,
    BudgetLine,
    Milestone,
    FundingEntry,
    Indicator,
    ProgramDocument,
    ProgramReport,
)
from .providers import ProgramSummaryProviders
from .summaries import (
    summarize_budget_lines,
    summarize_milestones,
    summarize_funding_entries,
    summarize_indicators,
    summarize_compliance,
)
from .types import (
    RiskCategory,
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorSummary,
    ComplianceSummary,
    SummaryProviderError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgramRecordsRepository:
    """
    Repository for program record queries.

    ============================================================
    METHODS
    ============================================================
    - get_budget_summary: Totals over budget lines
    - get_schedule_summary: Milestone counts by status
    - get_funding_summary: Funding totals by status
    - get_indicator_summary: Indicator types and targets
    - get_compliance_summary: Document and report counts

    Every method raises SummaryProviderError for an unknown
    program so the domain is reported unavailable rather than
    scored as empty.

    ============================================================
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session
        """
        self._session = session

    def _require_program(self, program_id: str) -> None:
        if self._session.get(Program, program_id) is None:
            raise SummaryProviderError(f"Unknown program: {program_id}")

    def get_budget_summary(self, program_id: str) -> BudgetSummary:
        self._require_program(program_id)
        lines = self._session.scalars(
            select(BudgetLine).where(BudgetLine.program_id == program_id)
        ).all()
        return summarize_budget_lines(lines)

    def get_schedule_summary(self, program_id: str) -> ScheduleSummary:
        self._require_program(program_id)
        milestones = self._session.scalars(
            select(Milestone).where(Milestone.program_id == program_id)
        ).all()
        return summarize_milestones(milestones)

    def get_funding_summary(self, program_id: str) -> FundingSummary:
        self._require_program(program_id)
        entries = self._session.scalars(
            select(FundingEntry).where(FundingEntry.program_id == program_id)
        ).all()
        return summarize_funding_entries(entries)

    def get_indicator_summary(self, program_id: str) -> IndicatorSummary:
        self._require_program(program_id)
        indicators = self._session.scalars(
            select(Indicator)
            .where(Indicator.program_id == program_id)
            .order_by(Indicator.id)
        ).all()
        return summarize_indicators(indicators)

    def get_compliance_summary(self, program_id: str) -> ComplianceSummary:
        self._require_program(program_id)
        document_count = self._session.scalar(
            select(func.count(ProgramDocument.id)).where(ProgramDocument.program_id == program_id)
        )
        report_count = self._session.scalar(
            select(func.count(ProgramReport.id)).where(ProgramReport.program_id == program_id)
        )
        return summarize_compliance(document_count or 0, report_count or 0)


class SqlSummaryProviders:
    """
    Exposes the repository queries as async summary providers.

    Each fetch opens its own session in a worker thread, so the
    five fetches of one assessment run concurrently without
    sharing a session.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """
        Args:
            session_factory: Factory to create database sessions
        """
        self._session_factory = session_factory

    def _run(self, query: Callable[[ProgramRecordsRepository], T]) -> T:
        session = self._session_factory()
        try:
            return query(ProgramRecordsRepository(session))
        except SQLAlchemyError as e:
            logger.error(f"Records query failed: {e}")
            raise SummaryProviderError(f"Records query failed: {e}") from e
        finally:
            session.close()

    async def _fetch(self, query: Callable[[ProgramRecordsRepository], T]) -> T:
        return await asyncio.to_thread(self._run, query)

    async def budget(self, program_id: str) -> BudgetSummary:
        return await self._fetch(lambda repo: repo.get_budget_summary(program_id))

    async def schedule(self, program_id: str) -> ScheduleSummary:
        return await self._fetch(lambda repo: repo.get_schedule_summary(program_id))

    async def funding(self, program_id: str) -> FundingSummary:
        return await self._fetch(lambda repo: repo.get_funding_summary(program_id))

    async def indicators(self, program_id: str) -> IndicatorSummary:
        return await self._fetch(lambda repo: repo.get_indicator_summary(program_id))

    async def compliance(self, program_id: str) -> ComplianceSummary:
        return await self._fetch(lambda repo: repo.get_compliance_summary(program_id))

    def as_providers(self) -> ProgramSummaryProviders:
        """Bundle all five queries for the assessment service."""
        return ProgramSummaryProviders(**{
            category.value: getattr(self, category.value)
            for category in RiskCategory.all_categories()
        })
