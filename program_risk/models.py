"""
Program Risk Engine - Program Records Models.

============================================================
PURPOSE
============================================================
ORM models for the program records the summary providers
read from. The engine never touches these directly.

============================================================
MODELS
============================================================
1. Program: Root record
2. BudgetLine: Allocated/committed/spent amounts per line
3. Milestone: Scheduled milestone with status
4. FundingEntry: Expected funding with status
5. Indicator: Tracked indicator with type and target
6. ProgramDocument: Attached document
7. ProgramReport: Submitted progress report

Assessments themselves are never persisted.

============================================================
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    String,
    Integer,
    Numeric,
    Date,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship, Mapped, mapped_column

from database.engine import Base

from .types import MilestoneStatus, FundingStatus, IndicatorType


# ============================================================
# PROGRAM
# ============================================================


class Program(Base):
    """A tracked social/development program."""

    __tablename__ = "programs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    budget_lines: Mapped[List["BudgetLine"]] = relationship(
        "BudgetLine",
        back_populates="program",
        cascade="all, delete-orphan",
    )
    milestones: Mapped[List["Milestone"]] = relationship(
        "Milestone",
        back_populates="program",
        cascade="all, delete-orphan",
    )
    funding_entries: Mapped[List["FundingEntry"]] = relationship(
        "FundingEntry",
        back_populates="program",
        cascade="all, delete-orphan",
    )
    indicators: Mapped[List["Indicator"]] = relationship(
        "Indicator",
        back_populates="program",
        cascade="all, delete-orphan",
    )
    documents: Mapped[List["ProgramDocument"]] = relationship(
        "ProgramDocument",
        back_populates="program",
        cascade="all, delete-orphan",
    )
    reports: Mapped[List["ProgramReport"]] = relationship(
        "ProgramReport",
        back_populates="program",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Program(id={self.id}, name={self.name})>"


# ============================================================
# BUDGET
# ============================================================


class BudgetLine(Base):
    """One budget line; available = allocated - committed - spent."""

    __tablename__ = "budget_lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    label: Mapped[str] = mapped_column(String(255), nullable=False)

    allocated_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    committed_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    spent_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)

    program: Mapped["Program"] = relationship("Program", back_populates="budget_lines")

    __table_args__ = (
        Index("ix_budget_lines_program", "program_id"),
    )


# ============================================================
# SCHEDULE
# ============================================================


class Milestone(Base):
    """Scheduled milestone."""

    __tablename__ = "milestones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=MilestoneStatus.PLANNED.value,
        comment="planned, in_progress, achieved, delayed",
    )

    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    program: Mapped["Program"] = relationship("Program", back_populates="milestones")

    __table_args__ = (
        Index("ix_milestones_program_status", "program_id", "status"),
    )


# ============================================================
# FUNDING
# ============================================================


class FundingEntry(Base):
    """Expected funding from one source."""

    __tablename__ = "funding_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    source: Mapped[str] = mapped_column(String(255), nullable=False)

    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=FundingStatus.PLANNED.value,
        comment="planned, confirmed, received, delayed, cancelled",
    )

    program: Mapped["Program"] = relationship("Program", back_populates="funding_entries")

    __table_args__ = (
        Index("ix_funding_entries_program", "program_id"),
    )


# ============================================================
# INDICATORS
# ============================================================


class Indicator(Base):
    """Tracked performance indicator."""

    __tablename__ = "indicators"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    indicator_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=IndicatorType.QUANTITATIVE.value,
        comment="quantitative, qualitative",
    )

    target: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 4), nullable=True)

    program: Mapped["Program"] = relationship("Program", back_populates="indicators")

    __table_args__ = (
        Index("ix_indicators_program", "program_id"),
    )


# ============================================================
# COMPLIANCE
# ============================================================


class ProgramDocument(Base):
    """Document attached to a program."""

    __tablename__ = "program_documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    program: Mapped["Program"] = relationship("Program", back_populates="documents")

    __table_args__ = (
        Index("ix_program_documents_program", "program_id"),
    )


class ProgramReport(Base):
    """Progress report submitted for a program."""

    __tablename__ = "program_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    program_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    period_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    program: Mapped["Program"] = relationship("Program", back_populates="reports")

    __table_args__ = (
        Index("ix_program_reports_program", "program_id"),
    )
