"""
Shared fixtures for the Program Risk Engine tests.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database.engine import Base
from program_risk import (
    BudgetSummary,
    ScheduleSummary,
    FundingSummary,
    IndicatorRecord,
    IndicatorSummary,
    ComplianceSummary,
    IndicatorType,
    ProgramRiskEngine,
)
from program_risk import models  # noqa: F401


# ============================================================
# SUMMARY FIXTURES
# ============================================================


@pytest.fixture
def overrun_budget():
    """Budget with a 50,000 overrun and nothing spent."""
    return BudgetSummary(
        total_allocated=1_000_000,
        total_committed=0,
        total_spent=0,
        total_available=-50_000,
    )


@pytest.fixture
def healthy_budget():
    return BudgetSummary(
        total_allocated=1_000_000,
        total_committed=200_000,
        total_spent=300_000,
        total_available=500_000,
    )


@pytest.fixture
def delayed_schedule():
    """3 of 10 milestones overdue."""
    return ScheduleSummary(
        total_milestones=10,
        achieved_milestones=5,
        overdue_milestones=3,
        completion_rate=50.0,
    )


@pytest.fixture
def underfunded():
    """40% of expected funding received."""
    return FundingSummary(total_expected=1_000_000, total_received=400_000)


@pytest.fixture
def sparse_indicators():
    """1 of 4 indicators is quantitative with a target."""
    return IndicatorSummary(indicators=(
        IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=100.0),
        IndicatorRecord(type=IndicatorType.QUANTITATIVE, target=None),
        IndicatorRecord(type=IndicatorType.QUALITATIVE, target=None),
        IndicatorRecord(type=IndicatorType.QUALITATIVE, target=None),
    ))


@pytest.fixture
def empty_compliance():
    return ComplianceSummary(document_count=0, report_count=0)


@pytest.fixture
def engine():
    return ProgramRiskEngine()


# ============================================================
# DATABASE FIXTURES
# ============================================================


@pytest.fixture
def db_engine(tmp_path):
    """File-backed SQLite so worker threads each get a connection."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'records.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
