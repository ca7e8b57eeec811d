"""
Program Risk Engine - Assessment Service.

============================================================
RESPONSIBILITY
============================================================
Collects the five domain summaries for a program and runs
the engine on whatever arrived.

- Launches all provider fetches (in parallel by default)
- Bounds each fetch with a timeout
- Turns failures and timeouts into unavailable domains
- Calls the synchronous engine once everything has settled

============================================================
DESIGN PRINCIPLES
============================================================
- Failure isolation between domains
- Partial failure never aborts the assessment
- The engine never talks to providers itself

============================================================
WORKFLOW
============================================================
1. Fan out: one fetch per configured provider
2. Fan in: wait for every fetch to succeed, fail or time out
3. Failed/timed-out/missing domains become None
4. engine.assess(...) on the settled summaries

============================================================
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .types import RiskCategory, RiskAssessment
from .config import ServiceConfig
from .engine import ProgramRiskEngine
from .providers import ProgramSummaryProviders, SummaryProvider

logger = logging.getLogger(__name__)


class RiskAssessmentService:
    """
    Orchestrates summary collection and risk assessment.

    ============================================================
    USAGE
    ============================================================
    ```python
    providers = SqlSummaryProviders(session_factory).as_providers()
    service = RiskAssessmentService(providers)

    assessment = await service.assess_program("PRG-001")
    ```

    ============================================================
    """

    def __init__(
        self,
        providers: ProgramSummaryProviders,
        engine: Optional[ProgramRiskEngine] = None,
        config: Optional[ServiceConfig] = None,
    ) -> None:
        """
        Initialize the assessment service.

        Args:
            providers: One optional provider per domain
            engine: Risk engine (default configuration if not provided)
            config: Fetch settings (timeout, parallelism)
        """
        self._providers = providers
        self._engine = engine or ProgramRiskEngine()
        self._config = config or ServiceConfig()

        # Metrics
        self._run_count = 0
        self._failed_fetches = 0
        self._last_run_at: Optional[datetime] = None

    async def assess_program(self, program_id: str) -> RiskAssessment:
        """
        Collect summaries and assess one program.

        Args:
            program_id: Program identifier

        Returns:
            RiskAssessment (best effort, never raises for provider failures)
        """
        started_at = datetime.now(timezone.utc)
        logger.info(f"Starting risk assessment for program {program_id}")

        summaries = await self.collect_summaries(program_id)

        assessment = self._engine.assess(
            budget=summaries[RiskCategory.BUDGET],
            schedule=summaries[RiskCategory.SCHEDULE],
            funding=summaries[RiskCategory.FUNDING],
            indicators=summaries[RiskCategory.INDICATORS],
            compliance=summaries[RiskCategory.COMPLIANCE],
            program_id=program_id,
        )

        self._run_count += 1
        self._last_run_at = datetime.now(timezone.utc)
        duration = (self._last_run_at - started_at).total_seconds()

        if not assessment.has_data:
            logger.warning(f"No domain data available for program {program_id}")

        logger.info(
            f"Risk assessment for program {program_id} completed in {duration:.2f}s: "
            f"score={assessment.overall_score} level={assessment.overall_level.name} "
            f"domains={len(assessment.factors)}/{len(RiskCategory.all_categories())}"
        )
        return assessment

    async def collect_summaries(self, program_id: str) -> Dict[RiskCategory, Optional[Any]]:
        """
        Fetch every domain summary, settling failures to None.

        Args:
            program_id: Program identifier

        Returns:
            Summary (or None) keyed by category, all five keys present
        """
        items = self._providers.items()

        if self._config.parallel_fetch:
            results = await asyncio.gather(
                *(self._fetch(category, provider, program_id) for category, provider in items)
            )
        else:
            results = []
            for category, provider in items:
                results.append(await self._fetch(category, provider, program_id))

        return {category: result for (category, _), result in zip(items, results)}

    async def _fetch(
        self,
        category: RiskCategory,
        provider: Optional[SummaryProvider],
        program_id: str,
    ) -> Optional[Any]:
        """Run one provider with a timeout; any failure yields None."""
        if provider is None:
            logger.debug(f"No {category.value} provider configured")
            return None

        try:
            return await asyncio.wait_for(
                provider(program_id),
                timeout=self._config.fetch_timeout_seconds,
            )
        except asyncio.TimeoutError:
            self._failed_fetches += 1
            logger.warning(
                f"{category.value} summary for program {program_id} timed out "
                f"after {self._config.fetch_timeout_seconds}s"
            )
            return None
        except Exception as e:
            self._failed_fetches += 1
            logger.warning(f"{category.value} summary for program {program_id} failed: {e}")
            return None

    def get_stats(self) -> Dict[str, Any]:
        """Return service statistics."""
        return {
            "run_count": self._run_count,
            "failed_fetches": self._failed_fetches,
            "last_run_at": self._last_run_at.isoformat() if self._last_run_at else None,
        }
