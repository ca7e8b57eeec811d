"""
Program Risk Engine - Summary Provider Contract.

============================================================
PURPOSE
============================================================
Boundary between the assessment service and whatever holds
the program records.

A provider is an async callable taking a program id and
returning one domain summary. It raises on failure; the
service turns the failure into an unavailable domain.

============================================================
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple

from .types import RiskCategory


class SummaryProvider(Protocol):
    """
    Protocol for domain summary providers.

    Implementations:
    - SqlSummaryProviders (records database)
    - Any async function with this signature
    """

    async def __call__(self, program_id: str) -> Any:
        """
        Fetch one domain summary.

        Args:
            program_id: Program identifier

        Returns:
            The domain summary

        Raises:
            Exception: On any failure (the domain is then unavailable)
        """
        ...


@dataclass
class ProgramSummaryProviders:
    """One optional provider per domain. A missing provider = unavailable domain."""

    budget: Optional[SummaryProvider] = None
    schedule: Optional[SummaryProvider] = None
    funding: Optional[SummaryProvider] = None
    indicators: Optional[SummaryProvider] = None
    compliance: Optional[SummaryProvider] = None

    def get(self, category: RiskCategory) -> Optional[SummaryProvider]:
        return getattr(self, category.value)

    def items(self) -> List[Tuple[RiskCategory, Optional[SummaryProvider]]]:
        """Providers in canonical category order."""
        return [(category, self.get(category)) for category in RiskCategory.all_categories()]
