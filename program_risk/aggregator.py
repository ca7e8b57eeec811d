"""
Program Risk Engine - Aggregator.

Combines the available domain factors into one 0-100 score.

Missing domains are renormalized away: the weighted sum is
divided by the weights actually used, so an unavailable
domain never counts as zero risk.

    overall = round(sum(score * weight) / sum(weight))
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple

from .types import RiskFactor, RiskLevel
from .config import AggregationConfig


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class RiskAggregator:
    """Weighted, renormalized combination of risk factors."""

    def __init__(self, config: Optional[AggregationConfig] = None):
        self.config = config or AggregationConfig()

    def aggregate(self, factors: Iterable[Optional[RiskFactor]]) -> Tuple[int, RiskLevel]:
        """
        Calculate the overall score and level.

        Args:
            factors: Domain factors; None entries are skipped

        Returns:
            (overall_score, overall_level); (0, LOW) when nothing is available
        """
        weighted_sum = 0.0
        weight_used = 0.0

        for factor in factors:
            if factor is None:
                continue
            weight = self.config.weight_for(factor.category)
            weighted_sum += factor.score * weight
            weight_used += weight

        if weight_used <= 0:
            return 0, RiskLevel.LOW

        overall = round_half_up(weighted_sum / weight_used)
        overall = max(0, min(100, overall))
        return overall, RiskLevel.from_score(overall)
