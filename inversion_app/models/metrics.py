"""Data models for portfolio totals and benchmark comparisons"""

from dataclasses import dataclass
from typing import Any, Optional

from ..data.models import BenchmarkIndex


@dataclass(frozen=True)
class PortfolioTotals:
    """Per-currency and USD-equivalent totals of one transaction kind"""
    total_usd: float = 0.0
    total_ars: float = 0.0
    total_usd_equivalent: float = 0.0
    count_usd: int = 0
    count_ars: int = 0

    @property
    def count(self) -> int:
        return self.count_usd + self.count_ars

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalUSD": self.total_usd,
            "totalARS": self.total_ars,
            "totalUsdEquivalent": self.total_usd_equivalent,
            "countUSD": self.count_usd,
            "countARS": self.count_ars,
        }


@dataclass(frozen=True)
class BenchmarkProjection:
    """Actual USD invested versus the same flows compounded at a benchmark rate"""
    invested_usd: float = 0.0
    hypothetical_usd: float = 0.0
    difference_usd: float = 0.0
    difference_percent: float = 0.0

    @property
    def is_positive(self) -> bool:
        """True when the compounded value is at least what was invested"""
        return self.difference_usd >= 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "investedUSD": self.invested_usd,
            "hypotheticalUSD": self.hypothetical_usd,
            "differenceUSD": self.difference_usd,
            "differencePercent": self.difference_percent,
        }


@dataclass(frozen=True)
class PortfolioSummary:
    """Dashboard figures: contribution and withdrawal totals plus the comparison"""
    contributions: PortfolioTotals
    withdrawals: PortfolioTotals
    projection: BenchmarkProjection
    benchmark_id: str
    benchmark_rate: float
    benchmark: Optional[BenchmarkIndex] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "contributions": self.contributions.to_dict(),
            "withdrawals": self.withdrawals.to_dict(),
            "benchmark": {
                "id": self.benchmark_id,
                "rate": self.benchmark_rate,
                "name": self.benchmark.name if self.benchmark else None,
                **self.projection.to_dict(),
            },
        }
