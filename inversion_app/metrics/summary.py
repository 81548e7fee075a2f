"""Dashboard summary combining aggregation and benchmark projection"""

from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..data.models import BenchmarkIndex, Transaction, TransactionKind
from ..models.metrics import PortfolioSummary
from .aggregator import aggregate
from .benchmark import project


def summarize(transactions: Sequence[Transaction],
              benchmark_id: str,
              benchmark_rate: float,
              as_of: Union[datetime, date],
              benchmark: Optional[BenchmarkIndex] = None) -> PortfolioSummary:
    """
    Compute every figure shown on the dashboard in one pass over the inputs.

    Args:
        transactions: All stored transactions
        benchmark_id: Selected benchmark identifier
        benchmark_rate: Annual percentage used for compounding
        as_of: Instant the projection runs to
        benchmark: Catalog entry, when the id resolved to one
    """
    return PortfolioSummary(
        contributions=aggregate(transactions, TransactionKind.CONTRIBUTION),
        withdrawals=aggregate(transactions, TransactionKind.WITHDRAWAL),
        projection=project(transactions, benchmark_rate, as_of),
        benchmark_id=benchmark_id,
        benchmark_rate=benchmark_rate,
        benchmark=benchmark,
    )
