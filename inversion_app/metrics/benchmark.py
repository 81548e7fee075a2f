"""Benchmark projection: compounding each contribution to a given instant"""

import math
from datetime import date, datetime
from typing import Iterable, Union

from ..data.models import Transaction, TransactionKind
from ..models.metrics import BenchmarkProjection
from ..utils.time import days_between

# Fixed 365-day year, leap days are not counted.
DAYS_PER_YEAR = 365


def compound(amount: float, annual_rate_percent: float, years: float) -> float:
    """
    Grow an amount at an annual percentage rate for a fractional number of years.

    compounded = amount * (1 + rate / 100) ** years
    """
    return amount * (1 + annual_rate_percent / 100) ** years


def years_elapsed(day: date, as_of: Union[datetime, date]) -> float:
    """Whole elapsed days from ``day`` to ``as_of`` over a 365-day year."""
    return days_between(day, as_of) / DAYS_PER_YEAR


def project(transactions: Iterable[Transaction],
            benchmark_annual_rate_percent: float,
            as_of: Union[datetime, date]) -> BenchmarkProjection:
    """
    Compare actual USD contributed with the same flows compounded at a benchmark rate.

    Only contributions participate. Each one is compounded from its date to
    ``as_of``; future-dated entries get a negative exponent and end up below
    their invested amount.

    Args:
        transactions: Transactions to consider, never mutated
        benchmark_annual_rate_percent: Historical annual return, e.g. 10.5
        as_of: Instant to project to (naive values are taken as UTC)

    Returns:
        BenchmarkProjection. ``difference_percent`` is 0 when nothing was invested.
    """
    invested: list[float] = []
    hypothetical: list[float] = []

    for tx in transactions:
        if tx.kind is not TransactionKind.CONTRIBUTION:
            continue

        usd_amount = tx.usd_amount
        years = years_elapsed(tx.date, as_of)

        invested.append(usd_amount)
        hypothetical.append(compound(usd_amount, benchmark_annual_rate_percent, years))

    invested_usd = math.fsum(invested)
    hypothetical_usd = math.fsum(hypothetical)
    difference_usd = hypothetical_usd - invested_usd

    if invested_usd > 0:
        difference_percent = (difference_usd / invested_usd) * 100
    else:
        difference_percent = 0.0

    return BenchmarkProjection(
        invested_usd=invested_usd,
        hypothetical_usd=hypothetical_usd,
        difference_usd=difference_usd,
        difference_percent=difference_percent,
    )
