"""Portfolio aggregation of transactions into per-currency totals"""

import math
from typing import Iterable

from ..data.models import Currency, Transaction, TransactionKind
from ..models.metrics import PortfolioTotals


def aggregate(transactions: Iterable[Transaction],
              kind_filter: TransactionKind = TransactionKind.CONTRIBUTION) -> PortfolioTotals:
    """
    Reduce transactions of one kind into currency totals.

    USD items add their amount to both the USD total and the USD-equivalent
    total. ARS items add their amount to the ARS total and their frozen USD
    equivalent (0 when unknown) to the USD-equivalent total.

    Sums use ``math.fsum`` so the result does not depend on input order.

    Args:
        transactions: Any iterable of transactions, never mutated
        kind_filter: Which kind to total (contributions by default)

    Returns:
        PortfolioTotals; all zeros for an empty selection
    """
    usd_amounts: list[float] = []
    ars_amounts: list[float] = []
    ars_equivalents: list[float] = []

    for tx in transactions:
        if tx.kind is not kind_filter:
            continue

        if tx.currency is Currency.USD:
            usd_amounts.append(tx.amount)
        else:
            ars_amounts.append(tx.amount)
            ars_equivalents.append(tx.usd_equivalent or 0.0)

    return PortfolioTotals(
        total_usd=math.fsum(usd_amounts),
        total_ars=math.fsum(ars_amounts),
        total_usd_equivalent=math.fsum(usd_amounts + ars_equivalents),
        count_usd=len(usd_amounts),
        count_ars=len(ars_amounts),
    )
