"""Currency conversion of ARS entries into their USD equivalent."""

from typing import Optional

from ..data.models import Currency, Transaction, TransactionInput


def to_usd_equivalent(amount: float, currency: Currency,
                      fx_rate: Optional[float] = None) -> Optional[float]:
    """
    Convert an ARS amount to USD at the given ARS-per-USD rate.

    Args:
        amount: Positive amount in ``currency``
        currency: Denomination of the amount
        fx_rate: ARS per USD quote frozen at entry time

    Returns:
        ``amount / fx_rate`` for ARS with a positive rate. None for USD (the
        raw amount already is the USD figure) and for ARS without a usable
        rate, which downstream totals count as zero USD.
    """
    if currency is not Currency.ARS:
        return None

    if fx_rate is None or fx_rate <= 0:
        return None

    return amount / fx_rate


def build_transaction(transaction_id: str, data: TransactionInput) -> Transaction:
    """
    Build a stored transaction from validated input.

    The USD equivalent is always recomputed here from currency, amount and
    rate; it is the only place a ``Transaction`` gets its derived field.
    FX details are dropped for USD entries.
    """
    is_ars = data.currency is Currency.ARS
    fx_rate = data.fx_rate if is_ars else None

    return Transaction(
        id=transaction_id,
        date=data.date,
        kind=data.kind,
        currency=data.currency,
        amount=data.amount,
        note=data.note,
        fx_rate_kind=data.fx_rate_kind if is_ars else None,
        fx_rate=fx_rate,
        usd_equivalent=to_usd_equivalent(data.amount, data.currency, fx_rate),
    )
