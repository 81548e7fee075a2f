"""Resolution of a named FX quote to a concrete ARS-per-USD rate."""

from typing import Optional

from ..data.models import FxRateKind, FxRatesSnapshot

# Fixed one-to-one mapping, no fallback between kinds.
SNAPSHOT_FIELDS: dict[FxRateKind, str] = {
    FxRateKind.BLUE: "blue",
    FxRateKind.OFFICIAL: "official",
    FxRateKind.STOCK_EXCHANGE: "stock_exchange",
    FxRateKind.CASH_SETTLEMENT: "cash_settlement",
    FxRateKind.CARD: "card",
    FxRateKind.WHOLESALE: "wholesale",
}


def resolve_rate(kind: FxRateKind,
                 snapshot: Optional[FxRatesSnapshot],
                 manual_override: Optional[float] = None) -> Optional[float]:
    """
    Map a rate kind to a rate value.

    Args:
        kind: Which quote to use
        snapshot: Current rates, or None when the provider is unavailable
        manual_override: Caller-supplied rate, only read for ``MANUAL``

    Returns:
        The override (if positive) for ``MANUAL``, the matching snapshot
        field for any other kind, or None when nothing usable exists
    """
    if kind is FxRateKind.MANUAL:
        if manual_override is None or manual_override <= 0:
            return None
        return manual_override

    if snapshot is None:
        return None

    return getattr(snapshot, SNAPSHOT_FIELDS[kind])
