"""
Canonical data models for transactions, FX snapshots and benchmarks.

This module defines immutable data structures that represent clean, validated
records after they have passed the boundary validators. The computations in
``inversion_app.metrics`` consume these objects read-only.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_iso_date


class TransactionKind(Enum):
    """Direction of a money movement."""
    CONTRIBUTION = "APORTE"
    WITHDRAWAL = "COBRO"


class Currency(Enum):
    """Currencies a transaction can be denominated in."""
    USD = "USD"
    ARS = "ARS"


class FxRateKind(Enum):
    """Named ARS/USD quotes, plus a caller-supplied manual rate."""
    BLUE = "BLUE"
    OFFICIAL = "OFICIAL"
    STOCK_EXCHANGE = "MEP"
    CASH_SETTLEMENT = "CCL"
    CARD = "TARJETA"
    WHOLESALE = "MAYORISTA"
    MANUAL = "MANUAL"


class BenchmarkCategory(Enum):
    """Benchmark grouping used for display."""
    EQUITY = "equity"
    REAL_ESTATE = "real_estate"
    MIXED = "mixed"


@dataclass(frozen=True)
class TransactionInput:
    """Validated transaction fields as submitted, before an id is assigned."""
    date: date
    kind: TransactionKind
    currency: Currency
    amount: float
    note: Optional[str] = None
    fx_rate_kind: Optional[FxRateKind] = None
    fx_rate: Optional[float] = None


@dataclass(frozen=True)
class Transaction:
    """A stored contribution or withdrawal."""
    id: str
    date: date
    kind: TransactionKind
    currency: Currency
    amount: float
    note: Optional[str] = None
    fx_rate_kind: Optional[FxRateKind] = None
    fx_rate: Optional[float] = None
    usd_equivalent: Optional[float] = None   # derived, never taken from input

    @property
    def usd_amount(self) -> float:
        """USD-denominated value: raw amount for USD, frozen equivalent (or 0) for ARS."""
        if self.currency is Currency.USD:
            return self.amount
        return self.usd_equivalent or 0.0

    def to_dict(self) -> dict[str, Any]:
        """Wire representation, omitting absent optional fields."""
        result: dict[str, Any] = {
            "id": self.id,
            "date": format_iso_date(self.date),
            "type": self.kind.value,
            "currency": self.currency.value,
            "amount": self.amount,
        }
        if self.note is not None:
            result["note"] = self.note
        if self.fx_rate_kind is not None:
            result["fxType"] = self.fx_rate_kind.value
        if self.fx_rate is not None:
            result["fxRate"] = self.fx_rate
        if self.usd_equivalent is not None:
            result["usdEquivalent"] = self.usd_equivalent
        return result


@dataclass(frozen=True)
class FxRatesSnapshot:
    """Point-in-time ARS per USD quotes for every tracked market."""
    blue: float
    official: float
    stock_exchange: float        # MEP
    cash_settlement: float       # CCL
    card: float
    wholesale: float
    timestamp: datetime          # UTC capture time

    def to_dict(self) -> dict[str, Any]:
        """Wire representation using the market's own names."""
        return {
            "blue": self.blue,
            "oficial": self.official,
            "mep": self.stock_exchange,
            "ccl": self.cash_settlement,
            "tarjeta": self.card,
            "mayorista": self.wholesale,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class BenchmarkIndex:
    """Static catalog entry for a comparison index."""
    id: str
    name: str
    description: str
    historical_rate: float       # percent per year, e.g. 10.5
    category: BenchmarkCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "historicalRate": self.historical_rate,
            "category": self.category.value,
        }
