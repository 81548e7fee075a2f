"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict

from inversion_app.data.models import (
    Currency,
    FxRateKind,
    FxRatesSnapshot,
    TransactionInput,
    TransactionKind,
)
from inversion_app.fx.provider import FxRateProvider
from inversion_app.metrics.conversion import build_transaction
from inversion_app.persistence.transaction_store import MemoryTransactionStore

AS_OF = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for cache and projection tests."""

    def __init__(self, now: datetime = AS_OF):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class StubFetcher:
    """Fetcher returning a fixed snapshot, or raising a preset error."""

    def __init__(self, snapshot: FxRatesSnapshot = None, error: Exception = None):
        self.snapshot = snapshot
        self.error = error
        self.calls = 0

    def __call__(self, now: datetime) -> FxRatesSnapshot:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.snapshot


def make_transaction(transaction_id: str = "tx-1",
                     day: date = date(2023, 6, 1),
                     kind: TransactionKind = TransactionKind.CONTRIBUTION,
                     currency: Currency = Currency.USD,
                     amount: float = 1000.0,
                     fx_rate_kind: FxRateKind = None,
                     fx_rate: float = None,
                     note: str = None):
    """Build a stored transaction the same way the stores do."""
    return build_transaction(transaction_id, TransactionInput(
        date=day,
        kind=kind,
        currency=currency,
        amount=amount,
        note=note,
        fx_rate_kind=fx_rate_kind,
        fx_rate=fx_rate,
    ))


@pytest.fixture
def as_of() -> datetime:
    return AS_OF


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_snapshot() -> FxRatesSnapshot:
    """Snapshot with distinct values for every market."""
    return FxRatesSnapshot(
        blue=1200.0,
        official=1000.0,
        stock_exchange=1150.0,
        cash_settlement=1180.0,
        card=1400.0,
        wholesale=980.0,
        timestamp=AS_OF,
    )


@pytest.fixture
def sample_transaction_payload() -> Dict[str, Any]:
    """ARS contribution in wire format."""
    return {
        "date": "2024-01-15",
        "type": "APORTE",
        "currency": "ARS",
        "amount": 120000,
        "note": "Cuota 1",
        "fxType": "BLUE",
        "fxRate": 1200,
    }


@pytest.fixture
def sample_dolarapi_response() -> list:
    """Body of https://dolarapi.com/v1/dolares."""
    return [
        {"moneda": "USD", "casa": "oficial", "nombre": "Oficial", "compra": 1010, "venta": 1050,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "blue", "nombre": "Blue", "compra": 1270, "venta": 1290,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "bolsa", "nombre": "Bolsa", "compra": 1240, "venta": 1245,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "contadoconliqui", "nombre": "Contado con liquidación",
         "compra": 1250, "venta": 1260, "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "mayorista", "nombre": "Mayorista", "compra": 990, "venta": 1000,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "cripto", "nombre": "Cripto", "compra": 1300, "venta": 1310,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
        {"moneda": "USD", "casa": "tarjeta", "nombre": "Tarjeta", "compra": 1680, "venta": 1680,
         "fechaActualizacion": "2024-06-01T12:00:00.000Z"},
    ]


@pytest.fixture
def memory_store() -> MemoryTransactionStore:
    counter = iter(range(1, 1000))
    return MemoryTransactionStore(id_factory=lambda: f"tx-{next(counter)}")


@pytest.fixture
def stub_provider(sample_snapshot, fake_clock) -> FxRateProvider:
    return FxRateProvider(fetcher=StubFetcher(sample_snapshot), clock=fake_clock)
