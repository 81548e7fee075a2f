"""
Wire-format parsers for transaction payloads and FX rate feeds.

This module handles decoding JSON bodies with orjson, mapping the enum names
used on the wire (including the Spanish source terms) onto the canonical
enums, and turning a dolarapi.com quote list into an ``FxRatesSnapshot``.
"""

from datetime import datetime
from typing import Any, Mapping, Union

import orjson

from ..errors import MalformedDataError
from .models import Currency, FxRateKind, FxRatesSnapshot, TransactionKind

TRANSACTION_KIND_ALIASES: dict[str, TransactionKind] = {
    "APORTE": TransactionKind.CONTRIBUTION,
    "CONTRIBUTION": TransactionKind.CONTRIBUTION,
    "COBRO": TransactionKind.WITHDRAWAL,
    "WITHDRAWAL": TransactionKind.WITHDRAWAL,
}

CURRENCY_ALIASES: dict[str, Currency] = {c.value: c for c in Currency}

FX_RATE_KIND_ALIASES: dict[str, FxRateKind] = {
    "BLUE": FxRateKind.BLUE,
    "OFICIAL": FxRateKind.OFFICIAL,
    "OFFICIAL": FxRateKind.OFFICIAL,
    "MEP": FxRateKind.STOCK_EXCHANGE,
    "STOCK_EXCHANGE": FxRateKind.STOCK_EXCHANGE,
    "CCL": FxRateKind.CASH_SETTLEMENT,
    "CASH_SETTLEMENT": FxRateKind.CASH_SETTLEMENT,
    "TARJETA": FxRateKind.CARD,
    "CARD": FxRateKind.CARD,
    "MAYORISTA": FxRateKind.WHOLESALE,
    "WHOLESALE": FxRateKind.WHOLESALE,
    "MANUAL": FxRateKind.MANUAL,
}

# dolarapi "casa" -> snapshot field
DOLARAPI_HOUSES: dict[str, str] = {
    "blue": "blue",
    "oficial": "official",
    "bolsa": "stock_exchange",
    "mep": "stock_exchange",
    "contadoconliqui": "cash_settlement",
    "ccl": "cash_settlement",
    "tarjeta": "card",
    "mayorista": "wholesale",
}

SNAPSHOT_RATE_FIELDS = (
    "blue", "official", "stock_exchange", "cash_settlement", "card", "wholesale",
)


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Parse a raw JSON body.

    Args:
        raw_data: JSON text or bytes

    Returns:
        Decoded value

    Raises:
        MalformedDataError: If the body is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(
            f"Invalid JSON: {e}",
            raw_data=str(raw_data)[:200],
            expected_format="json",
        ) from e


def _lookup(aliases: Mapping[str, Any], value: Any, field: str) -> Any:
    if not isinstance(value, str) or value.upper() not in aliases:
        raise MalformedDataError(
            f"Invalid {field}: {value!r}",
            raw_data=repr(value),
            expected_format=" | ".join(sorted(aliases)),
            context={"field": field},
        )
    return aliases[value.upper()]


def parse_transaction_kind(value: Any) -> TransactionKind:
    """Accepts APORTE/COBRO as well as CONTRIBUTION/WITHDRAWAL."""
    return _lookup(TRANSACTION_KIND_ALIASES, value, "type")  # type: ignore[no-any-return]


def parse_currency(value: Any) -> Currency:
    return _lookup(CURRENCY_ALIASES, value, "currency")  # type: ignore[no-any-return]


def parse_fx_rate_kind(value: Any) -> FxRateKind:
    """Accepts the market names (OFICIAL, MEP, CCL, ...) and the English ones."""
    return _lookup(FX_RATE_KIND_ALIASES, value, "fxType")  # type: ignore[no-any-return]


def _quote_value(entry: Mapping[str, Any]) -> float:
    """Selling price, then buying price, 0 when neither is a positive number."""
    for key in ("venta", "compra"):
        value = entry.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
    return 0.0


def parse_dolarapi_rates(entries: Any,
                         fallback: Mapping[str, float],
                         timestamp: datetime) -> FxRatesSnapshot:
    """
    Build a snapshot from a dolarapi.com ``/v1/dolares`` response.

    Each house maps to exactly one snapshot field; a house that is missing
    or quoted at zero takes the fallback value for that field.

    Args:
        entries: Decoded response body, a list of quote objects
        fallback: Per-field fallback rates keyed by snapshot field name
        timestamp: Capture time to stamp on the snapshot

    Raises:
        MalformedDataError: If the body is not a list of objects
    """
    if not isinstance(entries, list):
        raise MalformedDataError(
            "Rate feed is not a list",
            raw_data=str(entries)[:200],
            expected_format="list of quotes",
        )

    rates: dict[str, float] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        house = str(entry.get("casa", "")).lower()
        field = DOLARAPI_HOUSES.get(house)
        if field is None or rates.get(field):
            continue
        rates[field] = _quote_value(entry)

    return FxRatesSnapshot(
        timestamp=timestamp,
        **{name: rates.get(name) or float(fallback[name]) for name in SNAPSHOT_RATE_FIELDS},
    )


def snapshot_from_fallback(fallback: Mapping[str, float],
                           timestamp: datetime) -> FxRatesSnapshot:
    """Snapshot built entirely from the configured fallback rates."""
    return FxRatesSnapshot(
        timestamp=timestamp,
        **{name: float(fallback[name]) for name in SNAPSHOT_RATE_FIELDS},
    )
