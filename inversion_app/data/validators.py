"""
Boundary validation for transaction and settings payloads.

Payloads arrive as dicts in the camelCase wire format. Validation turns them
into immutable inputs or raises a data quality error naming the offending
field. Derived and server-assigned fields (``id``, ``usdEquivalent``) are
ignored if a client sends them.
"""

import math
from typing import Any, Optional

from ..errors import MalformedDataError, MissingDataError
from ..utils.time import parse_iso_date
from .benchmarks import benchmark_ids
from .models import Currency, FxRateKind, TransactionInput
from .parsers import parse_currency, parse_fx_rate_kind, parse_transaction_kind
from .settings import SettingsPatch

IGNORED_TRANSACTION_FIELDS = frozenset({"id", "usdEquivalent"})
TRANSACTION_FIELDS = frozenset({
    "date", "type", "currency", "amount", "note", "fxType", "fxRate",
}) | IGNORED_TRANSACTION_FIELDS
SETTINGS_FIELDS = frozenset({"selectedBenchmark", "benchmarkRate"})


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _require(payload: dict[str, Any], field: str) -> Any:
    value = payload.get(field)
    if value is None:
        raise MissingDataError(f"Missing required field: {field}", data_type=field)
    return value


def _positive_number(value: Any, field: str) -> float:
    if not _is_number(value) or value <= 0:
        raise MalformedDataError(
            f"{field} must be a positive number",
            raw_data=repr(value),
            expected_format="number > 0",
            context={"field": field},
        )
    return float(value)


class TransactionValidator:
    """Validates transaction payloads for create and full-replace update."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Args:
            config: Validation options; ``max_note_length`` caps free text
        """
        self.config = config or {}
        self.max_note_length = self.config.get("max_note_length", 500)

    def validate(self, payload: Any) -> TransactionInput:
        """
        Validate a transaction payload.

        Args:
            payload: Decoded request body

        Returns:
            TransactionInput ready to be stored

        Raises:
            MissingDataError: If a required field is absent
            MalformedDataError: If a field has the wrong type, format or range
        """
        if not isinstance(payload, dict):
            raise MalformedDataError(
                "Transaction payload must be an object",
                raw_data=repr(payload)[:200],
                expected_format="object",
            )

        unknown = set(payload) - TRANSACTION_FIELDS
        if unknown:
            raise MalformedDataError(
                f"Unknown transaction fields: {', '.join(sorted(unknown))}",
                context={"fields": sorted(unknown)},
            )

        raw_date = _require(payload, "date")
        try:
            day = parse_iso_date(raw_date) if isinstance(raw_date, str) else None
        except ValueError:
            day = None
        if day is None:
            raise MalformedDataError(
                f"Invalid date: {raw_date!r}",
                raw_data=repr(raw_date),
                expected_format="YYYY-MM-DD",
                context={"field": "date"},
            )

        kind = parse_transaction_kind(_require(payload, "type"))
        currency = parse_currency(_require(payload, "currency"))
        amount = _positive_number(_require(payload, "amount"), "amount")

        note = payload.get("note")
        if note is not None:
            if not isinstance(note, str):
                raise MalformedDataError("note must be a string", raw_data=repr(note),
                                         context={"field": "note"})
            if len(note) > self.max_note_length:
                raise MalformedDataError(
                    f"note exceeds {self.max_note_length} characters",
                    context={"field": "note"},
                )

        fx_rate_kind: Optional[FxRateKind] = None
        if payload.get("fxType") is not None:
            fx_rate_kind = parse_fx_rate_kind(payload["fxType"])

        fx_rate: Optional[float] = None
        if payload.get("fxRate") is not None:
            fx_rate = _positive_number(payload["fxRate"], "fxRate")

        if currency is Currency.USD:
            fx_rate_kind = None
            fx_rate = None

        return TransactionInput(
            date=day,
            kind=kind,
            currency=currency,
            amount=amount,
            note=note or None,
            fx_rate_kind=fx_rate_kind,
            fx_rate=fx_rate,
        )


def validate_settings_patch(payload: Any) -> SettingsPatch:
    """
    Validate a partial settings update.

    Raises:
        MalformedDataError: On unknown keys, an unknown benchmark id or a
            rate outside 0..100
    """
    if not isinstance(payload, dict):
        raise MalformedDataError(
            "Settings payload must be an object",
            raw_data=repr(payload)[:200],
            expected_format="object",
        )

    unknown = set(payload) - SETTINGS_FIELDS
    if unknown:
        raise MalformedDataError(
            f"Unknown settings fields: {', '.join(sorted(unknown))}",
            context={"fields": sorted(unknown)},
        )

    selected = payload.get("selectedBenchmark")
    if selected is not None and selected not in benchmark_ids():
        raise MalformedDataError(
            f"Unknown benchmark: {selected!r}",
            raw_data=repr(selected),
            expected_format=" | ".join(benchmark_ids()),
            context={"field": "selectedBenchmark"},
        )

    rate = payload.get("benchmarkRate")
    if rate is not None and (not _is_number(rate) or rate < 0 or rate > 100):
        raise MalformedDataError(
            "benchmarkRate must be a number between 0 and 100",
            raw_data=repr(rate),
            expected_format="0..100",
            context={"field": "benchmarkRate"},
        )

    return SettingsPatch(
        selected_benchmark=selected,
        benchmark_rate=float(rate) if rate is not None else None,
    )
