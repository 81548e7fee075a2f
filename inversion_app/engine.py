"""
Main portfolio engine coordinator.

Wires the transaction store, the FX rate provider and the benchmark catalog
to the portfolio computations. Every operation an outer surface (HTTP, CLI)
needs goes through ``PortfolioEngine``; payloads are the camelCase wire
dicts and results are model objects with ``to_dict`` renderers.
"""

from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.benchmarks import BENCHMARK_INDICES, get_benchmark_by_id
from .data.models import (
    BenchmarkIndex,
    Currency,
    FxRateKind,
    FxRatesSnapshot,
    Transaction,
    TransactionInput,
)
from .data.parsers import parse_fx_rate_kind, parse_json_payload
from .data.settings import Settings, settings_for_benchmark
from .data.validators import TransactionValidator, validate_settings_patch
from .errors import MalformedDataError
from .fx.provider import FxRateProvider
from .logging.config import configure_logging, log_transaction_change
from .metrics.fx_resolver import resolve_rate
from .metrics.summary import summarize
from .models.metrics import PortfolioSummary
from .persistence.transaction_store import TransactionStore, create_store
from .utils.time import Clock, utc_now

logger = structlog.get_logger(__name__)

Payload = Union[dict[str, Any], str, bytes]


def _decode(payload: Payload) -> Any:
    if isinstance(payload, (str, bytes)):
        return parse_json_payload(payload)
    return payload


class PortfolioEngine:
    """
    Coordinator for the contribution tracker.

    Manages the flow:
    Payload → Validation → Rate freezing → Store → Aggregation/Projection → Summary
    """

    def __init__(self,
                 store: TransactionStore,
                 rate_provider: FxRateProvider,
                 clock: Optional[Clock] = None,
                 validator: Optional[TransactionValidator] = None) -> None:
        self.store = store
        self.rate_provider = rate_provider
        self.clock: Clock = clock or utc_now
        self.validator = validator or TransactionValidator()
        self.logger = logger

        self.logger.info(
            "Portfolio engine initialized",
            storage_type=store.storage_type,
            demo_mode=store.is_demo_mode(),
        )

    @classmethod
    def from_config(cls,
                    config_dir: Optional[Path] = None,
                    overrides: Optional[dict[str, Any]] = None,
                    clock: Optional[Clock] = None) -> "PortfolioEngine":
        """
        Build an engine from the merged configuration.

        Raises:
            MalformedDataError: If the merged configuration is invalid
        """
        config = ConfigLoader.create(config_dir).merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise MalformedDataError(
                "Invalid configuration: " + "; ".join(f"{e.field}: {e.message}" for e in errors),
                context={"errors": [e.field for e in errors]},
            )

        logging_config = config.get("logging", {})
        configure_logging(
            level=logging_config.get("level", "INFO"),
            format_json=logging_config.get("format_json", False),
        )

        benchmark_config = config["benchmark"]
        default_settings = Settings(
            selected_benchmark=benchmark_config["default_benchmark"],
            benchmark_rate=float(benchmark_config["default_rate"]),
        )
        storage_config = config["storage"]
        store = create_store(
            storage_config["candidate_paths"],
            default_settings=default_settings,
            allow_memory_fallback=storage_config.get("allow_memory_fallback", True),
        )
        provider = FxRateProvider.from_config(config["fx"], clock=clock)

        return cls(store, provider, clock=clock)

    def status(self) -> dict[str, Any]:
        return {
            "demoMode": self.store.is_demo_mode(),
            "storageType": self.store.storage_type,
        }

    def list_benchmarks(self) -> list[BenchmarkIndex]:
        return list(BENCHMARK_INDICES)

    def fx_snapshot(self) -> Optional[FxRatesSnapshot]:
        """Current rates from the provider, None when unavailable."""
        return self.rate_provider.current_snapshot()

    def current_rate(self, kind: Union[FxRateKind, str],
                     manual_override: Optional[float] = None) -> Optional[float]:
        """Fresh lookup of a quote for display; never stored."""
        if isinstance(kind, str):
            kind = parse_fx_rate_kind(kind)
        snapshot = None if kind is FxRateKind.MANUAL else self.fx_snapshot()
        return resolve_rate(kind, snapshot, manual_override)

    def build_input(self, payload: Payload) -> TransactionInput:
        """
        Validate a payload and freeze the FX rate into ARS entries.

        An ARS entry naming a market quote but no explicit rate gets the
        current quote for that market; with ``MANUAL`` the submitted rate is
        the override. When no rate can be resolved the entry is kept without
        one and its USD equivalent stays unknown.
        """
        return self._freeze_rate(self.validator.validate(_decode(payload)))

    def _freeze_rate(self, data: TransactionInput) -> TransactionInput:
        if data.currency is not Currency.ARS:
            return data

        if data.fx_rate_kind is None or data.fx_rate is not None:
            return data

        if data.fx_rate_kind is FxRateKind.MANUAL:
            return data

        rate = resolve_rate(data.fx_rate_kind, self.fx_snapshot())
        if rate is None:
            self.logger.warning(
                "No FX rate available, USD equivalent unknown",
                fx_type=data.fx_rate_kind.value,
            )
            return data

        return replace(data, fx_rate=rate)

    def list_transactions(self) -> list[Transaction]:
        return self.store.list_transactions()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.store.get_transaction(transaction_id)

    def create_transaction(self, payload: Payload) -> Transaction:
        """
        Validate and store a new transaction.

        Raises:
            MissingDataError: If a required field is absent
            MalformedDataError: If a field is invalid
        """
        transaction = self.store.create_transaction(self.build_input(payload))
        log_transaction_change(self.logger, "created", transaction.id, {
            "currency": transaction.currency.value,
            "usd_equivalent": transaction.usd_equivalent,
        })
        return transaction

    def update_transaction(self, transaction_id: str,
                           payload: Payload) -> Optional[Transaction]:
        """Replace a transaction wholesale; None when the id is unknown."""
        data = self.validator.validate(_decode(payload))

        # no rate lookup for ids that are not stored
        if self.store.get_transaction(transaction_id) is None:
            self.logger.info("Transaction not found", transaction_id=transaction_id)
            return None

        transaction = self.store.update_transaction(transaction_id, self._freeze_rate(data))
        if transaction is None:
            self.logger.info("Transaction not found", transaction_id=transaction_id)
            return None
        log_transaction_change(self.logger, "updated", transaction.id)
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        deleted = self.store.delete_transaction(transaction_id)
        if deleted:
            log_transaction_change(self.logger, "deleted", transaction_id)
        return deleted

    def get_settings(self) -> Settings:
        return self.store.get_settings()

    def update_settings(self, payload: Payload) -> Settings:
        """
        Apply a partial settings update.

        Raises:
            MalformedDataError: On unknown keys or out-of-range values
        """
        settings = self.store.update_settings(validate_settings_patch(_decode(payload)))
        self.logger.info("Settings updated", **settings.to_dict())
        return settings

    def select_benchmark(self, benchmark_id: str) -> Settings:
        """
        Select a catalog benchmark together with its historical rate.

        Raises:
            MalformedDataError: If the benchmark id is unknown
        """
        benchmark = get_benchmark_by_id(benchmark_id)
        if benchmark is None:
            raise MalformedDataError(
                f"Unknown benchmark: {benchmark_id!r}",
                raw_data=benchmark_id,
                context={"field": "selectedBenchmark"},
            )
        settings = self.store.update_settings(settings_for_benchmark(benchmark))
        self.logger.info("Benchmark selected", **settings.to_dict())
        return settings

    def summary(self, as_of: Optional[Union[datetime, date]] = None) -> PortfolioSummary:
        """
        Dashboard figures for the stored transactions.

        The projection uses the selected benchmark's catalog rate; if the id
        is not in the catalog the rate cached in the settings is used.
        """
        settings = self.store.get_settings()
        benchmark = get_benchmark_by_id(settings.selected_benchmark)
        rate = benchmark.historical_rate if benchmark else settings.benchmark_rate

        result = summarize(
            self.store.list_transactions(),
            benchmark_id=settings.selected_benchmark,
            benchmark_rate=rate,
            as_of=as_of if as_of is not None else self.clock(),
            benchmark=benchmark,
        )

        self.logger.debug(
            "Summary computed",
            benchmark=settings.selected_benchmark,
            invested_usd=result.projection.invested_usd,
            hypothetical_usd=result.projection.hypothetical_usd,
        )
        return result
