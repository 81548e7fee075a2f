"""Default configuration parameters for the contribution tracker."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FallbackRates:
    """ARS per USD handed out when the rate source is down and nothing is cached."""
    blue: float = 1200.0
    official: float = 1000.0
    stock_exchange: float = 1150.0                   # MEP
    cash_settlement: float = 1180.0                  # CCL
    card: float = 1400.0
    wholesale: float = 980.0


@dataclass(frozen=True)
class FxParams:
    """FX rate provider parameters."""
    api_url: str = "https://dolarapi.com/v1/dolares"
    timeout_seconds: int = 5
    cache_ttl_seconds: int = 300                     # 5 minutes
    use_fallback_rates: bool = True                  # False reports "unavailable" instead
    fallback: FallbackRates = field(default_factory=FallbackRates)


@dataclass(frozen=True)
class BenchmarkParams:
    """Benchmark comparison parameters."""
    default_benchmark: str = "sp500"
    default_rate: float = 10.0                       # percent per year


@dataclass(frozen=True)
class StorageParams:
    """Transaction store parameters."""
    candidate_paths: tuple[str, ...] = ("./data/data.db", "/tmp/inversion_data.db")
    allow_memory_fallback: bool = True


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    fx: FxParams
    benchmark: BenchmarkParams
    storage: StorageParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        fx=FxParams(),
        benchmark=BenchmarkParams(),
        storage=StorageParams(),
        logging=LoggingParams(),
    )
