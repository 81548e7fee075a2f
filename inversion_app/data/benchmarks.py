"""Static catalog of benchmark indices used for the hypothetical comparison."""

from typing import Optional

from .models import BenchmarkCategory, BenchmarkIndex

BENCHMARK_INDICES: tuple[BenchmarkIndex, ...] = (
    BenchmarkIndex(
        id="sp500",
        name="S&P 500",
        description="500 largest US companies",
        historical_rate=10.0,
        category=BenchmarkCategory.EQUITY,
    ),
    BenchmarkIndex(
        id="nasdaq100",
        name="Nasdaq 100",
        description="100 largest non-financial Nasdaq companies",
        historical_rate=12.0,
        category=BenchmarkCategory.EQUITY,
    ),
    BenchmarkIndex(
        id="dowjones",
        name="Dow Jones",
        description="30 US blue-chip companies",
        historical_rate=8.0,
        category=BenchmarkCategory.EQUITY,
    ),
    BenchmarkIndex(
        id="russell2000",
        name="Russell 2000",
        description="2,000 US small-cap companies",
        historical_rate=9.0,
        category=BenchmarkCategory.EQUITY,
    ),
    BenchmarkIndex(
        id="msci_real_estate",
        name="MSCI US Real Estate",
        description="US real estate investment trusts",
        historical_rate=7.0,
        category=BenchmarkCategory.REAL_ESTATE,
    ),
    BenchmarkIndex(
        id="ftse_nareit",
        name="FTSE NAREIT",
        description="US REIT index",
        historical_rate=7.5,
        category=BenchmarkCategory.REAL_ESTATE,
    ),
    BenchmarkIndex(
        id="msci_world",
        name="MSCI World",
        description="Developed markets worldwide",
        historical_rate=8.5,
        category=BenchmarkCategory.EQUITY,
    ),
    BenchmarkIndex(
        id="msci_emerging",
        name="MSCI Emerging Markets",
        description="Emerging markets (China, Brazil, India)",
        historical_rate=9.5,
        category=BenchmarkCategory.EQUITY,
    ),
)

_BY_ID = {index.id: index for index in BENCHMARK_INDICES}


def get_benchmark_by_id(benchmark_id: str) -> Optional[BenchmarkIndex]:
    """Look up a catalog entry, None for unknown identifiers."""
    return _BY_ID.get(benchmark_id)


def get_benchmarks_by_category(category: BenchmarkCategory) -> list[BenchmarkIndex]:
    """All entries in a category, in catalog order."""
    return [index for index in BENCHMARK_INDICES if index.category is category]


def benchmark_ids() -> list[str]:
    return list(_BY_ID)
