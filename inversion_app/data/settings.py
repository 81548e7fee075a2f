"""
User settings and their partial-update rule.

Settings are a singleton per installation. Updates arrive as partial
patches and are applied by ``merge_settings`` only.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from .models import BenchmarkIndex

DEFAULT_BENCHMARK = "sp500"
DEFAULT_BENCHMARK_RATE = 10.0


@dataclass(frozen=True)
class Settings:
    """Selected benchmark and the annual rate cached from it."""
    selected_benchmark: str = DEFAULT_BENCHMARK
    benchmark_rate: float = DEFAULT_BENCHMARK_RATE     # percent per year, 0..100

    def to_dict(self) -> dict[str, Any]:
        return {
            "selectedBenchmark": self.selected_benchmark,
            "benchmarkRate": self.benchmark_rate,
        }


@dataclass(frozen=True)
class SettingsPatch:
    """Partial settings update; None means "not provided"."""
    selected_benchmark: Optional[str] = None
    benchmark_rate: Optional[float] = None


def merge_settings(current: Settings, patch: SettingsPatch) -> Settings:
    """
    Apply a partial update.

    Precedence: a field set in the patch wins over the current value; a
    field left as None keeps the current value. The current object is not
    modified.
    """
    changes: dict[str, Any] = {}

    if patch.selected_benchmark is not None:
        changes["selected_benchmark"] = patch.selected_benchmark
    if patch.benchmark_rate is not None:
        changes["benchmark_rate"] = float(patch.benchmark_rate)

    return replace(current, **changes)


def settings_for_benchmark(benchmark: BenchmarkIndex) -> SettingsPatch:
    """Patch selecting a benchmark together with its historical rate."""
    return SettingsPatch(
        selected_benchmark=benchmark.id,
        benchmark_rate=benchmark.historical_rate,
    )
