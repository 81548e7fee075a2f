"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from inversion_app.config.defaults import get_default_config
from inversion_app.config.loader import ConfigLoader
from inversion_app.config.validation import ConfigValidator
from inversion_app.engine import PortfolioEngine
from inversion_app.errors import MalformedDataError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config.fx.cache_ttl_seconds == 300
        assert config.fx.fallback.blue == 1200.0
        assert config.benchmark.default_benchmark == "sp500"
        assert config.benchmark.default_rate == 10.0
        assert config.storage.allow_memory_fallback is True


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader points at the repository config directory."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        """Test config merging without a YAML file."""
        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["fx"]["api_url"] == "https://dolarapi.com/v1/dolares"
        assert config["fx"]["fallback"]["card"] == 1400.0
        assert config["storage"]["candidate_paths"] == ["./data/data.db", "/tmp/inversion_data.db"]

    def test_yaml_file_overrides_defaults(self, tmp_path: Path) -> None:
        """Test that the YAML file wins over defaults, key by key."""
        (tmp_path / "app.yaml").write_text(
            "fx:\n"
            "  cache_ttl_seconds: 60\n"
            "  fallback:\n"
            "    blue: 1500\n"
            "benchmark:\n"
            "  default_benchmark: nasdaq100\n"
        )

        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["fx"]["cache_ttl_seconds"] == 60
        assert config["fx"]["fallback"]["blue"] == 1500
        # Other defaults should remain
        assert config["fx"]["fallback"]["official"] == 1000.0
        assert config["fx"]["timeout_seconds"] == 5
        assert config["benchmark"]["default_benchmark"] == "nasdaq100"
        assert config["benchmark"]["default_rate"] == 10.0

    def test_overrides_win_over_yaml(self, tmp_path: Path) -> None:
        """Test runtime overrides take priority over the YAML file."""
        (tmp_path / "app.yaml").write_text("fx:\n  cache_ttl_seconds: 60\n")

        config = ConfigLoader.create(tmp_path).merge_config({"fx": {"cache_ttl_seconds": 0}})

        assert config["fx"]["cache_ttl_seconds"] == 0

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        (tmp_path / "app.yaml").write_text("")

        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["benchmark"]["default_rate"] == 10.0

    def test_merge_does_not_mutate_defaults(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)
        loader.merge_config({"fx": {"fallback": {"blue": 1.0}}})

        assert loader.merge_config()["fx"]["fallback"]["blue"] == 1200.0

    def test_shipped_config_is_valid(self) -> None:
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []


class TestConfigValidator:
    """Test suite for configuration validator."""

    def test_valid_fx_params(self) -> None:
        params = {
            "api_url": "https://dolarapi.com/v1/dolares",
            "timeout_seconds": 5,
            "cache_ttl_seconds": 0,
            "use_fallback_rates": False,
            "fallback": {"blue": 1200.0},
        }
        assert ConfigValidator.validate_fx_params(params) == []

    @pytest.mark.parametrize("field,value", [
        ("api_url", "ftp://rates.example"),
        ("api_url", 42),
        ("timeout_seconds", 0),
        ("timeout_seconds", True),
        ("cache_ttl_seconds", -1),
        ("use_fallback_rates", "yes"),
    ])
    def test_invalid_fx_params(self, field: str, value) -> None:
        errors = ConfigValidator.validate_fx_params({field: value})

        assert len(errors) == 1
        assert errors[0].field == field
        assert errors[0].value == value

    def test_invalid_fallback_rate(self) -> None:
        errors = ConfigValidator.validate_fx_params({"fallback": {"blue": 0, "card": 1400}})

        assert [e.field for e in errors] == ["fallback.blue"]

    @pytest.mark.parametrize("params", [
        {"default_benchmark": ""},
        {"default_benchmark": None},
        {"default_rate": -0.5},
        {"default_rate": 100.5},
        {"default_rate": "10"},
    ])
    def test_invalid_benchmark_params(self, params) -> None:
        assert len(ConfigValidator.validate_benchmark_params(params)) == 1

    def test_rate_bounds_inclusive(self) -> None:
        assert ConfigValidator.validate_benchmark_params({"default_rate": 0}) == []
        assert ConfigValidator.validate_benchmark_params({"default_rate": 100}) == []

    def test_validate_config_collects_all_sections(self) -> None:
        config = {
            "fx": {"timeout_seconds": -1},
            "benchmark": {"default_rate": 200},
        }

        errors = ConfigValidator.validate_config(config)

        assert {e.field for e in errors} == {"timeout_seconds", "default_rate"}

    @pytest.mark.parametrize("params", [
        {"level": "VERBOSE"},
        {"level": 10},
        {"format_json": "true"},
    ])
    def test_invalid_logging_params(self, params) -> None:
        assert len(ConfigValidator.validate_logging_params(params)) == 1

    def test_logging_level_case_insensitive(self) -> None:
        assert ConfigValidator.validate_logging_params({"level": "debug"}) == []

    def test_unknown_fallback_market(self) -> None:
        errors = ConfigValidator.validate_config({"fx": {"fallback": {"oficial": 1000}}})

        assert [e.field for e in errors] == ["fallback.oficial"]

    def test_fallback_must_be_mapping(self) -> None:
        errors = ConfigValidator.validate_fx_params({"fallback": [1200, 1000]})

        assert [e.field for e in errors] == ["fallback"]

    def test_engine_rejects_unknown_fallback_market(self, tmp_path: Path) -> None:
        overrides = {
            "fx": {"fallback": {"mep": 1150}},
            "storage": {"candidate_paths": [str(tmp_path / "data.db")]},
        }

        with pytest.raises(MalformedDataError) as exc_info:
            PortfolioEngine.from_config(tmp_path, overrides=overrides)

        assert exc_info.value.context["errors"] == ["fallback.mep"]
