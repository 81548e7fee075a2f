"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from .defaults import FallbackRates


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_fx_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate FX provider parameters."""
        errors = []

        if "api_url" in params:
            value = params["api_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="api_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "cache_ttl_seconds" in params:
            value = params["cache_ttl_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="cache_ttl_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "use_fallback_rates" in params:
            value = params["use_fallback_rates"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="use_fallback_rates",
                    message="Must be a boolean",
                    value=value
                ))

        fallback = params.get("fallback") or {}
        if not isinstance(fallback, dict):
            errors.append(ValidationError(
                field="fallback",
                message="Must be a mapping of market to rate",
                value=fallback
            ))
            fallback = {}

        markets = ", ".join(FallbackRates.__dataclass_fields__)
        for name, value in fallback.items():
            if name not in FallbackRates.__dataclass_fields__:
                errors.append(ValidationError(
                    field=f"fallback.{name}",
                    message=f"Unknown market, expected one of {markets}",
                    value=value
                ))
            elif not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field=f"fallback.{name}",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_benchmark_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate benchmark parameters."""
        errors = []

        if "default_benchmark" in params:
            value = params["default_benchmark"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="default_benchmark",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "default_rate" in params:
            value = params["default_rate"]
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field="default_rate",
                    message="Must be a number between 0 and 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "fx" in config:
            errors.extend(ConfigValidator.validate_fx_params(config["fx"]))

        if "benchmark" in config:
            errors.extend(ConfigValidator.validate_benchmark_params(config["benchmark"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
