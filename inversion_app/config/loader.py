"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig
    filename: str = "app.yaml"

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load installation-level overrides from the YAML file, if present."""
        config_file = self.config_dir / self.filename

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Runtime overrides (highest priority)
        2. YAML file overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, tuple):
                    result[field_name] = list(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
