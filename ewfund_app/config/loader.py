"""Configuration loader with layered parameter precedence."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AllocationParams,
    ColumnLabels,
    DecoderParams,
    DefaultConfig,
    LoggingParams,
    ReportParams,
    SourceParams,
    get_default_config,
)
from .validation import ConfigValidator


SETTINGS_FILE = "settings.yaml"

# Environment variable -> (section, key, converter)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "EWFUND_TARGET_BUDGET": ("allocation", "target_budget", float),
    "EWFUND_SOURCE_URL": ("source", "url", str),
    "EWFUND_SOURCE_FILE": ("source", "file_path", str),
    "EWFUND_SOURCE_TIMEOUT": ("source", "timeout_seconds", int),
    "EWFUND_SOURCE_RETRIES": ("source", "retry_attempts", int),
    "EWFUND_MALFORMED_ROW_POLICY": ("decoder", "malformed_row_policy", str),
    "EWFUND_REPORT_FORMAT": ("report", "format", str),
    "EWFUND_LOG_LEVEL": ("logging", "level", str),
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with layered precedence."""

    config_dir: Path
    defaults: DefaultConfig
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> "ConfigLoader":
        """Create a ConfigLoader instance; config_dir defaults to ./config under the working directory."""
        if config_dir is None:
            config_dir = Path.cwd() / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
            environ=os.environ if environ is None else environ,
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load settings from the YAML file in the config directory."""
        settings_file = self.config_dir / SETTINGS_FILE

        if not settings_file.exists():
            return {}

        try:
            with open(settings_file, encoding="utf-8") as f:
                file_config = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Cannot parse {settings_file}: {e}",
                context={"path": str(settings_file)}
            ) from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"{settings_file} must contain a mapping at the top level",
                context={"path": str(settings_file)}
            )
        return file_config

    def load_env_config(self) -> dict[str, Any]:
        """Collect overrides from EWFUND_* environment variables."""
        config: dict[str, Any] = {}

        for name, (section, key, convert) in ENV_OVERRIDES.items():
            raw = self.environ.get(name)
            if raw is None or raw == "":
                continue
            try:
                value = convert(raw)
            except ValueError:
                # Left as text so validation reports the bad value
                value = raw
            config.setdefault(section, {})[key] = value

        return config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with layered precedence.

        Priority order:
        1. Explicit overrides, usually from the command line (highest priority)
        2. EWFUND_* environment variables
        3. settings.yaml in the config directory
        4. Dataclass defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())
        config = self._deep_merge(config, self.load_env_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and convert the configuration into dataclasses."""
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{e.field}: {e.message} (value: {e.value!r})" for e in errors)
            raise ConfigurationError(f"Invalid configuration: {details}", errors=errors)

        decoder = dict(config["decoder"])
        labels = ColumnLabels(**decoder.pop("labels"))

        return DefaultConfig(
            source=SourceParams(**config["source"]),
            decoder=DecoderParams(labels=labels, **decoder),
            allocation=AllocationParams(**config["allocation"]),
            report=ReportParams(**config["report"]),
            logging=LoggingParams(**config["logging"]),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
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
