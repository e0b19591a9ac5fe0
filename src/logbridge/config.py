"""
Pydantic configuration for logbridge.

Nothing here is required: with no configuration the resolver discovers
a backend on its own. Configuration can force a provider or keep
providers out of discovery.

Example YAML:
    provider: memory
    disabled_providers: [structlog]
    memory:
      min_level: DEBUG
      capacity: 1000

Usage:
    config = LogBridgeConfig.from_yaml("logging.yaml")
    config.apply()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator, model_validator

from logbridge.providers import PROVIDERS, LogProvider, MemoryLogProvider, provider_class
from logbridge.records import LogLevel
from logbridge.resolver import LogProviderResolver


class MemoryProviderConfig(BaseModel):
    min_level: int | str = LogLevel.TRACE.value
    capacity: int = 10000

    @field_validator("min_level")
    @classmethod
    def validate_level(cls, v: int | str) -> int | str:
        LogLevel.from_value(v)
        return v

    @field_validator("capacity")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"capacity must be positive, got {v}")
        return v


class LogBridgeConfig(BaseModel):
    provider: Optional[str] = None           # force this provider, skip discovery
    disabled_providers: list[str] = []       # probes of these always fail
    memory: Optional[MemoryProviderConfig] = None

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        provider_class(v)
        return v.strip().lower()

    @field_validator("disabled_providers")
    @classmethod
    def validate_disabled(cls, v: list[str]) -> list[str]:
        return [provider_class(name).name for name in v]

    @model_validator(mode="after")
    def validate_forced_not_disabled(self) -> "LogBridgeConfig":
        if self.provider is not None and self.provider in self.disabled_providers:
            raise ValueError(
                f"Provider '{self.provider}' is both forced and disabled"
            )
        return self

    # ── Loading ───────────────────────────────────────────────────

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LogBridgeConfig":
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LogBridgeConfig":
        """Load and validate from a YAML string. An empty document is an empty config."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LogBridgeConfig":
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(exclude_none=exclude_none)

    # ── Application ───────────────────────────────────────────────

    def build_provider(self) -> LogProvider | None:
        """Construct the forced provider, if any."""
        if self.provider is None:
            return None
        cls = provider_class(self.provider)
        if cls is MemoryLogProvider:
            memory = self.memory or MemoryProviderConfig()
            return MemoryLogProvider(min_level=memory.min_level, capacity=memory.capacity)
        return cls()

    def apply(self, resolver: LogProviderResolver | None = None) -> LogProvider | None:
        """
        Apply to the built-in provider classes and to ``resolver``.

        Sets each provider class's ``available_override``. The flag lives on
        the class, so ``disabled_providers`` is process-wide: it changes
        discovery for every resolver, not only ``resolver``. Resolvers that
        already cached a provider keep it until set_provider(None).

        A forced provider is installed on ``resolver`` with set_provider();
        otherwise that resolver's cache is cleared so discovery runs again
        under the new overrides.

        Returns the installed provider, or None when discovery is left to run.
        """
        resolver = resolver or LogProviderResolver.instance()
        for name, cls in PROVIDERS.items():
            cls.available_override = name not in self.disabled_providers

        provider = self.build_provider()
        resolver.set_provider(provider)
        return provider


def configure(
    config: LogBridgeConfig | dict | str | Path,
    resolver: LogProviderResolver | None = None,
) -> LogProvider | None:
    """Apply a config object, a dict, or a path to a YAML file."""
    if isinstance(config, LogBridgeConfig):
        parsed = config
    elif isinstance(config, dict):
        parsed = LogBridgeConfig.from_dict(config)
    elif isinstance(config, (str, Path)):
        parsed = LogBridgeConfig.from_yaml(config)
    else:
        raise TypeError(f"Unsupported config type: {type(config).__name__}")
    return parsed.apply(resolver)
