"""Pydantic models for the ``agentwire.yaml`` settings file."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from agentwire.core.pricing.models import ModelPricing, PricingTable
from agentwire.core.pricing.registry_data import build_default_pricing
from agentwire.runtime.cli_backend.models import CliBackendConfig


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = False
    otlp_endpoint: str | None = None


class AgentwireSettings(BaseModel):
    """Top-level settings parsed from YAML."""

    version: str = "1"
    default_backend: str | None = None
    cli_backends: dict[str, CliBackendConfig] = Field(default_factory=dict)
    pricing: dict[str, ModelPricing] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @model_validator(mode="after")
    def _validate_default_backend(self) -> AgentwireSettings:
        if self.default_backend and self.default_backend not in self.cli_backends:
            msg = f"default_backend '{self.default_backend}' not in cli_backends"
            raise ValueError(msg)
        return self

    def backend(self, name: str | None = None) -> CliBackendConfig:
        """Return the named CLI backend, the default one, or built-in defaults."""
        key = name or self.default_backend
        if key is None:
            return CliBackendConfig()
        if key not in self.cli_backends:
            msg = f"Unknown CLI backend '{key}'"
            raise KeyError(msg)
        return self.cli_backends[key]

    def pricing_table(self) -> PricingTable:
        """The default pricing table with this file's overrides merged in."""
        table = build_default_pricing()
        for model_id, pricing in self.pricing.items():
            table.register(model_id, pricing)
        for name, model_id in self.aliases.items():
            table.alias(name, model_id)
        return table
