"""Settings loading for agentwire."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agentwire.config.errors import SettingsValidationError
from agentwire.config.models import AgentwireSettings
from agentwire.utils.telemetry import configure_telemetry


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`AgentwireSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> AgentwireSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing. An empty file
        yields default settings.

        Raises:
            SettingsValidationError: On read errors, YAML parse errors or
                schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsValidationError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsValidationError("Settings YAML must be a mapping")

        try:
            return AgentwireSettings.model_validate(data)
        except ValidationError as exc:
            raise SettingsValidationError(str(exc)) from exc


def load_settings(path: str | Path | None) -> AgentwireSettings:
    """Load *path*, or return defaults when no path is given."""
    if path is None:
        return AgentwireSettings()
    return SettingsLoader(Path(path)).load()


def apply_telemetry(settings: AgentwireSettings) -> None:
    """Configure tracing when the settings enable it."""
    if settings.telemetry.enabled:
        configure_telemetry(
            export_to_console=settings.telemetry.console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )
