"""Settings models and YAML loading."""

from agentwire.config.errors import SettingsValidationError
from agentwire.config.loader import SettingsLoader, apply_telemetry, load_settings
from agentwire.config.models import AgentwireSettings, TelemetrySettings

__all__ = [
    "AgentwireSettings",
    "SettingsLoader",
    "SettingsValidationError",
    "TelemetrySettings",
    "apply_telemetry",
    "load_settings",
]
