"""agentwire: canonical LLM messages, vendor stream parsers and a CLI-backed SSE emulator."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from agentwire.core.interface.models import CanonicalMessage as CanonicalMessage
    from agentwire.core.interface.request import project_request as project_request
    from agentwire.core.interface.vendor import Vendor as Vendor
    from agentwire.core.streaming.parsers import parse_stream as parse_stream
    from agentwire.runtime.cli_backend.emulator import CliEmulator as CliEmulator

_LAZY_EXPORTS = {
    "CanonicalMessage": "agentwire.core.interface.models",
    "Vendor": "agentwire.core.interface.vendor",
    "project_request": "agentwire.core.interface.request",
    "parse_stream": "agentwire.core.streaming.parsers",
    "CliEmulator": "agentwire.runtime.cli_backend.emulator",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'agentwire' has no attribute {name!r}")
