"""Transpiler protocol, converting between CMS and vendor message formats.

Each vendor family has a concrete transpiler that implements bidirectional
conversion: CMS history -> vendor ``messages`` list for replay, and a
stored vendor-shaped history -> CMS for normalization.
"""

from collections.abc import Sequence
from typing import Any, Protocol

from agentwire.core.interface.models import CanonicalMessage


class Transpiler(Protocol):
    """Protocol for vendor-specific message format transpilers."""

    def to_provider(self, messages: Sequence[CanonicalMessage]) -> list[dict[str, Any]]:
        """Project CMS history into the vendor's request message list.

        Only allowlisted fields are copied. The returned dicts never share
        object identity with the stored messages.
        """
        ...

    def from_provider(self, messages: Sequence[dict[str, Any]]) -> list[CanonicalMessage]:
        """Normalize a vendor-shaped message list into CMS messages."""
        ...
