"""Model pricing types and the lookup table."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict


class ModelPricing(BaseModel):
    """USD per million tokens for one model."""

    model_config = ConfigDict(frozen=True)

    input_per_mtok: float = 0.0
    output_per_mtok: float = 0.0
    cache_write_per_mtok: float = 0.0
    cache_read_per_mtok: float = 0.0


class CostEstimate(BaseModel):
    """Cost of one request in USD; cache costs are folded into ``input_cost``."""

    input_cost: float = 0.0
    output_cost: float = 0.0
    total_cost: float = 0.0
    currency: str = "USD"


class PricingTable:
    """Maps model identifiers to their prices."""

    def __init__(self) -> None:
        self._models: dict[str, ModelPricing] = {}
        self._aliases: dict[str, str] = {}

    def register(self, model_id: str, pricing: ModelPricing) -> None:
        """Register *pricing* for *model_id*, replacing any earlier entry."""
        self._models[model_id.lower()] = pricing

    def alias(self, name: str, model_id: str) -> None:
        self._aliases[name.lower()] = model_id.lower()

    def __contains__(self, model_id: str) -> bool:
        return self.resolve(model_id) is not None

    def resolve(self, model: str) -> ModelPricing | None:
        """Resolve the pricing for *model*.

        Lookup order:
        1. Exact id, after dropping a ``provider/`` prefix
        2. Alias (e.g. ``sonnet`` -> ``claude-sonnet-4``)
        3. Longest registered id that prefixes *model*, which covers dated
           snapshots such as ``claude-sonnet-4-20250514``
        """
        name = model.lower()
        if "/" in name:
            name = name.rsplit("/", 1)[1]
        if name in self._models:
            return self._models[name]

        alias = _longest_prefix(name, self._aliases)
        if alias is not None:
            name = self._aliases[alias]

        best = _longest_prefix(name, self._models)
        return self._models[best] if best is not None else None


def _longest_prefix(name: str, keys: Iterable[str]) -> str | None:
    return max((key for key in keys if name.startswith(key)), key=len, default=None)
