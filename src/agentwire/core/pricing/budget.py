"""Token-ceiling to cost-ceiling translation and cost estimates."""

from functools import lru_cache

from agentwire.core.interface.models import TokenUsage
from agentwire.core.pricing.models import CostEstimate, PricingTable
from agentwire.core.pricing.registry_data import build_default_pricing

DEFAULT_OUTPUT_PER_MTOK = 15.0
BUDGET_MULTIPLIER = 1.5
MAX_BUDGET_USD = 5.0


@lru_cache(maxsize=1)
def default_pricing() -> PricingTable:
    """The shared read-only default pricing table."""
    return build_default_pricing()


def calculate_budget(
    max_tokens: int,
    model: str | None = None,
    pricing: PricingTable | None = None,
) -> float:
    """Convert a ``max_tokens`` ceiling into a USD spending ceiling.

    The output price of *model* (or the default tier when the model is
    absent or unknown) is scaled by 1.5 to leave room for input tokens, and
    the result is capped at ``MAX_BUDGET_USD``.
    """
    output_per_mtok = DEFAULT_OUTPUT_PER_MTOK
    if model:
        price = (pricing or default_pricing()).resolve(model)
        if price is not None and price.output_per_mtok:
            output_per_mtok = price.output_per_mtok

    output_cost = max_tokens / 1_000_000 * output_per_mtok
    return min(output_cost * BUDGET_MULTIPLIER, MAX_BUDGET_USD)


def estimate_cost(
    usage: TokenUsage, model: str, pricing: PricingTable | None = None
) -> CostEstimate:
    """Estimate the cost of *usage* on *model*; zero for unknown models."""
    price = (pricing or default_pricing()).resolve(model)
    if price is None:
        return CostEstimate()

    input_cost = usage.input_tokens / 1_000_000 * price.input_per_mtok
    output_cost = usage.output_tokens / 1_000_000 * price.output_per_mtok
    cache_cost = (
        usage.cache_creation_input_tokens / 1_000_000 * price.cache_write_per_mtok
        + usage.cache_read_input_tokens / 1_000_000 * price.cache_read_per_mtok
    )
    return CostEstimate(
        input_cost=input_cost + cache_cost,
        output_cost=output_cost,
        total_cost=input_cost + output_cost + cache_cost,
    )
