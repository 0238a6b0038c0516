"""Static pricing data.

Contains known model prices and a helper to build a pre-loaded
``PricingTable``.
"""

from agentwire.core.pricing.models import ModelPricing, PricingTable

# ---------------------------------------------------------------------------
# Known model prices (USD per million tokens)
# ---------------------------------------------------------------------------

KNOWN_PRICING: dict[str, ModelPricing] = {
    # Anthropic
    "claude-opus-4": ModelPricing(
        input_per_mtok=15.0,
        output_per_mtok=75.0,
        cache_write_per_mtok=18.75,
        cache_read_per_mtok=1.50,
    ),
    "claude-sonnet-4": ModelPricing(
        input_per_mtok=3.0,
        output_per_mtok=15.0,
        cache_write_per_mtok=3.75,
        cache_read_per_mtok=0.30,
    ),
    "claude-haiku-3.5": ModelPricing(
        input_per_mtok=0.80,
        output_per_mtok=4.0,
        cache_write_per_mtok=1.0,
        cache_read_per_mtok=0.08,
    ),
    # OpenAI
    "gpt-5": ModelPricing(input_per_mtok=1.25, output_per_mtok=10.0),
    "gpt-5-nano": ModelPricing(input_per_mtok=0.05, output_per_mtok=0.40),
    "gpt-4o": ModelPricing(input_per_mtok=2.50, output_per_mtok=10.0),
    "gpt-4o-mini": ModelPricing(input_per_mtok=0.15, output_per_mtok=0.60),
    "o3-mini": ModelPricing(input_per_mtok=1.10, output_per_mtok=4.40),
    # Gemini
    "gemini-3-pro-preview": ModelPricing(input_per_mtok=2.0, output_per_mtok=12.0),
    "gemini-3-flash-preview": ModelPricing(input_per_mtok=0.50, output_per_mtok=3.0),
    "gemini-2.5-pro": ModelPricing(input_per_mtok=1.25, output_per_mtok=10.0),
    "gemini-2.5-flash": ModelPricing(input_per_mtok=0.30, output_per_mtok=2.50),
    "gemini-2.5-flash-lite": ModelPricing(input_per_mtok=0.10, output_per_mtok=0.40),
    "gemini-2.0-flash": ModelPricing(input_per_mtok=0.10, output_per_mtok=0.40),
}

KNOWN_ALIASES: dict[str, str] = {
    "opus": "claude-opus-4",
    "sonnet": "claude-sonnet-4",
    "haiku": "claude-haiku-3.5",
    "claude-3-5-haiku": "claude-haiku-3.5",
    "claude-3-5-haiku-latest": "claude-haiku-3.5",
}


def build_default_pricing() -> PricingTable:
    """Return a ``PricingTable`` pre-loaded with known models and aliases."""
    table = PricingTable()
    for model_id, pricing in KNOWN_PRICING.items():
        table.register(model_id, pricing)
    for name, model_id in KNOWN_ALIASES.items():
        table.alias(name, model_id)
    return table
