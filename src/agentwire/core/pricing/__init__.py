"""Model pricing and CLI budget translation."""

from agentwire.core.pricing.budget import calculate_budget, estimate_cost
from agentwire.core.pricing.models import CostEstimate, ModelPricing, PricingTable
from agentwire.core.pricing.registry_data import build_default_pricing

__all__ = [
    "CostEstimate",
    "ModelPricing",
    "PricingTable",
    "build_default_pricing",
    "calculate_budget",
    "estimate_cost",
]
