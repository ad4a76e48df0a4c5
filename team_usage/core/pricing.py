"""
Pricing calculations and model limits.

Prices reported token usage and exposes each model's context window.
"""

from dataclasses import dataclass
from typing import Dict
from decimal import Decimal, ROUND_UP


@dataclass(frozen=True)
class ModelPricing:
    """Per-token pricing and context window for a specific model."""
    input_cost_per_1k: Decimal  # Cost per 1K input tokens
    output_cost_per_1k: Decimal  # Cost per 1K output tokens
    context_window: int


@dataclass(frozen=True)
class PricingTable:
    """Fixed pricing table for supported models."""
    prices: Dict[str, ModelPricing]

    def get_pricing(self, model: str) -> ModelPricing:
        """Get pricing for a specific model.

        Args:
            model: Model identifier

        Returns:
            ModelPricing for the model

        Raises:
            ValueError: If model is not supported
        """
        if model not in self.prices:
            raise ValueError(f"Unsupported model: {model}")
        return self.prices[model]


PRICING_TABLE = PricingTable({
    "gpt-4": ModelPricing(
        input_cost_per_1k=Decimal("30.00"),
        output_cost_per_1k=Decimal("60.00"),
        context_window=8192
    ),
    "gpt-4o": ModelPricing(
        input_cost_per_1k=Decimal("2.50"),
        output_cost_per_1k=Decimal("10.00"),
        context_window=128000
    ),
    "gpt-4o-mini": ModelPricing(
        input_cost_per_1k=Decimal("0.15"),
        output_cost_per_1k=Decimal("0.60"),
        context_window=128000
    ),
    "gpt-3.5-turbo": ModelPricing(
        input_cost_per_1k=Decimal("1.50"),
        output_cost_per_1k=Decimal("2.00"),
        context_window=16385
    ),
})

# Per-call costs are kept to six decimal places
COST_QUANTUM = Decimal("0.000001")


def calculate_cost(model: str, input_tokens: int, output_tokens: int) -> Decimal:
    """Calculate the cost of one call with conservative rounding.

    Args:
        model: Model identifier
        input_tokens: Prompt tokens sent
        output_tokens: Completion tokens received

    Returns:
        Cost rounded UP to six decimal places

    Raises:
        ValueError: If model is not supported or token counts are negative
    """
    if input_tokens < 0 or output_tokens < 0:
        raise ValueError("token counts cannot be negative")

    pricing = PRICING_TABLE.get_pricing(model)

    input_cost = (Decimal(input_tokens) / Decimal("1000")) * pricing.input_cost_per_1k
    output_cost = (Decimal(output_tokens) / Decimal("1000")) * pricing.output_cost_per_1k

    return (input_cost + output_cost).quantize(COST_QUANTUM, rounding=ROUND_UP)


def context_window(model: str) -> int:
    """Context window size in tokens for ``model``."""
    return PRICING_TABLE.get_pricing(model).context_window
