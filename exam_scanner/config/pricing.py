"""
Model Pricing Configuration.

Pricing data for all supported providers and models.
Prices are per million tokens (input and output).
"""

# Pricing per million tokens (USD)
PRICING_PER_MILLION: dict[str, dict[str, dict[str, float]]] = {
    "google": {
        "gemini-1.5-flash": {"input": 0.075, "output": 0.30},
        "gemini-2.5-flash": {"input": 0.30, "output": 2.50},
    },
    "anthropic": {
        "claude-sonnet-4-5-20250929": {"input": 3.00, "output": 15.00},
        "claude-haiku-4-5-20251001": {"input": 0.80, "output": 4.00},
    },
}


def calculate_cost(
    provider: str,
    model: str,
    input_tokens: int,
    output_tokens: int,
) -> float:
    """
    Calculate cost in USD based on token usage.

    Args:
        provider: Provider name (e.g., "google", "anthropic")
        model: Model identifier (e.g., "gemini-1.5-flash")
        input_tokens: Number of input tokens
        output_tokens: Number of output tokens

    Returns:
        Cost in USD. Returns 0.0 if provider/model not found.
    """
    pricing = get_pricing(provider, model)
    if not pricing:
        return 0.0

    input_cost = (input_tokens / 1_000_000) * pricing["input"]
    output_cost = (output_tokens / 1_000_000) * pricing["output"]
    return input_cost + output_cost


def get_pricing(provider: str, model: str) -> dict[str, float] | None:
    """Get per-million-token pricing for a provider/model, or None if unknown."""
    return PRICING_PER_MILLION.get(provider, {}).get(model)
