"""Provider matching and fee services."""

from .fees import FeeBreakdown, FeeQuote, compute_fee, quote_delivery_fee
from .matcher import recommend_provider, suitable_providers

__all__ = [
    "FeeBreakdown",
    "FeeQuote",
    "compute_fee",
    "quote_delivery_fee",
    "recommend_provider",
    "suitable_providers",
]
