"""Route group exports."""

from . import health, pooling, providers, scheduling

__all__ = ["health", "pooling", "providers", "scheduling"]
