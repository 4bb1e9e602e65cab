"""Delivery pooling, provider matching, fee and scheduling engine for Banda checkout."""

__version__ = "1.0.0"
