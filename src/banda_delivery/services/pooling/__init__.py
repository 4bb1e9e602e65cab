"""Delivery pooling services."""

from .clustering import group_by_location, normalize_location, poolable_clusters
from .service import analyze_pooling, build_opportunity, cod_restriction, detect_route_overlaps

__all__ = [
    "analyze_pooling",
    "build_opportunity",
    "cod_restriction",
    "detect_route_overlaps",
    "group_by_location",
    "normalize_location",
    "poolable_clusters",
]
