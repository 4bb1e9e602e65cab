"""Pooling analysis domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

RecommendationTier = Literal["highly_recommended", "recommended", "optional"]


@dataclass(slots=True)
class PickupStop:
    order: int
    seller_id: str
    seller_name: str
    offset_minutes: int
    estimated_pickup_time: str


@dataclass(slots=True)
class SeparateDelivery:
    fee: float
    estimated_minutes: int
    estimated_time: str
    co2_emissions: float


@dataclass(slots=True)
class PooledDelivery:
    fee: float
    estimated_minutes: int
    estimated_time: str
    co2_emissions: float
    pickup_sequence: List[PickupStop]


@dataclass(slots=True)
class PoolingSavings:
    amount: float
    percentage: int
    time_saved: int
    co2_saved: float


@dataclass(slots=True)
class PoolingOpportunity:
    location: str
    seller_ids: List[str]
    seller_names: List[str]
    seller_count: int
    total_weight: float
    total_subtotal: float
    separate_delivery: SeparateDelivery
    pooled_delivery: PooledDelivery
    savings: PoolingSavings
    recommendation: RecommendationTier


@dataclass(slots=True)
class RouteOverlap:
    seller_a: str
    seller_b: str
    seller_a_id: str
    seller_b_id: str
    distance_km: float
    estimated_saving: float
    suggestion: str


@dataclass(slots=True)
class CodRestriction:
    allowed: bool
    reason: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass(slots=True)
class PoolingRecommendation:
    type: Literal["pooled", "split"]
    message: str
    savings: float
    co2_savings: float


@dataclass(slots=True)
class PoolingSummary:
    total_sellers: int
    poolable_sellers: int
    total_potential_savings: float
    total_co2_savings: float
    estimated_time_savings: int


@dataclass(slots=True)
class PoolingAnalysis:
    can_pool: bool
    pooling_opportunities: List[PoolingOpportunity]
    route_overlaps: List[RouteOverlap]
    cod_restriction: CodRestriction
    recommendation: PoolingRecommendation
    summary: PoolingSummary
    metadata: dict = field(default_factory=dict)
