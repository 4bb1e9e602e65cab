"""Pooled-versus-separate delivery analysis for multi-seller checkouts."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import BuyerLocation, PaymentMethod, SellerFulfillmentGroup
from ..geospatial import distance_between
from .clustering import poolable_clusters
from .models import (
    CodRestriction,
    PickupStop,
    PooledDelivery,
    PoolingAnalysis,
    PoolingOpportunity,
    PoolingRecommendation,
    PoolingSavings,
    PoolingSummary,
    RecommendationTier,
    RouteOverlap,
    SeparateDelivery,
)

HEAVY_LOAD_KG = 50
MEDIUM_LOAD_KG = 20
POOLED_FEE_HEAVY = 350
POOLED_FEE_MEDIUM = 250
POOLED_FEE_LIGHT = 180

SEPARATE_MINUTES_PER_SELLER = 90
POOLED_BASE_MINUTES = 60
PICKUP_INTERVAL_MINUTES = 15

CO2_PER_SEPARATE_RUN_KG = 2.5
CO2_POOLED_RUN_KG = 3.0

COD_REASON = "COD orders are delivered separately per seller for payment verification"
COD_SUGGESTION = "Switch to prepaid (M-Pesa/Card) to enable delivery pooling and save money"
SPLIT_MESSAGE = "Sellers are in different locations. Separate deliveries recommended."


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pooled_delivery_fee(total_weight: float) -> int:
    """Fee for a single pooled run, tiered by combined weight."""
    if total_weight > HEAVY_LOAD_KG:
        return POOLED_FEE_HEAVY
    if total_weight > MEDIUM_LOAD_KG:
        return POOLED_FEE_MEDIUM
    return POOLED_FEE_LIGHT


def recommendation_tier(savings: float) -> RecommendationTier:
    if savings > 100:
        return "highly_recommended"
    if savings > 50:
        return "recommended"
    return "optional"


def build_opportunity(
    location: str,
    sellers: Sequence[SellerFulfillmentGroup],
    *,
    fee_per_seller: Optional[int] = None,
) -> PoolingOpportunity:
    """Compute pooled-versus-separate economics for one location cluster."""

    fee_per_seller = settings.separate_fee_per_seller if fee_per_seller is None else fee_per_seller
    count = len(sellers)
    total_weight = sum(seller.total_weight for seller in sellers)
    total_subtotal = sum(seller.subtotal for seller in sellers)

    separate_fee = count * fee_per_seller
    pooled_fee = pooled_delivery_fee(total_weight)
    savings = separate_fee - pooled_fee
    savings_percentage = _round_half_up(savings / separate_fee * 100) if separate_fee else 0

    separate_minutes = count * SEPARATE_MINUTES_PER_SELLER
    pooled_minutes = POOLED_BASE_MINUTES + count * PICKUP_INTERVAL_MINUTES

    co2_separate = count * CO2_PER_SEPARATE_RUN_KG
    co2_pooled = CO2_POOLED_RUN_KG

    pickup_sequence = [
        PickupStop(
            order=index + 1,
            seller_id=seller.seller_id,
            seller_name=seller.seller_name,
            offset_minutes=index * PICKUP_INTERVAL_MINUTES,
            estimated_pickup_time=f"+{index * PICKUP_INTERVAL_MINUTES} mins",
        )
        for index, seller in enumerate(sellers)
    ]

    return PoolingOpportunity(
        location=location,
        seller_ids=[seller.seller_id for seller in sellers],
        seller_names=[seller.seller_name for seller in sellers],
        seller_count=count,
        total_weight=total_weight,
        total_subtotal=total_subtotal,
        separate_delivery=SeparateDelivery(
            fee=separate_fee,
            estimated_minutes=separate_minutes,
            estimated_time=f"{separate_minutes} mins",
            co2_emissions=co2_separate,
        ),
        pooled_delivery=PooledDelivery(
            fee=pooled_fee,
            estimated_minutes=pooled_minutes,
            estimated_time=f"{pooled_minutes} mins",
            co2_emissions=co2_pooled,
            pickup_sequence=pickup_sequence,
        ),
        savings=PoolingSavings(
            amount=savings,
            percentage=savings_percentage,
            time_saved=separate_minutes - pooled_minutes,
            co2_saved=round(co2_separate - co2_pooled, 1),
        ),
        recommendation=recommendation_tier(savings),
    )


def detect_route_overlaps(
    sellers: Sequence[SellerFulfillmentGroup],
    *,
    radius_km: Optional[float] = None,
    saving: Optional[int] = None,
) -> list[RouteOverlap]:
    """Advise on seller pairs whose pickup points sit within ``radius_km``.

    Runs over every unordered pair with coordinates on both sides, regardless
    of whether the pair already shares a location cluster.
    """

    radius_km = settings.route_overlap_radius_km if radius_km is None else radius_km
    saving = settings.route_overlap_saving if saving is None else saving

    overlaps: list[RouteOverlap] = []
    for i, first in enumerate(sellers):
        if first.coordinates is None:
            continue
        for second in sellers[i + 1:]:
            if second.coordinates is None:
                continue
            distance = distance_between(first.coordinates, second.coordinates)
            if distance >= radius_km:
                continue
            overlaps.append(
                RouteOverlap(
                    seller_a=first.seller_name,
                    seller_b=second.seller_name,
                    seller_a_id=first.seller_id,
                    seller_b_id=second.seller_id,
                    distance_km=round(distance, 1),
                    estimated_saving=saving,
                    suggestion=(
                        f"{first.seller_name} and {second.seller_name} are only {distance:.1f}km apart. "
                        f"Pool delivery to save KSh {saving}."
                    ),
                )
            )
    return overlaps


def cod_restriction(payment_method: PaymentMethod, opportunities: Sequence[PoolingOpportunity]) -> CodRestriction:
    if payment_method == "cod" and opportunities:
        return CodRestriction(allowed=False, reason=COD_REASON, suggestion=COD_SUGGESTION)
    return CodRestriction(allowed=True)


def _top_level_recommendation(opportunities: Sequence[PoolingOpportunity]) -> PoolingRecommendation:
    if not opportunities:
        return PoolingRecommendation(type="split", message=SPLIT_MESSAGE, savings=0, co2_savings=0.0)

    total_savings = sum(opportunity.savings.amount for opportunity in opportunities)
    total_co2 = sum(opportunity.savings.co2_saved for opportunity in opportunities)
    first = opportunities[0]
    return PoolingRecommendation(
        type="pooled",
        message=(
            f"Pool deliveries from {first.seller_count} sellers in {first.location} "
            f"to save KSh {total_savings} and {total_co2:.1f}kg CO₂"
        ),
        savings=total_savings,
        co2_savings=total_co2,
    )


def analyze_pooling(
    seller_groups: Sequence[SellerFulfillmentGroup],
    buyer_location: Optional[BuyerLocation],
    payment_method: PaymentMethod,
) -> PoolingAnalysis:
    """Analyse a checkout's seller groups for delivery pooling.

    Never raises for empty or disjoint input; such checkouts simply come back
    with a ``split`` recommendation and no opportunities.
    """

    logging.info(f"Analyzing delivery pooling opportunities for {len(seller_groups)} sellers")

    opportunities = [
        build_opportunity(location, members)
        for location, members in poolable_clusters(seller_groups).items()
    ]
    overlaps = detect_route_overlaps(seller_groups)
    recommendation = _top_level_recommendation(opportunities)

    summary = PoolingSummary(
        total_sellers=len(seller_groups),
        poolable_sellers=sum(opportunity.seller_count for opportunity in opportunities),
        total_potential_savings=recommendation.savings,
        total_co2_savings=round(recommendation.co2_savings, 1),
        estimated_time_savings=sum(opportunity.savings.time_saved for opportunity in opportunities),
    )

    logging.info(
        f"Found {len(opportunities)} pooling opportunities. Potential savings: KSh {summary.total_potential_savings}"
    )

    return PoolingAnalysis(
        can_pool=bool(opportunities),
        pooling_opportunities=opportunities,
        route_overlaps=overlaps,
        cod_restriction=cod_restriction(payment_method, opportunities),
        recommendation=recommendation,
        summary=summary,
        metadata={
            "buyer_city": buyer_location.city if buyer_location else None,
            "payment_method": payment_method,
        },
    )
