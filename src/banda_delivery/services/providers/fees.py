"""Delivery fee computation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...data.catalog import ProviderCatalog, ZoneCatalog, get_provider_catalog, get_zone_catalog
from ...models.domain import DeliveryProvider, DeliveryZone, Urgency
from .matcher import recommend_provider

BANDA_DISCOUNT_RATE = 0.10
EXPRESS_SURCHARGE_RATE = 0.30


@dataclass(slots=True)
class FeeBreakdown:
    base_fee: float
    distance_fee: float
    total_fee: float
    is_free_delivery: bool
    banda_discount: float


@dataclass(slots=True)
class FeeQuote:
    provider_id: str
    base_fee: float
    distance_fee: float
    express_surcharge: float
    banda_discount: float
    total_fee: float
    is_free_delivery: bool
    is_recommended: bool
    estimated_time: str
    zone: str


def compute_fee(
    provider: DeliveryProvider,
    distance_km: float,
    order_value: float,
    zone: DeliveryZone,
) -> FeeBreakdown:
    """Fee for ``provider`` over ``distance_km``.

    The Banda discount is reported even when free delivery zeroes the total.
    """

    base_fee = provider.base_cost
    distance_fee = distance_km * provider.cost_per_km
    before_discount = base_fee + distance_fee
    banda_discount = before_discount * BANDA_DISCOUNT_RATE if provider.banda_recommended else 0.0
    is_free = order_value >= zone.free_delivery_threshold

    return FeeBreakdown(
        base_fee=base_fee,
        distance_fee=distance_fee,
        total_fee=0.0 if is_free else before_discount - banda_discount,
        is_free_delivery=is_free,
        banda_discount=banda_discount,
    )


def quote_delivery_fee(
    provider_id: str,
    distance_km: float,
    order_value: float,
    zone_key: str,
    *,
    urgency: Urgency = "standard",
    order_weight: Optional[float] = None,
    product_categories: Sequence[str] = (),
    providers: Optional[ProviderCatalog] = None,
    zones: Optional[ZoneCatalog] = None,
) -> FeeQuote:
    """Checkout quote for a chosen provider, including the express surcharge.

    Raises ``UnknownProviderError``/``UnknownZoneError`` for unknown keys.
    """

    providers = providers if providers is not None else get_provider_catalog()
    zones = zones if zones is not None else get_zone_catalog()
    provider = providers.get(provider_id)
    zone = zones.get(zone_key)

    breakdown = compute_fee(provider, distance_km, order_value, zone)
    express_surcharge = (
        (breakdown.base_fee + breakdown.distance_fee) * EXPRESS_SURCHARGE_RATE if urgency == "express" else 0.0
    )
    total = 0.0 if breakdown.is_free_delivery else breakdown.total_fee + express_surcharge

    recommended = recommend_provider(
        order_weight if order_weight is not None else 0.0,
        distance_km,
        product_categories,
        urgency,
        catalog=providers,
    )

    return FeeQuote(
        provider_id=provider.id,
        base_fee=breakdown.base_fee,
        distance_fee=breakdown.distance_fee,
        express_surcharge=express_surcharge,
        banda_discount=breakdown.banda_discount,
        total_fee=total,
        is_free_delivery=breakdown.is_free_delivery,
        is_recommended=recommended is not None and recommended.id == provider.id,
        estimated_time=provider.estimated_time,
        zone=zone.name,
    )
