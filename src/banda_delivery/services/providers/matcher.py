"""Select the best delivery provider for an order."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ...data.catalog import ProviderCatalog, get_provider_catalog
from ...models.domain import DeliveryProvider, Urgency

COLD_CHAIN_CATEGORIES = frozenset({"dairy", "meat", "livestock"})
EXPRESS_VEHICLE_TYPES = frozenset({"boda", "van"})


def needs_cold_chain(product_categories: Iterable[str]) -> bool:
    return any(category.lower() in COLD_CHAIN_CATEGORIES for category in product_categories)


def _has_cold_storage(provider: DeliveryProvider) -> bool:
    return any("cold" in specialty.lower() for specialty in provider.specialties)


def _rejection_reason(
    provider: DeliveryProvider,
    *,
    order_weight: float,
    distance_km: float,
    cold_chain: bool,
    urgency: Urgency,
) -> Optional[str]:
    if not provider.available:
        return "unavailable"
    if order_weight > provider.max_weight:
        return f"weight {order_weight}kg exceeds max {provider.max_weight}kg"
    if distance_km > provider.max_distance:
        return f"distance {distance_km}km exceeds max {provider.max_distance}km"
    # Refrigerated capacity is kept for perishables.
    if not cold_chain and _has_cold_storage(provider):
        return "cold-chain provider reserved for perishables"
    if urgency == "express" and not (provider.type in EXPRESS_VEHICLE_TYPES or provider.banda_recommended):
        return f"{provider.type} not eligible for express delivery"
    return None


def _ranking_key(provider: DeliveryProvider) -> tuple:
    return (not provider.banda_recommended, -provider.rating, provider.base_cost)


def suitable_providers(
    order_weight: float,
    distance_km: float,
    product_categories: Sequence[str],
    urgency: Urgency,
    *,
    catalog: Optional[ProviderCatalog] = None,
) -> list[DeliveryProvider]:
    """Return every provider passing the hard constraints, best first.

    Ordering: Banda-recommended first, then higher rating, then lower base cost.
    The sort is stable so catalogue order breaks remaining ties.
    """

    catalog = catalog if catalog is not None else get_provider_catalog()
    cold_chain = needs_cold_chain(product_categories)

    survivors: list[DeliveryProvider] = []
    for provider in catalog:
        reason = _rejection_reason(
            provider,
            order_weight=order_weight,
            distance_km=distance_km,
            cold_chain=cold_chain,
            urgency=urgency,
        )
        if reason:
            logging.debug(f"Provider {provider.id} rejected: {reason}")
            continue
        survivors.append(provider)

    return sorted(survivors, key=_ranking_key)


def recommend_provider(
    order_weight: float,
    distance_km: float,
    product_categories: Sequence[str],
    urgency: Urgency = "standard",
    *,
    catalog: Optional[ProviderCatalog] = None,
) -> Optional[DeliveryProvider]:
    """Best provider for the order, or ``None`` when nothing qualifies."""

    ranked = suitable_providers(order_weight, distance_km, product_categories, urgency, catalog=catalog)
    if not ranked:
        logging.info(
            f"No provider matches weight={order_weight}kg distance={distance_km}km urgency={urgency}"
        )
        return None
    return ranked[0]
