"""Provider matching, zone and fee quote endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.catalog import get_provider_catalog, get_zone_catalog
from ...schemas.providers import (
    FeeQuoteRequest,
    FeeQuoteResponse,
    ProviderModel,
    RecommendProviderRequest,
    RecommendProviderResponse,
    ZoneModel,
)
from ...services.providers.fees import quote_delivery_fee
from ...services.providers.matcher import suitable_providers

router = APIRouter(tags=["providers"])


@router.get("/providers", response_model=list[ProviderModel])
def list_providers() -> list[ProviderModel]:
    return [ProviderModel.model_validate(provider) for provider in get_provider_catalog()]


@router.get("/zones", response_model=list[ZoneModel])
def list_zones() -> list[ZoneModel]:
    return [ZoneModel.model_validate(zone) for zone in get_zone_catalog()]


@router.post("/providers/recommend", response_model=RecommendProviderResponse)
def recommend(payload: RecommendProviderRequest) -> RecommendProviderResponse:
    """Best provider for the order; ``provider`` is null when nothing qualifies."""
    ranked = suitable_providers(
        payload.order_weight,
        payload.distance_km,
        payload.product_categories,
        payload.urgency,
    )
    models = [ProviderModel.model_validate(provider) for provider in ranked]
    return RecommendProviderResponse(
        provider=models[0] if models else None,
        alternatives=models[1:],
    )


@router.post("/providers/fee-quote", response_model=FeeQuoteResponse)
def fee_quote(payload: FeeQuoteRequest) -> FeeQuoteResponse:
    try:
        quote = quote_delivery_fee(
            payload.provider_id,
            payload.distance_km,
            payload.order_value,
            payload.zone,
            urgency=payload.urgency,
            order_weight=payload.order_weight,
            product_categories=payload.product_categories,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.args[0]) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error computing delivery fee: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute delivery fee: {str(exc)}",
        ) from exc
    return FeeQuoteResponse.model_validate(quote)
