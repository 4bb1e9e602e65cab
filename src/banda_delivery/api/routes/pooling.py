"""Delivery pooling endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.pooling import PoolingRequest, PoolingResponse
from ...services.pooling.service import analyze_pooling

router = APIRouter(prefix="/delivery", tags=["pooling"])


@router.post("/pooling", response_model=PoolingResponse, status_code=status.HTTP_200_OK)
def suggest_pooling(payload: PoolingRequest) -> PoolingResponse:
    try:
        analysis = analyze_pooling(
            [group.to_domain() for group in payload.seller_groups],
            payload.buyer_location.to_domain(),
            payload.payment_method,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error analyzing delivery pooling: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze delivery pooling: {str(exc)}",
        ) from exc
    return PoolingResponse.model_validate(analysis)
