"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...data.catalog import get_provider_catalog, get_zone_catalog

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/catalog", status_code=status.HTTP_200_OK)
def health_catalog() -> dict:
    """Report the size of the loaded provider and zone catalogues."""
    return {
        "providers": len(get_provider_catalog()),
        "zones": len(get_zone_catalog()),
    }
