"""Provider, zone and fee request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class OperatingHoursModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: str
    end: str
    days: List[str]


class ProviderModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: Literal["boda", "van", "truck", "tractor", "pickup"]
    description: str
    estimated_time: str
    base_cost: float
    cost_per_km: float
    rating: float
    completed_deliveries: int
    specialties: List[str]
    max_weight: float
    max_distance: float
    available: bool
    banda_recommended: bool
    agri_pay_integrated: bool
    trade_guard_protected: bool
    service_areas: List[str]
    operating_hours: Optional[OperatingHoursModel] = None


class ZoneModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    name: str
    areas: List[str]
    base_delivery_fee: float
    free_delivery_threshold: float


class RecommendProviderRequest(BaseModel):
    order_weight: float = Field(..., ge=0, description="Order weight in kg.")
    distance_km: float = Field(..., ge=0)
    product_categories: List[str] = Field(default_factory=list)
    urgency: Literal["standard", "express", "scheduled"] = "standard"


class RecommendProviderResponse(BaseModel):
    provider: Optional[ProviderModel] = Field(
        default=None, description="Best match, or null when no provider qualifies."
    )
    alternatives: List[ProviderModel] = Field(default_factory=list)


class FeeQuoteRequest(BaseModel):
    provider_id: str
    distance_km: float = Field(..., ge=0)
    order_value: float = Field(..., ge=0)
    zone: str = Field(..., description="Zone key, e.g. ZONE_1.")
    urgency: Literal["standard", "express", "scheduled"] = "standard"
    order_weight: Optional[float] = Field(default=None, ge=0)
    product_categories: List[str] = Field(default_factory=list)


class FeeQuoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
