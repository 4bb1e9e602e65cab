"""Pydantic request/response models for delivery pooling endpoints."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import BuyerLocation, Coordinates, OrderItem, SellerFulfillmentGroup


class CoordinatesModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)


class OrderItemModel(BaseModel):
    product_id: str
    product_name: str
    quantity: float = Field(..., ge=0)


class SellerGroupModel(BaseModel):
    seller_id: str
    seller_name: str
    seller_location: str = Field(..., description="Free-text pickup location label.")
    seller_coordinates: Optional[CoordinatesModel] = None
    total_weight: float = Field(..., ge=0, description="Combined weight in kg.")
    subtotal: float = Field(..., ge=0)
    items: List[OrderItemModel] = Field(default_factory=list)

    def to_domain(self) -> SellerFulfillmentGroup:
        return SellerFulfillmentGroup(
            seller_id=self.seller_id,
            seller_name=self.seller_name,
            seller_location=self.seller_location,
            total_weight=self.total_weight,
            subtotal=self.subtotal,
            items=[
                OrderItem(product_id=item.product_id, product_name=item.product_name, quantity=item.quantity)
                for item in self.items
            ],
            coordinates=self.seller_coordinates.to_domain() if self.seller_coordinates else None,
        )


class BuyerLocationModel(BaseModel):
    city: str
    coordinates: Optional[CoordinatesModel] = None

    def to_domain(self) -> BuyerLocation:
        return BuyerLocation(
            city=self.city,
            coordinates=self.coordinates.to_domain() if self.coordinates else None,
        )


class PoolingRequest(BaseModel):
    seller_groups: List[SellerGroupModel]
    buyer_location: BuyerLocationModel
    payment_method: Literal["agripay", "mpesa", "card", "cod"]


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PickupStopModel(_FromAttributes):
    order: int
    seller_id: str
    seller_name: str
    offset_minutes: int
    estimated_pickup_time: str


class SeparateDeliveryModel(_FromAttributes):
    fee: float
    estimated_minutes: int
    estimated_time: str
    co2_emissions: float


class PooledDeliveryModel(SeparateDeliveryModel):
    pickup_sequence: List[PickupStopModel]


class PoolingSavingsModel(_FromAttributes):
    amount: float
    percentage: int
    time_saved: int
    co2_saved: float


class PoolingOpportunityModel(_FromAttributes):
    location: str
    seller_ids: List[str]
    seller_names: List[str]
    seller_count: int
    total_weight: float
    total_subtotal: float
    separate_delivery: SeparateDeliveryModel
    pooled_delivery: PooledDeliveryModel
    savings: PoolingSavingsModel
    recommendation: Literal["highly_recommended", "recommended", "optional"]


class RouteOverlapModel(_FromAttributes):
    seller_a: str
    seller_b: str
    seller_a_id: str
    seller_b_id: str
    distance_km: float
    estimated_saving: float
    suggestion: str


class CodRestrictionModel(_FromAttributes):
    allowed: bool
    reason: Optional[str] = None
    suggestion: Optional[str] = None


class PoolingRecommendationModel(_FromAttributes):
    type: Literal["pooled", "split"]
    message: str
    savings: float
    co2_savings: float


class PoolingSummaryModel(_FromAttributes):
    total_sellers: int
    poolable_sellers: int
    total_potential_savings: float
    total_co2_savings: float
    estimated_time_savings: int


class PoolingResponse(_FromAttributes):
    can_pool: bool
    pooling_opportunities: List[PoolingOpportunityModel]
    route_overlaps: List[RouteOverlapModel]
    cod_restriction: CodRestrictionModel
    recommendation: PoolingRecommendationModel
    summary: PoolingSummaryModel
    metadata: dict
