"""Domain models for checkout delivery planning."""

from dataclasses import dataclass, field
from typing import Literal, Optional

VehicleType = Literal["boda", "van", "truck", "tractor", "pickup"]
PaymentMethod = Literal["agripay", "mpesa", "card", "cod"]
Urgency = Literal["standard", "express", "scheduled"]


@dataclass(slots=True, frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(slots=True)
class OrderItem:
    product_id: str
    product_name: str
    quantity: float


@dataclass(slots=True)
class SellerFulfillmentGroup:
    """The share of a checkout fulfilled by a single seller."""

    seller_id: str
    seller_name: str
    seller_location: str
    total_weight: float
    subtotal: float
    items: list[OrderItem] = field(default_factory=list)
    coordinates: Optional[Coordinates] = None


@dataclass(slots=True)
class BuyerLocation:
    city: str
    coordinates: Optional[Coordinates] = None


@dataclass(slots=True, frozen=True)
class OperatingHours:
    start: str
    end: str
    days: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class DeliveryProvider:
    """A transport provider and its capability attributes."""

    id: str
    name: str
    type: VehicleType
    base_cost: float
    cost_per_km: float
    rating: float
    max_weight: float
    max_distance: float
    specialties: tuple[str, ...] = ()
    available: bool = True
    banda_recommended: bool = False
    service_areas: tuple[str, ...] = ()
    operating_hours: Optional[OperatingHours] = None
    description: str = ""
    estimated_time: str = ""
    completed_deliveries: int = 0
    agri_pay_integrated: bool = False
    trade_guard_protected: bool = False


@dataclass(slots=True, frozen=True)
class DeliveryZone:
    """Geographic pricing tier."""

    key: str
    name: str
    areas: tuple[str, ...]
    base_delivery_fee: float
    free_delivery_threshold: float


@dataclass(slots=True, frozen=True)
class BusinessHours:
    open: str = "08:00"
    close: str = "20:00"
    days_of_week: tuple[int, ...] = (1, 2, 3, 4, 5, 6)


@dataclass(slots=True)
class TimeSlot:
    """Same-day slot expressed as HH:MM clock labels."""

    id: str
    label: str
    start: str
    end: str
    available: bool
    is_past: bool


@dataclass(slots=True)
class DeliverySlot:
    """Slot with absolute ISO-8601 start and end."""

    id: str
    label: str
    start: str
    end: str
