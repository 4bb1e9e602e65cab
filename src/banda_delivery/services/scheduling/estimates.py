"""Delivery duration estimates and earliest-delivery rounding."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional

from ...models.domain import VehicleType
from .clock import local_now
from .models import DeliveryTimeEstimate

AVERAGE_SPEED_KMH: dict[str, float] = {
    "boda": 35,
    "van": 40,
    "truck": 35,
    "pickup": 40,
}
DEFAULT_SPEED_KMH = 40
PREPARATION_MINUTES = 15
BUFFER_MINUTES = 10


def delivery_time_estimate(distance_km: float, vehicle_type: VehicleType = "van") -> DeliveryTimeEstimate:
    speed = AVERAGE_SPEED_KMH.get(vehicle_type, DEFAULT_SPEED_KMH)
    travel_minutes = math.ceil(distance_km / speed * 60)

    min_minutes = travel_minutes + PREPARATION_MINUTES
    max_minutes = travel_minutes + PREPARATION_MINUTES + BUFFER_MINUTES

    if max_minutes < 60:
        label = f"{min_minutes}-{max_minutes} mins"
    else:
        min_hours = min_minutes // 60
        max_hours = math.ceil(max_minutes / 60)
        if min_hours == max_hours:
            label = f"{min_hours} hour{'s' if min_hours > 1 else ''}"
        else:
            label = f"{min_hours}-{max_hours} hours"

    return DeliveryTimeEstimate(min_minutes=min_minutes, max_minutes=max_minutes, label=label)


def earliest_delivery_time(now: Optional[datetime] = None, preparation_minutes: int = 30) -> datetime:
    """Now plus preparation time, rounded up to the next quarter hour."""

    earliest = local_now(now) + timedelta(minutes=preparation_minutes)
    quarter = math.ceil(earliest.minute / 15) * 15
    return earliest.replace(minute=0, second=0, microsecond=0) + timedelta(minutes=quarter)
