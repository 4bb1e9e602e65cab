"""Delivery time slot policies and estimates."""

from .estimates import delivery_time_estimate, earliest_delivery_time
from .iso_policy import IsoSlotPolicy
from .label_policy import LabelSlotPolicy
from .models import DaySlots, DeliveryTimeEstimate, SlotValidation

__all__ = [
    "DaySlots",
    "DeliveryTimeEstimate",
    "IsoSlotPolicy",
    "LabelSlotPolicy",
    "SlotValidation",
    "delivery_time_estimate",
    "earliest_delivery_time",
]
