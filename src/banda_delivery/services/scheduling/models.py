"""Scheduling result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...models.domain import DeliverySlot


@dataclass(slots=True)
class SlotValidation:
    is_valid: bool
    reason: Optional[str] = None


@dataclass(slots=True)
class DaySlots:
    date_key: str
    date_label: str
    slots: List[DeliverySlot]


@dataclass(slots=True)
class DeliveryTimeEstimate:
    min_minutes: int
    max_minutes: int
    label: str
