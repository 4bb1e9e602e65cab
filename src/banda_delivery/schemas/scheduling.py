"""Scheduling request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import DeliverySlot


class TimeSlotModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    start: str
    end: str
    available: bool
    is_past: bool


class DeliverySlotModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str = ""
    start: str = Field(..., description="ISO-8601 start datetime.")
    end: str = Field(..., description="ISO-8601 end datetime.")

    def to_domain(self) -> DeliverySlot:
        return DeliverySlot(id=self.id, label=self.label, start=self.start, end=self.end)


class LabelSlotsResponse(BaseModel):
    slots: List[TimeSlotModel]
    next_available: Optional[TimeSlotModel] = None


class ValidateSlotRequest(BaseModel):
    start: str
    end: str


class SlotValidationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    reason: Optional[str] = None


class NextSlotRequest(BaseModel):
    slots: List[DeliverySlotModel]


class NextSlotResponse(BaseModel):
    slot: Optional[DeliverySlotModel] = None
    valid_slots: List[DeliverySlotModel]


class DaySlotsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date_key: str
    date_label: str
    slots: List[DeliverySlotModel]


class EstimateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min_minutes: int
    max_minutes: int
    label: str

