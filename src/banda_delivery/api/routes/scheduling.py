"""Delivery scheduling endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.scheduling import (
    DaySlotsModel,
    DeliverySlotModel,
    EstimateResponse,
    LabelSlotsResponse,
    NextSlotRequest,
    NextSlotResponse,
    SlotValidationResponse,
    TimeSlotModel,
    ValidateSlotRequest,
)
from ...services.scheduling import IsoSlotPolicy, LabelSlotPolicy, delivery_time_estimate

router = APIRouter(prefix="/scheduling", tags=["scheduling"])


@router.get("/label-slots", response_model=LabelSlotsResponse)
def label_slots(
    start_hour: int = Query(8, ge=0, le=23),
    end_hour: int = Query(20, ge=1, le=24),
    interval_minutes: int = Query(60, ge=1, le=60),
) -> LabelSlotsResponse:
    if end_hour <= start_hour:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end_hour must be after start_hour")
    policy = LabelSlotPolicy()
    slots = policy.generate_time_slots(start_hour, end_hour, interval_minutes)
    next_slot = policy.get_next_available_slot(slots)
    return LabelSlotsResponse(
        slots=[TimeSlotModel.model_validate(slot) for slot in slots],
        next_available=TimeSlotModel.model_validate(next_slot) if next_slot else None,
    )


@router.post("/validate", response_model=SlotValidationResponse)
def validate_slot(payload: ValidateSlotRequest) -> SlotValidationResponse:
    verdict = IsoSlotPolicy().validate_delivery_slot(payload.start, payload.end)
    return SlotValidationResponse.model_validate(verdict)


@router.post("/next-slot", response_model=NextSlotResponse)
def next_slot(payload: NextSlotRequest) -> NextSlotResponse:
    valid = IsoSlotPolicy().filter_valid_slots([slot.to_domain() for slot in payload.slots])
    models = [DeliverySlotModel.model_validate(slot) for slot in valid]
    return NextSlotResponse(slot=models[0] if models else None, valid_slots=models)


@router.get("/hourly-slots", response_model=list[DaySlotsModel])
def hourly_slots(hours: int = Query(24, ge=1, le=24 * 14)) -> list[DaySlotsModel]:
    return [DaySlotsModel.model_validate(day) for day in IsoSlotPolicy().build_hourly_slots(hours=hours)]


@router.get("/estimate", response_model=EstimateResponse)
def estimate(
    distance_km: float = Query(..., ge=0),
    vehicle_type: Literal["boda", "van", "truck", "tractor", "pickup"] = "van",
) -> EstimateResponse:
    return EstimateResponse.model_validate(delivery_time_estimate(distance_km, vehicle_type))
