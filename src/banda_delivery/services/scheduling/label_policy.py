"""Same-day slot policy working on HH:MM clock labels."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import BusinessHours, TimeSlot
from .clock import js_weekday, local_now, local_timezone, parse_clock
from .models import SlotValidation


def default_business_hours() -> BusinessHours:
    return BusinessHours(
        open=settings.business_open,
        close=settings.business_close,
        days_of_week=tuple(settings.business_days),
    )


def _to_minutes(value: str) -> Optional[int]:
    parsed = parse_clock(value)
    if parsed is None:
        return None
    return parsed[0] * 60 + parsed[1]


def _format_clock(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


class LabelSlotPolicy:
    """Availability is ``not past and within business hours and on a business day``.

    Past-ness compares today's instant of the slot start against now, at
    minute granularity, without any lead-time buffer.
    """

    def __init__(self, business_hours: Optional[BusinessHours] = None, *, tz: Optional[tzinfo] = None):
        self.business_hours = business_hours or default_business_hours()
        self.tz = tz or local_timezone()

    def is_time_in_past(self, time_string: str, now: Optional[datetime] = None) -> bool:
        """Unparsable labels are never in the past; business hours reject them."""

        parsed = parse_clock(time_string)
        if parsed is None:
            return False
        current = local_now(now, self.tz)
        hours, minutes = parsed
        slot_time = current.replace(hour=hours, minute=minutes, second=0, microsecond=0)
        return slot_time < current

    def is_within_business_hours(self, time_string: str) -> bool:
        value = _to_minutes(time_string)
        opens = _to_minutes(self.business_hours.open)
        closes = _to_minutes(self.business_hours.close)
        if value is None or opens is None or closes is None:
            return False
        return opens <= value <= closes

    def is_business_day(self, now: Optional[datetime] = None) -> bool:
        return js_weekday(local_now(now, self.tz)) in self.business_hours.days_of_week

    def is_available(self, start: str, now: Optional[datetime] = None) -> bool:
        return (
            not self.is_time_in_past(start, now)
            and self.is_within_business_hours(start)
            and self.is_business_day(now)
        )

    def generate_time_slots(
        self,
        start_hour: int = 8,
        end_hour: int = 20,
        interval_minutes: int = 60,
        now: Optional[datetime] = None,
    ) -> list[TimeSlot]:
        if interval_minutes < 1:
            raise ValueError("interval_minutes must be >= 1")

        current = local_now(now, self.tz)
        slots: list[TimeSlot] = []
        for hour in range(start_hour, end_hour):
            for minute in range(0, 60, interval_minutes):
                start = _format_clock(hour * 60 + minute)
                # the last slot of the day ends on "24:00" rather than wrapping
                end = _format_clock(hour * 60 + minute + interval_minutes)
                is_past = self.is_time_in_past(start, current)
                slots.append(
                    TimeSlot(
                        id=f"slot-{hour}-{minute}",
                        label=f"{start} - {end}",
                        start=start,
                        end=end,
                        available=self.is_available(start, current),
                        is_past=is_past,
                    )
                )
        return slots

    @staticmethod
    def filter_available_slots(slots: Sequence[TimeSlot]) -> list[TimeSlot]:
        return [slot for slot in slots if slot.available]

    @staticmethod
    def get_next_available_slot(slots: Sequence[TimeSlot]) -> Optional[TimeSlot]:
        return next((slot for slot in slots if slot.available), None)

    def validate_time_slot(self, slot: TimeSlot, now: Optional[datetime] = None) -> SlotValidation:
        if slot.is_past or self.is_time_in_past(slot.start, now):
            return SlotValidation(False, "Time slot is in the past")
        if not self.is_within_business_hours(slot.start):
            return SlotValidation(False, "Time slot is outside business hours")
        if not self.is_business_day(now):
            return SlotValidation(False, "Delivery not available on this day")
        if not slot.available:
            return SlotValidation(False, "Time slot is not available")
        return SlotValidation(True)
