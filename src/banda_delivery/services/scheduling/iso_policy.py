"""Multi-day slot policy working on absolute ISO-8601 datetimes."""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import DeliverySlot
from .clock import local_now, local_timezone, parse_iso_datetime
from .models import DaySlots, SlotValidation

INVALID_FORMAT = "Invalid time slot format"


def _format_12h(moment: datetime) -> str:
    period = "PM" if moment.hour >= 12 else "AM"
    display_hour = moment.hour % 12 or 12
    return f"{display_hour}:{moment.minute:02d} {period}"


class IsoSlotPolicy:
    """A slot is valid when its start is at least ``buffer_minutes`` ahead of now,
    begins within delivery hours, and is no more than ``max_days_ahead`` away.

    Checks run in that order and the first failure supplies the reason.
    """

    def __init__(
        self,
        *,
        buffer_minutes: Optional[int] = None,
        start_hour: Optional[int] = None,
        end_hour: Optional[int] = None,
        max_days_ahead: Optional[int] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.buffer_minutes = settings.slot_buffer_minutes if buffer_minutes is None else buffer_minutes
        self.start_hour = settings.iso_business_start_hour if start_hour is None else start_hour
        self.end_hour = settings.iso_business_end_hour if end_hour is None else end_hour
        self.max_days_ahead = settings.max_days_ahead if max_days_ahead is None else max_days_ahead
        self.tz = tz or local_timezone()

    def validate_delivery_slot(self, start: str, end: str, now: Optional[datetime] = None) -> SlotValidation:
        slot_start = parse_iso_datetime(start, self.tz)
        slot_end = parse_iso_datetime(end, self.tz)
        if slot_start is None or slot_end is None:
            return SlotValidation(False, INVALID_FORMAT)

        current = local_now(now, self.tz)
        if slot_start < current + timedelta(minutes=self.buffer_minutes):
            return SlotValidation(
                False,
                "This time slot has already passed. "
                f"Please select a slot at least {self.buffer_minutes} minutes from now",
            )

        if slot_start.hour < self.start_hour or slot_start.hour >= self.end_hour:
            return SlotValidation(
                False,
                f"Deliveries are only available between {self.start_hour}:00 and {self.end_hour}:00",
            )

        if slot_start > current + timedelta(days=self.max_days_ahead):
            return SlotValidation(
                False,
                f"Cannot schedule deliveries more than {self.max_days_ahead} days in advance",
            )

        return SlotValidation(True)

    def validate(self, slot: DeliverySlot, now: Optional[datetime] = None) -> SlotValidation:
        return self.validate_delivery_slot(slot.start, slot.end, now)

    def filter_valid_slots(self, slots: Sequence[DeliverySlot], now: Optional[datetime] = None) -> list[DeliverySlot]:
        """Valid slots ordered by start time, earliest first."""

        current = local_now(now, self.tz)
        valid = [slot for slot in slots if self.validate(slot, current).is_valid]
        return sorted(valid, key=lambda slot: parse_iso_datetime(slot.start, self.tz))

    def get_next_available_delivery_slot(
        self, slots: Sequence[DeliverySlot], now: Optional[datetime] = None
    ) -> Optional[DeliverySlot]:
        valid = self.filter_valid_slots(slots, now)
        return valid[0] if valid else None

    def is_slot_available_today(self, slot: DeliverySlot, now: Optional[datetime] = None) -> bool:
        slot_start = parse_iso_datetime(slot.start, self.tz)
        if slot_start is None:
            return False
        return slot_start.date() == local_now(now, self.tz).date()

    def format_slot_time(self, slot: DeliverySlot) -> str:
        start = parse_iso_datetime(slot.start, self.tz)
        end = parse_iso_datetime(slot.end, self.tz)
        if start is None or end is None:
            return slot.label
        return f"{_format_12h(start)} - {_format_12h(end)}"

    def build_hourly_slots(self, now: Optional[datetime] = None, hours: int = 24) -> list[DaySlots]:
        """Consecutive one-hour slots grouped by local date.

        The first slot starts at the next full hour, or the one after when less
        than half an hour remains before it.
        """

        current = local_now(now, self.tz)
        first_hour = current.hour + 1 if current.minute < 30 else current.hour + 2
        midnight = current.replace(hour=0, minute=0, second=0, microsecond=0)
        today = current.date()

        days: list[DaySlots] = []
        for offset in range(hours):
            slot_start = midnight + timedelta(hours=first_hour + offset)
            slot_end = slot_start + timedelta(hours=1)
            date_key = slot_start.date().isoformat()

            day_delta = (slot_start.date() - today).days
            if day_delta == 0:
                date_label = "Today"
            elif day_delta == 1:
                date_label = "Tomorrow"
            else:
                date_label = f"{slot_start:%a}, {slot_start:%b} {slot_start.day}"

            slot = DeliverySlot(
                id=f"{date_key}-{slot_start.hour}",
                label=f"{_format_12h(slot_start)} - {_format_12h(slot_end)}",
                start=slot_start.isoformat(),
                end=slot_end.isoformat(),
            )
            if days and days[-1].date_key == date_key:
                days[-1].slots.append(slot)
            else:
                days.append(DaySlots(date_key=date_key, date_label=date_label, slots=[slot]))
        return days
