"""Read-only provider and zone catalogues, builtin or loaded from a JSON file."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..config import settings
from ..models.domain import DeliveryProvider, DeliveryZone, OperatingHours

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
ALL_DAYS = WEEKDAYS + ("Sunday",)


class UnknownProviderError(LookupError):
    pass


class UnknownZoneError(LookupError):
    pass


class ProviderCatalog:
    """Immutable, ordered collection of delivery providers."""

    def __init__(self, providers: Iterable[DeliveryProvider]):
        self._providers = tuple(providers)
        self._by_id = MappingProxyType({provider.id: provider for provider in self._providers})

    def __iter__(self) -> Iterator[DeliveryProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def get(self, provider_id: str) -> DeliveryProvider:
        try:
            return self._by_id[provider_id]
        except KeyError:
            raise UnknownProviderError(f"Invalid provider ID '{provider_id}'") from None

    def available(self) -> tuple[DeliveryProvider, ...]:
        return tuple(provider for provider in self._providers if provider.available)


class ZoneCatalog:
    """Immutable mapping of zone keys (e.g. ``ZONE_1``) to pricing tiers."""

    def __init__(self, zones: Iterable[DeliveryZone]):
        self._zones: Mapping[str, DeliveryZone] = MappingProxyType({zone.key: zone for zone in zones})

    def __iter__(self) -> Iterator[DeliveryZone]:
        return iter(self._zones.values())

    def __len__(self) -> int:
        return len(self._zones)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._zones)

    def get(self, key: str) -> DeliveryZone:
        try:
            return self._zones[key]
        except KeyError:
            raise UnknownZoneError(f"Unknown delivery zone '{key}'") from None

    def zone_for_area(self, area: str) -> Optional[DeliveryZone]:
        wanted = area.strip().lower()
        for zone in self._zones.values():
            if any(candidate.lower() == wanted for candidate in zone.areas):
                return zone
        return None


DEFAULT_PROVIDERS: tuple[DeliveryProvider, ...] = (
    DeliveryProvider(
        id="bdp-001",
        name="Banda Express Boda",
        type="boda",
        description="Fast motorcycle delivery for small agricultural products",
        estimated_time="30-45 mins",
        base_cost=120,
        cost_per_km=15,
        rating=4.9,
        completed_deliveries=2850,
        specialties=("Small packages", "Express delivery", "Seeds", "Fertilizers"),
        max_weight=25,
        max_distance=15,
        available=True,
        banda_recommended=True,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Kiambu", "Machakos"),
        operating_hours=OperatingHours(start="06:00", end="20:00", days=WEEKDAYS),
    ),
    DeliveryProvider(
        id="bdp-002",
        name="Banda Probox Fleet",
        type="van",
        description="Reliable van service for medium agricultural loads",
        estimated_time="1-2 hours",
        base_cost=250,
        cost_per_km=25,
        rating=4.7,
        completed_deliveries=1890,
        specialties=("Fragile produce", "Medium loads", "Dairy products", "Fresh vegetables"),
        max_weight=800,
        max_distance=50,
        available=True,
        banda_recommended=True,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Thika"),
        operating_hours=OperatingHours(start="05:00", end="21:00", days=ALL_DAYS),
    ),
    DeliveryProvider(
        id="bdp-003",
        name="Banda Hiace Cargo",
        type="van",
        description="Large van for bulk agricultural deliveries",
        estimated_time="2-3 hours",
        base_cost=400,
        cost_per_km=35,
        rating=4.8,
        completed_deliveries=1250,
        specialties=("Bulk orders", "Long distance", "Grain transport", "Farm equipment"),
        max_weight=1500,
        max_distance=100,
        available=True,
        banda_recommended=False,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Eldoret", "Mombasa"),
        operating_hours=OperatingHours(start="04:00", end="22:00", days=ALL_DAYS),
    ),
    DeliveryProvider(
        id="bdp-004",
        name="Banda Heavy Logistics",
        type="truck",
        description="Heavy-duty truck for large agricultural orders",
        estimated_time="3-4 hours",
        base_cost=600,
        cost_per_km=45,
        rating=4.6,
        completed_deliveries=820,
        specialties=("Heavy loads", "Farm machinery", "Bulk grain", "Construction materials"),
        max_weight=5000,
        max_distance=200,
        available=True,
        banda_recommended=False,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Nakuru", "Eldoret", "Kisumu", "Mombasa", "Nyeri"),
        operating_hours=OperatingHours(start="05:00", end="19:00", days=WEEKDAYS),
    ),
    DeliveryProvider(
        id="bdp-005",
        name="Banda ColdChain Express",
        type="tractor",
        description="Specialized refrigerated transport for perishables",
        estimated_time="2-4 hours",
        base_cost=800,
        cost_per_km=55,
        rating=4.9,
        completed_deliveries=450,
        specialties=("Cold storage", "Dairy products", "Fresh produce", "Meat transport"),
        max_weight=3000,
        max_distance=150,
        available=True,
        banda_recommended=True,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Eldoret", "Meru"),
        operating_hours=OperatingHours(start="03:00", end="23:00", days=ALL_DAYS),
    ),
    DeliveryProvider(
        id="bdp-006",
        name="Banda Pickup Service",
        type="pickup",
        description="Versatile pickup truck for mixed agricultural goods",
        estimated_time="1.5-2.5 hours",
        base_cost=300,
        cost_per_km=30,
        rating=4.5,
        completed_deliveries=950,
        specialties=("Mixed loads", "Farm tools", "Animal feed", "Building materials"),
        max_weight=1200,
        max_distance=80,
        available=True,
        banda_recommended=False,
        agri_pay_integrated=True,
        trade_guard_protected=True,
        service_areas=("Nairobi", "Kiambu", "Machakos", "Kajiado"),
        operating_hours=OperatingHours(start="06:00", end="18:00", days=WEEKDAYS),
    ),
)

DEFAULT_ZONES: tuple[DeliveryZone, ...] = (
    DeliveryZone(
        key="ZONE_1",
        name="Nairobi Metro",
        areas=("Nairobi CBD", "Westlands", "Karen", "Langata", "Kasarani"),
        base_delivery_fee=150,
        free_delivery_threshold=2000,
    ),
    DeliveryZone(
        key="ZONE_2",
        name="Greater Nairobi",
        areas=("Kiambu", "Thika", "Machakos", "Kajiado"),
        base_delivery_fee=250,
        free_delivery_threshold=3000,
    ),
    DeliveryZone(
        key="ZONE_3",
        name="Central Kenya",
        areas=("Nakuru", "Nyeri", "Meru", "Embu"),
        base_delivery_fee=400,
        free_delivery_threshold=5000,
    ),
    DeliveryZone(
        key="ZONE_4",
        name="Extended Regions",
        areas=("Eldoret", "Kisumu", "Mombasa", "Garissa"),
        base_delivery_fee=600,
        free_delivery_threshold=8000,
    ),
)


def _provider_from_row(row: dict) -> DeliveryProvider:
    hours = row.get("operating_hours")
    return DeliveryProvider(
        id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        type=row["type"],
        base_cost=float(row["base_cost"]),
        cost_per_km=float(row["cost_per_km"]),
        rating=float(row.get("rating", 0.0)),
        max_weight=float(row["max_weight"]),
        max_distance=float(row["max_distance"]),
        specialties=tuple(row.get("specialties", ())),
        available=bool(row.get("available", True)),
        banda_recommended=bool(row.get("banda_recommended", False)),
        service_areas=tuple(row.get("service_areas", ())),
        operating_hours=(
            OperatingHours(start=hours["start"], end=hours["end"], days=tuple(hours.get("days", ())))
            if hours
            else None
        ),
        description=row.get("description", ""),
        estimated_time=row.get("estimated_time", ""),
        completed_deliveries=int(row.get("completed_deliveries", 0)),
        agri_pay_integrated=bool(row.get("agri_pay_integrated", False)),
        trade_guard_protected=bool(row.get("trade_guard_protected", False)),
    )


def _zone_from_row(key: str, row: dict) -> DeliveryZone:
    return DeliveryZone(
        key=key,
        name=str(row["name"]),
        areas=tuple(row.get("areas", ())),
        base_delivery_fee=float(row["base_delivery_fee"]),
        free_delivery_threshold=float(row["free_delivery_threshold"]),
    )


def load_catalog_file(path: Path) -> tuple[ProviderCatalog, ZoneCatalog]:
    """Parse a catalogue JSON file with ``providers`` (list) and ``zones`` (mapping)."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    providers = [_provider_from_row(row) for row in payload.get("providers", [])]
    zones = [_zone_from_row(key, row) for key, row in payload.get("zones", {}).items()]
    if not providers or not zones:
        raise ValueError(f"Catalogue file '{path}' must define both providers and zones.")
    return ProviderCatalog(providers), ZoneCatalog(zones)


@functools.lru_cache(maxsize=1)
def load_catalogs(source: Optional[Path] = None) -> tuple[ProviderCatalog, ZoneCatalog]:
    """Return the configured catalogues, falling back to the builtin tables."""

    path = source or settings.providers_file
    if path is not None:
        try:
            return load_catalog_file(path)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logging.warning(f"Failed to load provider catalogue from {path}: {exc}. Using builtin catalogue.")
    return ProviderCatalog(DEFAULT_PROVIDERS), ZoneCatalog(DEFAULT_ZONES)


def get_provider_catalog() -> ProviderCatalog:
    return load_catalogs()[0]


def get_zone_catalog() -> ZoneCatalog:
    return load_catalogs()[1]
