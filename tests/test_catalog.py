import json
from pathlib import Path

import pytest

from banda_delivery.config import Settings
from banda_delivery.data import catalog as catalog_module
from banda_delivery.data.catalog import ZoneCatalog, DEFAULT_ZONES, load_catalog_file, load_catalogs


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    load_catalogs.cache_clear()
    yield
    load_catalogs.cache_clear()


def _write_catalog(path: Path) -> Path:
    payload = {
        "providers": [
            {
                "id": "tst-1",
                "name": "Test Boda",
                "type": "boda",
                "base_cost": 100,
                "cost_per_km": 10,
                "rating": 4.0,
                "max_weight": 30,
                "max_distance": 20,
                "banda_recommended": True,
                "operating_hours": {"start": "07:00", "end": "19:00", "days": ["Monday"]},
            }
        ],
        "zones": {
            "ZONE_X": {
                "name": "Test Zone",
                "areas": ["Naivasha"],
                "base_delivery_fee": 100,
                "free_delivery_threshold": 1000,
            }
        },
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_catalog_file(tmp_path: Path):
    providers, zones = load_catalog_file(_write_catalog(tmp_path / "catalog.json"))

    assert [provider.id for provider in providers] == ["tst-1"]
    assert providers.get("tst-1").operating_hours.days == ("Monday",)
    assert zones.get("ZONE_X").free_delivery_threshold == 1000


def test_load_catalogs_prefers_configured_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = _write_catalog(tmp_path / "catalog.json")
    monkeypatch.setattr(catalog_module.settings, "providers_file", path)

    providers, zones = load_catalogs()

    assert len(providers) == 1
    assert zones.keys() == ("ZONE_X",)


def test_load_catalogs_falls_back_on_unreadable_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(catalog_module.settings, "providers_file", tmp_path / "missing.json")

    providers, zones = load_catalogs()

    assert len(providers) == 6
    assert len(zones) == 4


def test_zone_for_area_is_case_insensitive():
    zones = ZoneCatalog(DEFAULT_ZONES)

    assert zones.zone_for_area(" nakuru ").key == "ZONE_3"
    assert zones.zone_for_area("westlands").name == "Nairobi Metro"
    assert zones.zone_for_area("Lodwar") is None


def test_settings_parse_tuples_from_strings():
    configured = Settings(business_days="1,2,3", frontend_allowed_origins='["http://a", "http://b"]')

    assert configured.business_days == (1, 2, 3)
    assert configured.frontend_allowed_origins == ("http://a", "http://b")
    with pytest.raises(ValueError):
        Settings(business_days=[7])


def test_settings_accept_json_days_and_single_origin():
    configured = Settings(business_days="[0, 6]", frontend_allowed_origins="http://only.example")

    assert configured.business_days == (0, 6)
    assert configured.frontend_allowed_origins == ("http://only.example",)
