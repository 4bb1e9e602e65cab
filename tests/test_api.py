from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from banda_delivery.main import create_app
from banda_delivery.services.scheduling.clock import local_now


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def _seller_payload(sid: str, location: str, weight: float, coords: dict | None = None) -> dict:
    return {
        "seller_id": sid,
        "seller_name": f"Seller {sid}",
        "seller_location": location,
        "seller_coordinates": coords,
        "total_weight": weight,
        "subtotal": 1500,
        "items": [{"product_id": f"P-{sid}", "product_name": "Maize", "quantity": 2}],
    }


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/catalog").json() == {"providers": 6, "zones": 4}
    assert api_client.get("/").json()["status"] == "running"


def test_pooling_endpoint_recommends_pooled(api_client: TestClient):
    payload = {
        "seller_groups": [
            _seller_payload("S1", "Nakuru", 10),
            _seller_payload("S2", "nakuru", 10),
            _seller_payload("S3", " Nakuru", 10),
        ],
        "buyer_location": {"city": "Nairobi"},
        "payment_method": "cod",
    }

    response = api_client.post("/api/delivery/pooling", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["can_pool"] is True
    assert body["pooling_opportunities"][0]["pooled_delivery"]["fee"] == 250
    assert body["pooling_opportunities"][0]["recommendation"] == "highly_recommended"
    assert body["recommendation"]["type"] == "pooled"
    assert body["cod_restriction"]["allowed"] is False
    assert body["metadata"]["buyer_city"] == "Nairobi"


def test_pooling_endpoint_rejects_negative_weight(api_client: TestClient):
    payload = {
        "seller_groups": [_seller_payload("S1", "Nakuru", -1)],
        "buyer_location": {"city": "Nairobi"},
        "payment_method": "mpesa",
    }

    assert api_client.post("/api/delivery/pooling", json=payload).status_code == 422


def test_recommend_returns_null_when_nothing_fits(api_client: TestClient):
    response = api_client.post(
        "/api/providers/recommend",
        json={"order_weight": 2000, "distance_km": 60, "product_categories": [], "urgency": "express"},
    )

    assert response.status_code == 200
    assert response.json() == {"provider": None, "alternatives": []}


def test_recommend_lists_alternatives(api_client: TestClient):
    response = api_client.post("/api/providers/recommend", json={"order_weight": 20, "distance_km": 10})

    body = response.json()
    assert body["provider"]["id"] == "bdp-001"
    assert [p["id"] for p in body["alternatives"]][:2] == ["bdp-002", "bdp-003"]


def test_fee_quote_free_delivery(api_client: TestClient):
    response = api_client.post(
        "/api/providers/fee-quote",
        json={"provider_id": "bdp-002", "distance_km": 12, "order_value": 2500, "zone": "ZONE_1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total_fee"] == 0
    assert body["is_free_delivery"] is True
    assert body["banda_discount"] == pytest.approx(55)
    assert body["zone"] == "Nairobi Metro"


def test_fee_quote_unknown_provider_is_404(api_client: TestClient):
    response = api_client.post(
        "/api/providers/fee-quote",
        json={"provider_id": "bdp-404", "distance_km": 1, "order_value": 1, "zone": "ZONE_1"},
    )

    assert response.status_code == 404
    assert "bdp-404" in response.json()["detail"]


def test_catalog_listings(api_client: TestClient):
    providers = api_client.get("/api/providers").json()
    zones = api_client.get("/api/zones").json()

    assert [p["id"] for p in providers][:2] == ["bdp-001", "bdp-002"]
    assert providers[0]["operating_hours"]["start"] == "06:00"
    assert {z["key"] for z in zones} == {"ZONE_1", "ZONE_2", "ZONE_3", "ZONE_4"}


def test_validate_slot_endpoint(api_client: TestClient):
    malformed = api_client.post("/api/scheduling/validate", json={"start": "not-a-date", "end": "x"})
    soon = local_now() + timedelta(minutes=5)
    too_soon = api_client.post(
        "/api/scheduling/validate",
        json={"start": soon.isoformat(), "end": (soon + timedelta(hours=1)).isoformat()},
    )

    assert malformed.json() == {"is_valid": False, "reason": "Invalid time slot format"}
    assert too_soon.json()["is_valid"] is False


def test_validate_slot_endpoint_out_of_range_datetime(api_client: TestClient):
    response = api_client.post(
        "/api/scheduling/validate",
        json={"start": "9999-12-31T23:00:00-05:00", "end": "9999-12-31T23:30:00-05:00"},
    )

    assert response.status_code == 200
    assert response.json() == {"is_valid": False, "reason": "Invalid time slot format"}


def test_next_slot_endpoint(api_client: TestClient):
    tomorrow_noon = (local_now() + timedelta(days=1)).replace(hour=12, minute=0, second=0, microsecond=0)
    slots = [
        {"id": "later", "start": (tomorrow_noon + timedelta(hours=2)).isoformat(), "end": (tomorrow_noon + timedelta(hours=3)).isoformat()},
        {"id": "noon", "start": tomorrow_noon.isoformat(), "end": (tomorrow_noon + timedelta(hours=1)).isoformat()},
        {"id": "broken", "start": "??", "end": "??"},
    ]

    body = api_client.post("/api/scheduling/next-slot", json={"slots": slots}).json()

    assert body["slot"]["id"] == "noon"
    assert [slot["id"] for slot in body["valid_slots"]] == ["noon", "later"]


def test_label_and_hourly_slots_endpoints(api_client: TestClient):
    label = api_client.get("/api/scheduling/label-slots").json()
    hourly = api_client.get("/api/scheduling/hourly-slots").json()

    assert len(label["slots"]) == 12
    assert sum(len(day["slots"]) for day in hourly) == 24
    assert api_client.get("/api/scheduling/label-slots", params={"start_hour": 10, "end_hour": 9}).status_code == 400


def test_estimate_endpoint(api_client: TestClient):
    response = api_client.get("/api/scheduling/estimate", params={"distance_km": 10, "vehicle_type": "boda"})

    assert response.json() == {"min_minutes": 33, "max_minutes": 43, "label": "33-43 mins"}
