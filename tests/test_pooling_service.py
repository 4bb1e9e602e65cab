from banda_delivery.models.domain import BuyerLocation, Coordinates, SellerFulfillmentGroup
from banda_delivery.services.pooling import clustering
from banda_delivery.services.pooling.service import (
    analyze_pooling,
    build_opportunity,
    detect_route_overlaps,
    pooled_delivery_fee,
    recommendation_tier,
)


def _seller(
    sid: str,
    location: str,
    weight: float = 10.0,
    subtotal: float = 1000.0,
    coords: tuple[float, float] | None = None,
) -> SellerFulfillmentGroup:
    return SellerFulfillmentGroup(
        seller_id=sid,
        seller_name=f"Seller {sid}",
        seller_location=location,
        total_weight=weight,
        subtotal=subtotal,
        coordinates=Coordinates(*coords) if coords else None,
    )


BUYER = BuyerLocation(city="Nairobi")


def test_group_by_location_normalizes_labels_and_keeps_order():
    sellers = [_seller("S1", "Nakuru"), _seller("S2", "Eldoret"), _seller("S3", "  nakuru ")]

    clusters = clustering.group_by_location(sellers)

    assert list(clusters) == ["nakuru", "eldoret"]
    assert [s.seller_id for s in clusters["nakuru"]] == ["S1", "S3"]
    assert list(clustering.poolable_clusters(sellers)) == ["nakuru"]


def test_three_sellers_same_location_are_highly_recommended():
    sellers = [_seller("S1", "Nakuru", 10), _seller("S2", "nakuru", 10), _seller("S3", "NAKURU ", 10)]

    analysis = analyze_pooling(sellers, BUYER, "mpesa")

    assert analysis.can_pool is True
    [opportunity] = analysis.pooling_opportunities
    assert opportunity.location == "nakuru"
    assert opportunity.seller_ids == ["S1", "S2", "S3"]
    assert opportunity.total_weight == 30
    assert opportunity.total_subtotal == 3000
    assert opportunity.separate_delivery.fee == 600
    assert opportunity.pooled_delivery.fee == 250
    assert opportunity.savings.amount == 350
    assert opportunity.savings.percentage == 58
    assert opportunity.savings.time_saved == 270 - 105
    assert opportunity.savings.co2_saved == 4.5
    assert opportunity.recommendation == "highly_recommended"
    assert analysis.recommendation.type == "pooled"
    assert analysis.recommendation.savings == 350
    assert analysis.recommendation.message == (
        "Pool deliveries from 3 sellers in nakuru to save KSh 350 and 4.5kg CO₂"
    )
    assert analysis.cod_restriction.allowed is True


def test_pickup_sequence_follows_input_order_in_fifteen_minute_steps():
    opportunity = build_opportunity("kiambu", [_seller("A", "Kiambu"), _seller("B", "Kiambu"), _seller("C", "Kiambu")])

    stops = opportunity.pooled_delivery.pickup_sequence
    assert [stop.seller_id for stop in stops] == ["A", "B", "C"]
    assert [stop.offset_minutes for stop in stops] == [0, 15, 30]
    assert stops[2].estimated_pickup_time == "+30 mins"
    assert opportunity.separate_delivery.estimated_time == "270 mins"
    assert opportunity.pooled_delivery.estimated_minutes == 105
    assert opportunity.separate_delivery.co2_emissions == 7.5
    assert opportunity.pooled_delivery.co2_emissions == 3.0


def test_distinct_locations_without_coordinates_split():
    analysis = analyze_pooling([_seller("S1", "Nakuru"), _seller("S2", "Eldoret")], BUYER, "card")

    assert analysis.pooling_opportunities == []
    assert analysis.route_overlaps == []
    assert analysis.can_pool is False
    assert analysis.recommendation.type == "split"
    assert analysis.recommendation.savings == 0
    assert analysis.summary.poolable_sellers == 0


def test_empty_checkout_degrades_to_split():
    analysis = analyze_pooling([], BUYER, "cod")

    assert analysis.recommendation.type == "split"
    assert analysis.cod_restriction.allowed is True
    assert analysis.summary.total_sellers == 0


def test_pooled_fee_weight_thresholds():
    assert pooled_delivery_fee(0) == 180
    assert pooled_delivery_fee(20) == 180
    assert pooled_delivery_fee(20.5) == 250
    assert pooled_delivery_fee(50) == 250
    assert pooled_delivery_fee(50.1) == 350


def test_separate_fee_scales_with_cluster_size():
    for count in range(2, 7):
        sellers = [_seller(f"S{i}", "Thika", weight=1) for i in range(count)]
        opportunity = build_opportunity("thika", sellers)
        assert opportunity.separate_delivery.fee == 200 * count
        assert opportunity.pooled_delivery.fee in {180, 250, 350}


def test_recommendation_tier_boundaries():
    assert recommendation_tier(101) == "highly_recommended"
    assert recommendation_tier(100) == "recommended"
    assert recommendation_tier(51) == "recommended"
    assert recommendation_tier(50) == "optional"
    assert recommendation_tier(-10) == "optional"


def test_two_heavy_sellers_are_optional():
    opportunity = build_opportunity("meru", [_seller("A", "Meru", 40), _seller("B", "Meru", 40)])

    assert opportunity.savings.amount == 50
    assert opportunity.recommendation == "optional"


def test_cod_blocked_when_pooling_is_possible():
    sellers = [_seller("S1", "Nakuru"), _seller("S2", "Nakuru")]

    analysis = analyze_pooling(sellers, BUYER, "cod")

    assert analysis.cod_restriction.allowed is False
    assert "payment verification" in analysis.cod_restriction.reason
    assert "prepaid" in analysis.cod_restriction.suggestion


def test_nearby_sellers_with_different_labels_only_get_an_advisory():
    sellers = [
        _seller("S1", "Nakuru Town", coords=(-0.3031, 36.0800)),
        _seller("S2", "Nakuru CBD", coords=(-0.3050, 36.0810)),
        _seller("S3", "Eldoret", coords=(0.5143, 35.2698)),
        _seller("S4", "Nakuru Town"),
    ]

    analysis = analyze_pooling(sellers, BUYER, "agripay")

    [overlap] = analysis.route_overlaps
    assert (overlap.seller_a_id, overlap.seller_b_id) == ("S1", "S2")
    assert overlap.distance_km < 5
    assert overlap.estimated_saving == 150
    assert overlap.suggestion.endswith("Pool delivery to save KSh 150.")
    assert [o.seller_ids for o in analysis.pooling_opportunities] == [["S1", "S4"]]


def test_route_overlap_respects_radius():
    sellers = [
        _seller("S1", "A", coords=(0.0, 0.0)),
        _seller("S2", "B", coords=(0.0, 0.04)),
    ]

    assert detect_route_overlaps(sellers, radius_km=5.0)
    assert detect_route_overlaps(sellers, radius_km=4.0) == []


def test_summary_totals_across_opportunities():
    sellers = [
        _seller("S1", "Nakuru", 5),
        _seller("S2", "Nakuru", 5),
        _seller("S3", "Thika", 30),
        _seller("S4", "Thika", 30),
    ]

    analysis = analyze_pooling(sellers, BUYER, "mpesa")

    assert analysis.summary.total_sellers == 4
    assert analysis.summary.poolable_sellers == 4
    assert analysis.summary.total_potential_savings == (400 - 180) + (400 - 350)
    assert analysis.summary.total_co2_savings == 4.0
    assert analysis.summary.estimated_time_savings == 2 * (180 - 90)
    assert analysis.recommendation.message.startswith("Pool deliveries from 2 sellers in nakuru")
