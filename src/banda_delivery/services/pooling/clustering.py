"""Group seller fulfillment entries by their pickup location label."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import SellerFulfillmentGroup


def normalize_location(label: str) -> str:
    return label.strip().lower()


def group_by_location(sellers: Sequence[SellerFulfillmentGroup]) -> dict[str, list[SellerFulfillmentGroup]]:
    """Cluster sellers sharing an identical normalized location label.

    Only exact label matches cluster together; nearby sellers with different
    spellings stay apart. Both the cluster order and the seller order inside a
    cluster follow the input order.
    """

    clusters: dict[str, list[SellerFulfillmentGroup]] = {}
    for seller in sellers:
        clusters.setdefault(normalize_location(seller.seller_location), []).append(seller)
    return clusters


def poolable_clusters(sellers: Sequence[SellerFulfillmentGroup]) -> dict[str, list[SellerFulfillmentGroup]]:
    return {location: members for location, members in group_by_location(sellers).items() if len(members) >= 2}
