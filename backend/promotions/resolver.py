"""
Promotion resolution: turns a catalog item and the restaurant's effective
promotions into a PriceSnapshot.

The snapshot is computed once, when the item goes into the cart, and is then
carried unchanged into the order. Nothing downstream calls the resolver again.
"""

import re
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

PERCENTAGE_PATTERN = re.compile(r"(\d+)%")


@dataclass(frozen=True)
class PriceSnapshot:
    original_price: int
    discounted_price: int
    has_promotion: bool = False
    promotion_id: Optional[str] = None
    promotion_title: str = ""
    promotion_discount: str = ""

    @classmethod
    def without_promotion(cls, price: int) -> "PriceSnapshot":
        return cls(original_price=price, discounted_price=price)


def parse_discount_percentage(label: str) -> int:
    """
    Extract the percentage from a discount label.

    "15% OFF" -> 15, "Hasta 30% en combos" -> 30, "2x1" -> 0.
    """
    match = PERCENTAGE_PATTERN.search(label or "")
    if not match:
        return 0
    return int(match.group(1))


def apply_percentage(price: int, percentage: int) -> int:
    """Discount `price` by a whole percentage, rounding half-up to a whole unit."""
    percentage = max(0, min(percentage, 100))
    if percentage == 0:
        return price
    discounted = Decimal(price) * (Decimal(100) - Decimal(percentage)) / Decimal(100)
    return int(discounted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PromotionResolver:
    """Selects the promotion that applies to an item and prices it."""

    @staticmethod
    def is_applicable(promotion, catalog_item) -> bool:
        if promotion.restaurant_id != catalog_item.restaurant_id:
            return False
        item_ids = {item.pk for item in promotion.applicable_items.all()}
        return not item_ids or catalog_item.pk in item_ids

    @staticmethod
    def select(catalog_item, effective_promotions: Iterable):
        """
        First applicable promotion in the caller's ordering.

        This is a first-match policy, not a best-discount search: the
        directory hands promotions over newest first.
        """
        for promotion in effective_promotions:
            if PromotionResolver.is_applicable(promotion, catalog_item):
                return promotion
        return None

    @staticmethod
    def resolve(catalog_item, effective_promotions: Iterable) -> PriceSnapshot:
        original_price = int(catalog_item.price)
        promotion = PromotionResolver.select(catalog_item, effective_promotions)

        if promotion is None:
            return PriceSnapshot.without_promotion(original_price)

        percentage = parse_discount_percentage(promotion.discount)
        discounted_price = apply_percentage(original_price, percentage)

        logger.debug(
            f"Resolved promotion {promotion.pk} for item {catalog_item.pk}: "
            f"{original_price} -> {discounted_price} ({percentage}%)"
        )

        return PriceSnapshot(
            original_price=original_price,
            discounted_price=discounted_price,
            has_promotion=True,
            promotion_id=str(promotion.pk),
            promotion_title=promotion.title,
            promotion_discount=promotion.discount,
        )
