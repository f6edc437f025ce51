"""
Order and Cart financial calculators.

Pure functions shared by the cart preview and by checkout, so both arrive at
identical numbers. All amounts are whole currency units (ints).

Usage:
    # For Cart (preview)
    from orders.calculators import calculate_totals
    totals = calculate_totals(cart_items, "express", tip=2000)

    # For checkout
    subtotal = calculate_subtotal(line_items)
    total = calculate_total(subtotal, calculate_delivery_fee(tier), calculate_tip(selection))
"""

import re
from typing import Any, Dict, Iterable, Optional, Union

from django.conf import settings

CUSTOM_TIP = "custom"

DEFAULT_DELIVERY_FEES = {"BASE_FEE": 3000, "EXPRESS_SURCHARGE": 2000}
DEFAULT_DELIVERY_TIME_LABELS = {"standard": "30-45 min", "express": "15-20 min"}
DEFAULT_TIP_PRESETS = (0, 2000, 5000)

LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def _read(item, *names):
    for name in names:
        if isinstance(item, dict):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    raise AttributeError(f"Line item {item!r} has none of {names}")


def calculate_subtotal(line_items: Iterable) -> int:
    """
    Sum of unit price x quantity.

    Accepts order items (`unit_price`), cart items (`discounted_price`) or
    plain dicts with either key.
    """
    return sum(
        int(_read(item, "unit_price", "discounted_price")) * int(_read(item, "quantity"))
        for item in line_items
    )


def get_delivery_fees() -> Dict[str, int]:
    return getattr(settings, "DELIVERY_FEES", DEFAULT_DELIVERY_FEES)


def calculate_delivery_fee(tier: str, fees: Optional[Dict[str, int]] = None) -> int:
    """
    standard -> BASE_FEE, express -> BASE_FEE + EXPRESS_SURCHARGE.

    Raises:
        ValueError: unknown tier
    """
    fees = fees or get_delivery_fees()
    if tier == "standard":
        return fees["BASE_FEE"]
    if tier == "express":
        return fees["BASE_FEE"] + fees["EXPRESS_SURCHARGE"]
    raise ValueError(f"Unknown delivery tier: {tier!r}")


def delivery_time_label(tier: str) -> str:
    labels = getattr(settings, "DELIVERY_TIME_LABELS", DEFAULT_DELIVERY_TIME_LABELS)
    try:
        return labels[tier]
    except KeyError:
        raise ValueError(f"Unknown delivery tier: {tier!r}")


def get_tip_presets():
    return tuple(getattr(settings, "TIP_PRESETS", DEFAULT_TIP_PRESETS))


def parse_custom_tip(text) -> int:
    """
    Leading integer of the user's text; 0 when there is none or it is negative.

    "3500" -> 3500, "2000 pesos" -> 2000, "abc" -> 0, "-50" -> 0.
    """
    if isinstance(text, bool):
        return 0
    if isinstance(text, int):
        return max(text, 0)
    match = LEADING_INTEGER_PATTERN.match(str(text or ""))
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def calculate_tip(selection: Union[int, str], custom_amount: Any = "") -> int:
    """
    Tip for a checkout.

    `selection` is one of the preset amounts or "custom", in which case the
    amount comes from `custom_amount`.

    Raises:
        ValueError: selection is neither a preset nor "custom"
    """
    if selection == CUSTOM_TIP:
        return parse_custom_tip(custom_amount)

    try:
        amount = int(selection)
    except (TypeError, ValueError):
        raise ValueError(f"Unknown tip selection: {selection!r}")

    if isinstance(selection, bool) or amount not in get_tip_presets():
        raise ValueError(f"Unknown tip selection: {selection!r}")
    return amount


def calculate_total(subtotal: int, delivery_fee: int, tip: int) -> int:
    return subtotal + delivery_fee + tip


def calculate_totals(line_items: Iterable, delivery_tier: str, tip: int = 0) -> Dict[str, int]:
    """
    Calculate all totals at once.

    Returns:
        dict: {
            'subtotal': int,
            'delivery_fee': int,
            'tip': int,
            'total': int,
        }
    """
    subtotal = calculate_subtotal(line_items)
    delivery_fee = calculate_delivery_fee(delivery_tier)
    return {
        "subtotal": subtotal,
        "delivery_fee": delivery_fee,
        "tip": tip,
        "total": calculate_total(subtotal, delivery_fee, tip),
    }

