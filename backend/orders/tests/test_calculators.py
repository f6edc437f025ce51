"""
Order Calculator Tests

Pure pricing functions: no database needed.
"""
import pytest
from django.test import override_settings

from orders.calculators import (
    calculate_delivery_fee,
    calculate_subtotal,
    calculate_tip,
    calculate_total,
    calculate_totals,
    delivery_time_label,
    parse_custom_tip,
)


class TestSubtotal:

    def test_subtotal_is_sum_of_unit_price_times_quantity(self):
        line_items = [
            {'unit_price': 17000, 'quantity': 2},
            {'unit_price': 10000, 'quantity': 1},
        ]

        assert calculate_subtotal(line_items) == 44000

    def test_cart_items_use_discounted_price(self):
        assert calculate_subtotal([{'discounted_price': 8500, 'quantity': 3}]) == 25500

    def test_empty(self):
        assert calculate_subtotal([]) == 0


class TestDeliveryFee:

    def test_standard_and_express(self):
        assert calculate_delivery_fee('standard') == 3000
        assert calculate_delivery_fee('express') == 5000

    def test_fee_table_is_configuration(self):
        with override_settings(DELIVERY_FEES={'BASE_FEE': 4000, 'EXPRESS_SURCHARGE': 2500}):
            assert calculate_delivery_fee('standard') == 4000
            assert calculate_delivery_fee('express') == 6500

        assert calculate_delivery_fee('express', fees={'BASE_FEE': 1, 'EXPRESS_SURCHARGE': 2}) == 3

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            calculate_delivery_fee('drone')

    def test_delivery_time_labels(self):
        assert delivery_time_label('standard') == '30-45 min'
        assert delivery_time_label('express') == '15-20 min'

        with pytest.raises(ValueError):
            delivery_time_label('drone')


class TestTip:

    @pytest.mark.parametrize("selection", [0, 2000, 5000, "2000"])
    def test_preset_amounts(self, selection):
        assert calculate_tip(selection) == int(selection)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3500", 3500),
            ("2000 pesos", 2000),
            ("  1500", 1500),
            ("abc", 0),
            ("", 0),
            (None, 0),
            ("-500", 0),
            (750, 750),
        ],
    )
    def test_custom_amount(self, text, expected):
        """
        Custom tips take the leading integer of the input and default to 0
        """
        assert calculate_tip("custom", text) == expected
        assert parse_custom_tip(text) == expected

    @pytest.mark.parametrize("selection", [1000, "lots", None, True])
    def test_unknown_selection(self, selection):
        with pytest.raises(ValueError):
            calculate_tip(selection)


class TestTotals:

    def test_total_is_sum_of_parts(self):
        assert calculate_total(27000, 5000, 2000) == 34000

    def test_worked_example(self):
        """
        CRITICAL: 17000 + 10000, express delivery, 2000 tip

        Business Impact: the number on the receipt
        """
        totals = calculate_totals(
            [{'unit_price': 17000, 'quantity': 1}, {'unit_price': 10000, 'quantity': 1}],
            'express',
            tip=calculate_tip(2000),
        )

        assert totals == {'subtotal': 27000, 'delivery_fee': 5000, 'tip': 2000, 'total': 34000}
