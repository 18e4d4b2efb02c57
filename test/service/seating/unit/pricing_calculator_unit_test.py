from decimal import Decimal

import pytest

from src.platform.exception.exceptions import OutOfRangeError
from src.service.seating.domain.pricing_calculator import PricingCalculator
from src.service.seating.domain.seat_grid import SeatGrid


class TestPriceOf:
    @pytest.mark.parametrize(
        'row_label,price',
        [
            ('A', Decimal('1000')),
            ('B', Decimal('1000')),
            ('C', Decimal('1000')),
            ('D', Decimal('750')),
            ('E', Decimal('750')),
            ('F', Decimal('750')),
            ('G', Decimal('500')),
            ('H', Decimal('500')),
        ],
    )
    def test_tier_prices(self, row_label: str, price: Decimal) -> None:
        assert PricingCalculator.price_of(row_label) == price

    @pytest.mark.parametrize('row_label', ['Z', 'I', ''])
    def test_unknown_row_falls_back_to_lowest_tier(self, row_label: str) -> None:
        assert PricingCalculator.price_of(row_label) == Decimal('500')


class TestTotalPrice:
    def test_sums_tiers(self) -> None:
        total = PricingCalculator.total_price(['0-0', '3-4', '7-9'], SeatGrid.empty())

        assert total == Decimal('2250.00')
        assert str(total) == '2250.00'

    def test_empty_is_zero(self) -> None:
        assert PricingCalculator.total_price([], SeatGrid.empty()) == Decimal('0.00')

    def test_seat_outside_grid_raises(self) -> None:
        with pytest.raises(OutOfRangeError):
            PricingCalculator.total_price(['8-0'], SeatGrid.empty())
