"""Row-tier pricing"""

from collections.abc import Iterable
from decimal import Decimal

import attrs

from src.service.seating.domain.seat_grid import SeatGrid
from src.service.seating.domain.value_object.seat_id import SeatId


@attrs.define(frozen=True)
class PricingTier:
    name: str
    rows: frozenset[str]
    price: Decimal


PRICING_TIERS: tuple[PricingTier, ...] = (
    PricingTier(name='premium', rows=frozenset('ABC'), price=Decimal('1000.00')),
    PricingTier(name='standard', rows=frozenset('DEF'), price=Decimal('750.00')),
    PricingTier(name='economy', rows=frozenset('GH'), price=Decimal('500.00')),
)

# Rows outside every named tier are charged the cheapest tier
FALLBACK_PRICE = min(tier.price for tier in PRICING_TIERS)


class PricingCalculator:
    @staticmethod
    def price_of(row_label: str) -> Decimal:
        for tier in PRICING_TIERS:
            if row_label in tier.rows:
                return tier.price
        return FALLBACK_PRICE

    @classmethod
    def total_price(cls, seat_ids: Iterable[SeatId | str], grid: SeatGrid) -> Decimal:
        """
        Raises:
            OutOfRangeError: A seat is not a member of the grid
        """
        total = Decimal('0.00')
        for seat_id in seat_ids:
            total += cls.price_of(grid.seat(seat_id).row_label)
        return total.quantize(Decimal('0.01'))
