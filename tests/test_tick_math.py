from __future__ import annotations

import pytest

from clmm_swap.domain.entities.tick import MAX_TICK_INDEX, MIN_TICK_INDEX
from clmm_swap.domain.exceptions import SqrtPriceOutOfBoundsError, TickIndexOutOfBoundsError
from clmm_swap.domain.services.tick_math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    Q64,
    sqrt_price_from_tick_index,
    sqrt_price_x64_to_price,
    tick_index_from_sqrt_price,
)


class TestSqrtPriceFromTickIndex:
    def test_bounds_are_exact(self):
        assert sqrt_price_from_tick_index(MIN_TICK_INDEX) == MIN_SQRT_PRICE_X64
        assert sqrt_price_from_tick_index(MAX_TICK_INDEX) == MAX_SQRT_PRICE_X64

    def test_tick_zero_is_one(self):
        assert sqrt_price_from_tick_index(0) == Q64

    def test_ticks_next_to_zero(self):
        assert sqrt_price_from_tick_index(1) == 18447666387855959850
        assert sqrt_price_from_tick_index(-1) == 18445821805675392311
        assert sqrt_price_from_tick_index(8) == 18454123878217468680
        assert sqrt_price_from_tick_index(-8) == 18439367220385604838

    def test_is_strictly_increasing(self):
        ticks = [MIN_TICK_INDEX, -100000, -8, -1, 0, 1, 8, 100000, MAX_TICK_INDEX]
        prices = [sqrt_price_from_tick_index(tick) for tick in ticks]
        assert prices == sorted(prices)
        assert len(set(prices)) == len(prices)

    def test_rejects_out_of_range_tick(self):
        with pytest.raises(TickIndexOutOfBoundsError):
            sqrt_price_from_tick_index(MAX_TICK_INDEX + 1)
        with pytest.raises(TickIndexOutOfBoundsError):
            sqrt_price_from_tick_index(MIN_TICK_INDEX - 1)


class TestTickIndexFromSqrtPrice:
    def test_bounds(self):
        assert tick_index_from_sqrt_price(MIN_SQRT_PRICE_X64) == MIN_TICK_INDEX
        assert tick_index_from_sqrt_price(MAX_SQRT_PRICE_X64) == MAX_TICK_INDEX

    def test_returns_greatest_tick_at_or_below_price(self):
        assert tick_index_from_sqrt_price(Q64) == 0
        assert tick_index_from_sqrt_price(Q64 - 1) == -1
        assert tick_index_from_sqrt_price(sqrt_price_from_tick_index(1) - 1) == 0

    @pytest.mark.parametrize("tick", [-443635, -200000, -12345, -1, 0, 1, 12345, 200000, 443635])
    def test_inverts_tick_prices(self, tick):
        assert tick_index_from_sqrt_price(sqrt_price_from_tick_index(tick)) == tick
        assert tick_index_from_sqrt_price(sqrt_price_from_tick_index(tick + 1) - 1) == tick

    def test_rejects_out_of_range_price(self):
        with pytest.raises(SqrtPriceOutOfBoundsError):
            tick_index_from_sqrt_price(MIN_SQRT_PRICE_X64 - 1)
        with pytest.raises(SqrtPriceOutOfBoundsError):
            tick_index_from_sqrt_price(MAX_SQRT_PRICE_X64 + 1)


def test_sqrt_price_x64_to_price():
    assert sqrt_price_x64_to_price(Q64) == 1.0
    assert sqrt_price_x64_to_price(2 * Q64) == 4.0
