from __future__ import annotations

import pytest

from clmm_swap.domain.entities.tick import MIN_TICK_INDEX, TICK_ARRAY_SIZE, Tick, TickUpdate
from clmm_swap.domain.entities.tick_array import DEFAULT_PUBKEY, TickArray
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import (
    InvalidStartTickError,
    InvalidTickArraySequenceError,
    InvalidTickSpacingError,
    TickNotFoundError,
)


WHIRLPOOL = "So11111111111111111111111111111111111111112"


def _whirlpool(tick_spacing: int) -> Whirlpool:
    return Whirlpool(
        address=WHIRLPOOL,
        token_mint_a=DEFAULT_PUBKEY,
        token_mint_b=DEFAULT_PUBKEY,
        token_vault_a=DEFAULT_PUBKEY,
        token_vault_b=DEFAULT_PUBKEY,
        tick_spacing=tick_spacing,
        fee_rate=3000,
        sqrt_price=1 << 64,
        tick_current_index=0,
        liquidity=0,
    )


def _array_with_initialized(start_tick_index: int, offsets: list[int]) -> TickArray:
    tick_array = TickArray(start_tick_index=start_tick_index)
    for offset in offsets:
        tick_array.ticks[offset] = Tick(initialized=True, liquidity_net=1, liquidity_gross=1)
    return tick_array


def test_new_tick_array_holds_88_default_ticks():
    tick_array = TickArray()
    assert len(tick_array.ticks) == TICK_ARRAY_SIZE
    assert all(tick == Tick() for tick in tick_array.ticks)
    assert tick_array.whirlpool == DEFAULT_PUBKEY


def test_tick_array_rejects_wrong_tick_count():
    with pytest.raises(ValueError):
        TickArray(ticks=[Tick()])


def test_initialize_sets_owner_and_start():
    tick_array = TickArray()
    tick_array.initialize(_whirlpool(8), 704)
    assert tick_array.whirlpool == WHIRLPOOL
    assert tick_array.start_tick_index == 704


def test_initialize_rejects_invalid_start():
    with pytest.raises(InvalidStartTickError):
        TickArray().initialize(_whirlpool(8), 88)


def test_initialize_accepts_min_tick_index():
    tick_array = TickArray()
    tick_array.initialize(_whirlpool(1), MIN_TICK_INDEX)
    assert tick_array.start_tick_index == MIN_TICK_INDEX


def test_tick_offset_floors_towards_negative_infinity():
    tick_array = TickArray(start_tick_index=0)
    assert tick_array.tick_offset(-1, 2) == -1
    assert tick_array.tick_offset(-3, 2) == -2
    assert tick_array.tick_offset(5, 2) == 2


def test_tick_offset_rejects_zero_spacing():
    with pytest.raises(InvalidTickSpacingError):
        TickArray().tick_offset(0, 0)


class TestGetNextInitTickIndex:
    def test_a_to_b_search_includes_start_tick(self):
        tick_array = _array_with_initialized(0, [10, 40])
        assert tick_array.get_next_init_tick_index(40, 1, True) == 40
        assert tick_array.get_next_init_tick_index(39, 1, True) == 10

    def test_a_to_b_search_returns_none_when_nothing_left(self):
        tick_array = _array_with_initialized(0, [10, 40])
        assert tick_array.get_next_init_tick_index(9, 1, True) is None

    def test_b_to_a_search_excludes_start_tick(self):
        tick_array = _array_with_initialized(0, [10, 40])
        assert tick_array.get_next_init_tick_index(10, 1, False) == 40
        assert tick_array.get_next_init_tick_index(40, 1, False) is None

    def test_b_to_a_search_from_previous_array_last_tick(self):
        tick_array = _array_with_initialized(0, [0, 10])
        assert tick_array.get_next_init_tick_index(-1, 1, False) == 0

    def test_search_respects_tick_spacing(self):
        tick_array = _array_with_initialized(-704, [3])
        assert tick_array.get_next_init_tick_index(-600, 8, True) == -680

    def test_b_to_a_search_rejects_last_tick_of_array(self):
        tick_array = _array_with_initialized(0, [10])
        with pytest.raises(InvalidTickArraySequenceError):
            tick_array.get_next_init_tick_index(87, 1, False)

    def test_a_to_b_search_rejects_tick_past_array(self):
        tick_array = _array_with_initialized(0, [10])
        with pytest.raises(InvalidTickArraySequenceError):
            tick_array.get_next_init_tick_index(88, 1, True)
        with pytest.raises(InvalidTickArraySequenceError):
            tick_array.get_next_init_tick_index(-1, 1, True)


class TestGetTick:
    def test_get_tick_returns_slot(self):
        tick_array = _array_with_initialized(0, [2])
        assert tick_array.get_tick(16, 8).initialized is True
        assert tick_array.get_tick(8, 8).initialized is False

    def test_get_tick_rejects_unusable_tick(self):
        with pytest.raises(TickNotFoundError):
            TickArray(start_tick_index=0).get_tick(12, 8)

    def test_get_tick_rejects_tick_outside_array(self):
        with pytest.raises(TickNotFoundError):
            TickArray(start_tick_index=0).get_tick(704, 8)
        with pytest.raises(TickNotFoundError):
            TickArray(start_tick_index=0).get_tick(-8, 8)

    def test_min_tick_start_slots_are_unusable_when_spacing_does_not_divide_range(self):
        tick_array = TickArray(start_tick_index=MIN_TICK_INDEX)

        with pytest.raises(TickNotFoundError):
            tick_array.get_tick(MIN_TICK_INDEX + 64, 64)

    def test_update_tick_writes_through(self):
        tick_array = TickArray(start_tick_index=0)
        tick_array.update_tick(24, 8, TickUpdate(initialized=True, liquidity_net=-5, liquidity_gross=5))
        assert tick_array.ticks[3].initialized is True
        assert tick_array.ticks[3].liquidity_net == -5


def test_min_and_max_tick_array():
    assert TickArray(start_tick_index=-443696).is_min_tick_array()
    assert not TickArray(start_tick_index=-443608).is_min_tick_array()
    assert TickArray(start_tick_index=443608).is_max_tick_array(1)
    assert not TickArray(start_tick_index=443520).is_max_tick_array(1)
