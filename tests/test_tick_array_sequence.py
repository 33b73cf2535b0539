from __future__ import annotations

import pytest

from clmm_swap.domain.entities.tick import MAX_TICK_INDEX, MIN_TICK_INDEX, Tick, TickUpdate
from clmm_swap.domain.entities.tick_array import TickArray
from clmm_swap.domain.exceptions import TickArrayIndexOutofBoundsError, TickArraySequenceInvalidIndexError
from clmm_swap.domain.services.tick_array_sequence import SwapTickSequence


def _array(start_tick_index: int, offsets: tuple[int, ...] = ()) -> TickArray:
    tick_array = TickArray(start_tick_index=start_tick_index)
    for offset in offsets:
        tick_array.ticks[offset] = Tick(initialized=True, liquidity_net=1, liquidity_gross=1)
    return tick_array


def test_sequence_needs_one_to_three_arrays():
    with pytest.raises(ValueError):
        SwapTickSequence([])
    with pytest.raises(ValueError):
        SwapTickSequence([_array(0), _array(88), _array(176), _array(264)])
    assert len(SwapTickSequence([_array(0), _array(88)])) == 2


def test_get_and_update_tick_address_the_right_array():
    sequence = SwapTickSequence([_array(88), _array(0)])
    sequence.update_tick(1, 5, 1, TickUpdate(initialized=True, liquidity_net=9, liquidity_gross=9))
    assert sequence.get_tick(1, 5, 1).liquidity_net == 9
    assert sequence.get_tick_offset(1, 5, 1) == 5
    assert sequence.tick_arrays[0].ticks[5].initialized is False


def test_array_index_outside_sequence():
    sequence = SwapTickSequence([_array(0)])
    with pytest.raises(TickArrayIndexOutofBoundsError):
        sequence.get_tick(1, 5, 1)
    with pytest.raises(TickArrayIndexOutofBoundsError):
        sequence.get_tick_offset(-1, 5, 1)


class TestGetNextInitializedTickIndex:
    def test_found_in_first_array(self):
        sequence = SwapTickSequence([_array(0, (10,)), _array(-88)])
        assert sequence.get_next_initialized_tick_index(40, 1, True, 0) == (0, 10)

    def test_continues_into_next_array_a_to_b(self):
        sequence = SwapTickSequence([_array(0), _array(-88, (80,))])
        assert sequence.get_next_initialized_tick_index(40, 1, True, 0) == (1, -8)

    def test_continues_into_next_array_b_to_a(self):
        sequence = SwapTickSequence([_array(0), _array(88, (0,))])
        assert sequence.get_next_initialized_tick_index(40, 1, False, 0) == (1, 88)

    def test_b_to_a_from_last_tick_of_array(self):
        sequence = SwapTickSequence([_array(0, (87,)), _array(88, (2,))])
        assert sequence.get_next_initialized_tick_index(87, 1, False, 1) == (1, 90)

    def test_last_array_fallback_a_to_b(self):
        sequence = SwapTickSequence([_array(0), _array(-88)])
        assert sequence.get_next_initialized_tick_index(40, 1, True, 0) == (1, -88)

    def test_last_array_fallback_b_to_a(self):
        sequence = SwapTickSequence([_array(0, (10,))])
        assert sequence.get_next_initialized_tick_index(80, 8, False, 0) == (0, 696)

    def test_min_tick_array_falls_back_to_min_tick(self):
        sequence = SwapTickSequence([_array(-443696)])
        assert sequence.get_next_initialized_tick_index(-443620, 1, True, 0) == (0, MIN_TICK_INDEX)

    def test_max_tick_array_falls_back_to_max_tick(self):
        sequence = SwapTickSequence([_array(443608)])
        assert sequence.get_next_initialized_tick_index(443610, 1, False, 0) == (0, MAX_TICK_INDEX)

    def test_start_index_past_sequence(self):
        sequence = SwapTickSequence([_array(0)])
        with pytest.raises(TickArraySequenceInvalidIndexError):
            sequence.get_next_initialized_tick_index(-1, 1, True, 1)
