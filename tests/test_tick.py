from __future__ import annotations

import pytest

from clmm_swap.domain.entities.tick import (
    MAX_TICK_INDEX,
    MIN_TICK_INDEX,
    NUM_REWARDS,
    Tick,
    TickUpdate,
    bound_tick_index,
    check_is_out_of_bounds,
    check_is_usable_tick,
    check_is_valid_start_tick,
    min_tick_array_start_index,
)


class TestTick:
    def test_default_tick_is_uninitialized_and_empty(self):
        tick = Tick()
        assert tick.initialized is False
        assert tick.liquidity_net == 0
        assert tick.liquidity_gross == 0
        assert tick.reward_growths_outside == (0,) * NUM_REWARDS

    def test_update_replaces_every_field(self):
        tick = Tick(initialized=True, liquidity_net=10, liquidity_gross=10, fee_growth_outside_a=5)
        tick.update(
            TickUpdate(
                initialized=True,
                liquidity_net=-300,
                liquidity_gross=300,
                fee_growth_outside_a=1,
                fee_growth_outside_b=2,
                reward_growths_outside=(3, 4, 5),
            )
        )
        assert tick.liquidity_net == -300
        assert tick.liquidity_gross == 300
        assert tick.fee_growth_outside_a == 1
        assert tick.fee_growth_outside_b == 2
        assert tick.reward_growths_outside == (3, 4, 5)

    def test_update_with_default_resets_tick(self):
        tick = Tick(initialized=True, liquidity_net=10, liquidity_gross=10)
        tick.update(TickUpdate())
        assert tick == Tick()

    def test_update_rejects_wrong_reward_count(self):
        tick = Tick()
        with pytest.raises(ValueError):
            tick.update(TickUpdate(reward_growths_outside=(1, 2)))
        assert tick == Tick()

    def test_from_tick_copies_values(self):
        tick = Tick(initialized=True, liquidity_net=-7, liquidity_gross=7, reward_growths_outside=(1, 2, 3))
        update = TickUpdate.from_tick(tick)
        assert update.liquidity_net == -7
        assert update.reward_growths_outside == (1, 2, 3)


class TestTickPredicates:
    def test_out_of_bounds(self):
        assert check_is_out_of_bounds(MAX_TICK_INDEX + 1)
        assert check_is_out_of_bounds(MIN_TICK_INDEX - 1)
        assert not check_is_out_of_bounds(MAX_TICK_INDEX)
        assert not check_is_out_of_bounds(MIN_TICK_INDEX)

    def test_usable_tick_requires_multiple_of_spacing(self):
        assert check_is_usable_tick(16, 8)
        assert check_is_usable_tick(-16, 8)
        assert not check_is_usable_tick(12, 8)
        assert not check_is_usable_tick(0, 0)
        assert not check_is_usable_tick(MAX_TICK_INDEX + 1, 1)

    def test_bound_tick_index(self):
        assert bound_tick_index(MAX_TICK_INDEX + 10) == MAX_TICK_INDEX
        assert bound_tick_index(MIN_TICK_INDEX - 10) == MIN_TICK_INDEX
        assert bound_tick_index(42) == 42

    def test_min_tick_array_start_index(self):
        assert min_tick_array_start_index(1) == -443696
        assert min_tick_array_start_index(64) == -444928

    @pytest.mark.parametrize(
        "start_tick_index, tick_spacing, expected",
        [
            (0, 1, True),
            (88, 1, True),
            (-88, 1, True),
            (44, 1, False),
            (704, 8, True),
            (88, 8, False),
            (MIN_TICK_INDEX, 1, True),
            (-443696, 1, True),
            (-443784, 1, False),
            (443608, 1, True),
            (443696, 1, False),
            (0, 0, False),
        ],
    )
    def test_valid_start_tick(self, start_tick_index, tick_spacing, expected):
        assert check_is_valid_start_tick(start_tick_index, tick_spacing) is expected
