from __future__ import annotations

from dataclasses import dataclass, field


# Max & min tick index from sqrt(1.0001) and the supported price range 2^-64 .. 2^64
MAX_TICK_INDEX = 443636
MIN_TICK_INDEX = -443636

TICK_ARRAY_SIZE = 88
NUM_REWARDS = 3


def _zero_rewards() -> tuple[int, ...]:
    return (0,) * NUM_REWARDS


@dataclass(frozen=True)
class TickUpdate:
    initialized: bool = False
    liquidity_net: int = 0
    liquidity_gross: int = 0
    fee_growth_outside_a: int = 0
    fee_growth_outside_b: int = 0
    reward_growths_outside: tuple[int, ...] = field(default_factory=_zero_rewards)

    @classmethod
    def from_tick(cls, tick: "Tick") -> "TickUpdate":
        return cls(
            initialized=tick.initialized,
            liquidity_net=tick.liquidity_net,
            liquidity_gross=tick.liquidity_gross,
            fee_growth_outside_a=tick.fee_growth_outside_a,
            fee_growth_outside_b=tick.fee_growth_outside_b,
            reward_growths_outside=tick.reward_growths_outside,
        )


@dataclass
class Tick:
    """One price point of a tick array.

    The default value is an uninitialized tick. Growth accumulators are Q64.64.
    """

    initialized: bool = False
    liquidity_net: int = 0
    liquidity_gross: int = 0
    fee_growth_outside_a: int = 0
    fee_growth_outside_b: int = 0
    reward_growths_outside: tuple[int, ...] = field(default_factory=_zero_rewards)

    def update(self, update: TickUpdate) -> None:
        """Apply a staged update; every field is replaced at once."""
        if len(update.reward_growths_outside) != NUM_REWARDS:
            raise ValueError(f"reward_growths_outside must have {NUM_REWARDS} entries.")
        self.initialized = update.initialized
        self.liquidity_net = update.liquidity_net
        self.liquidity_gross = update.liquidity_gross
        self.fee_growth_outside_a = update.fee_growth_outside_a
        self.fee_growth_outside_b = update.fee_growth_outside_b
        self.reward_growths_outside = tuple(update.reward_growths_outside)


def _rem(lhs: int, rhs: int) -> int:
    # remainder with the sign of the dividend
    r = abs(lhs) % abs(rhs)
    return -r if lhs < 0 else r


def check_is_out_of_bounds(tick_index: int) -> bool:
    return tick_index > MAX_TICK_INDEX or tick_index < MIN_TICK_INDEX


def min_tick_array_start_index(tick_spacing: int) -> int:
    ticks_in_array = TICK_ARRAY_SIZE * tick_spacing
    return MIN_TICK_INDEX - (_rem(MIN_TICK_INDEX, ticks_in_array) + ticks_in_array)


def check_is_valid_start_tick(tick_index: int, tick_spacing: int) -> bool:
    """A start tick is a multiple of the ticks covered by one array.

    The left-edge array may start below the min tick index; both that start and
    the min tick index itself are accepted for it. An array started at the min
    tick index only lines up with usable ticks when the spacing divides 443636.
    """
    ticks_in_array = TICK_ARRAY_SIZE * tick_spacing
    if ticks_in_array == 0:
        return False

    if tick_index == MIN_TICK_INDEX:
        return True

    if check_is_out_of_bounds(tick_index):
        if tick_index > MIN_TICK_INDEX:
            return False
        return tick_index == min_tick_array_start_index(tick_spacing)

    return tick_index % ticks_in_array == 0


def check_is_usable_tick(tick_index: int, tick_spacing: int) -> bool:
    if check_is_out_of_bounds(tick_index) or tick_spacing == 0:
        return False
    return tick_index % tick_spacing == 0


def bound_tick_index(tick_index: int) -> int:
    return max(MIN_TICK_INDEX, min(MAX_TICK_INDEX, tick_index))
