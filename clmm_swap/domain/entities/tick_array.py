from __future__ import annotations

from dataclasses import dataclass, field

from clmm_swap.domain.entities.tick import (
    MAX_TICK_INDEX,
    MIN_TICK_INDEX,
    TICK_ARRAY_SIZE,
    Tick,
    TickUpdate,
    check_is_usable_tick,
    check_is_valid_start_tick,
)
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import (
    InvalidStartTickError,
    InvalidTickArraySequenceError,
    InvalidTickSpacingError,
    TickNotFoundError,
)


DEFAULT_PUBKEY = "11111111111111111111111111111111"


def _default_ticks() -> list[Tick]:
    return [Tick() for _ in range(TICK_ARRAY_SIZE)]


@dataclass
class TickArray:
    """88 contiguous ticks of one pool, starting at `start_tick_index`."""

    start_tick_index: int = 0
    ticks: list[Tick] = field(default_factory=_default_ticks)
    whirlpool: str = DEFAULT_PUBKEY

    def __post_init__(self) -> None:
        if len(self.ticks) != TICK_ARRAY_SIZE:
            raise ValueError(f"TickArray must hold exactly {TICK_ARRAY_SIZE} ticks.")

    def initialize(self, whirlpool: Whirlpool, start_tick_index: int) -> None:
        if not check_is_valid_start_tick(start_tick_index, whirlpool.tick_spacing):
            raise InvalidStartTickError(
                "start_tick_index is not a valid start tick for this tick spacing.",
                context={"start_tick_index": start_tick_index, "tick_spacing": whirlpool.tick_spacing},
            )
        self.whirlpool = whirlpool.address
        self.start_tick_index = start_tick_index

    def get_next_init_tick_index(self, tick_index: int, tick_spacing: int, a_to_b: bool) -> int | None:
        """Search this array for the next initialized tick.

        a_to_b searches move left and include the starting tick; b_to_a searches
        move right and start one slot past it. Returns None when the array holds
        no initialized tick in that direction.
        """
        if not self.in_search_range(tick_index, tick_spacing, not a_to_b):
            raise InvalidTickArraySequenceError(
                "tick_index is outside the search range of this tick array.",
                context={"tick_index": tick_index, "start_tick_index": self.start_tick_index},
            )

        curr_offset = self.tick_offset(tick_index, tick_spacing)
        if not a_to_b:
            curr_offset += 1

        while 0 <= curr_offset < TICK_ARRAY_SIZE:
            if self.ticks[curr_offset].initialized:
                return curr_offset * tick_spacing + self.start_tick_index
            curr_offset = curr_offset - 1 if a_to_b else curr_offset + 1

        return None

    def get_tick(self, tick_index: int, tick_spacing: int) -> Tick:
        if not self.check_in_array_bounds(tick_index, tick_spacing) or not check_is_usable_tick(
            tick_index, tick_spacing
        ):
            raise TickNotFoundError(
                "Tick not found in tick array.",
                context={"tick_index": tick_index, "start_tick_index": self.start_tick_index},
            )
        offset = self.tick_offset(tick_index, tick_spacing)
        if offset < 0:
            raise TickNotFoundError("Tick not found in tick array.", context={"tick_index": tick_index})
        return self.ticks[offset]

    def update_tick(self, tick_index: int, tick_spacing: int, update: TickUpdate) -> None:
        self.get_tick(tick_index, tick_spacing).update(update)

    def in_search_range(self, tick_index: int, tick_spacing: int, shifted: bool) -> bool:
        """Range check on [start, start + 88 * spacing), moved left one spacing when shifted.

        b_to_a searches use the shifted range: the last tick of the previous
        array searches into this one and this array's last tick searches into
        the next.
        """
        lower = self.start_tick_index
        upper = self.start_tick_index + TICK_ARRAY_SIZE * tick_spacing
        if shifted:
            lower -= tick_spacing
            upper -= tick_spacing
        return lower <= tick_index < upper

    def check_in_array_bounds(self, tick_index: int, tick_spacing: int) -> bool:
        return self.in_search_range(tick_index, tick_spacing, False)

    def is_min_tick_array(self) -> bool:
        return self.start_tick_index <= MIN_TICK_INDEX

    def is_max_tick_array(self, tick_spacing: int) -> bool:
        return self.start_tick_index + TICK_ARRAY_SIZE * tick_spacing > MAX_TICK_INDEX

    def tick_offset(self, tick_index: int, tick_spacing: int) -> int:
        if tick_spacing == 0:
            raise InvalidTickSpacingError("tick_spacing must be non-zero.")
        return (tick_index - self.start_tick_index) // tick_spacing
