from __future__ import annotations

from collections.abc import Sequence

from clmm_swap.domain.entities.tick import MAX_TICK_INDEX, MIN_TICK_INDEX, TICK_ARRAY_SIZE, Tick, TickUpdate
from clmm_swap.domain.entities.tick_array import TickArray
from clmm_swap.domain.exceptions import TickArrayIndexOutofBoundsError, TickArraySequenceInvalidIndexError


MAX_TICK_ARRAYS_PER_SWAP = 3


class SwapTickSequence:
    """Up to three adjacent tick arrays, ordered in the direction of the swap."""

    def __init__(self, tick_arrays: Sequence[TickArray]):
        if not tick_arrays:
            raise ValueError("SwapTickSequence needs at least one tick array.")
        if len(tick_arrays) > MAX_TICK_ARRAYS_PER_SWAP:
            raise ValueError(f"SwapTickSequence accepts at most {MAX_TICK_ARRAYS_PER_SWAP} tick arrays.")
        self._arrays = list(tick_arrays)

    def __len__(self) -> int:
        return len(self._arrays)

    @property
    def tick_arrays(self) -> list[TickArray]:
        return list(self._arrays)

    def _array(self, array_index: int) -> TickArray:
        if array_index < 0 or array_index >= len(self._arrays):
            raise TickArrayIndexOutofBoundsError(
                "tick array index is outside the sequence.",
                context={"array_index": array_index, "length": len(self._arrays)},
            )
        return self._arrays[array_index]

    def get_tick(self, array_index: int, tick_index: int, tick_spacing: int) -> Tick:
        return self._array(array_index).get_tick(tick_index, tick_spacing)

    def update_tick(self, array_index: int, tick_index: int, tick_spacing: int, update: TickUpdate) -> None:
        self._array(array_index).update_tick(tick_index, tick_spacing, update)

    def get_tick_offset(self, array_index: int, tick_index: int, tick_spacing: int) -> int:
        return self._array(array_index).tick_offset(tick_index, tick_spacing)

    def get_next_initialized_tick_index(
        self,
        tick_index: int,
        tick_spacing: int,
        a_to_b: bool,
        start_array_index: int,
    ) -> tuple[int, int]:
        """Return (array_index, tick_index) of the next initialized tick.

        When no initialized tick is left, the edge of the price range or the
        edge of the last loaded array is returned so the swap can still move
        the price up to it.
        """
        ticks_in_array = TICK_ARRAY_SIZE * tick_spacing
        search_index = tick_index
        array_index = start_array_index

        while True:
            if array_index < 0 or array_index >= len(self._arrays):
                raise TickArraySequenceInvalidIndexError(
                    "next initialized tick search ran past the tick array sequence.",
                    context={"array_index": array_index, "length": len(self._arrays)},
                )
            next_array = self._arrays[array_index]

            next_index = next_array.get_next_init_tick_index(search_index, tick_spacing, a_to_b)
            if next_index is not None:
                return array_index, next_index

            if a_to_b and next_array.is_min_tick_array():
                return array_index, MIN_TICK_INDEX
            if not a_to_b and next_array.is_max_tick_array(tick_spacing):
                return array_index, MAX_TICK_INDEX

            if array_index + 1 == len(self._arrays):
                if a_to_b:
                    return array_index, next_array.start_tick_index
                return array_index, next_array.start_tick_index + (TICK_ARRAY_SIZE - 1) * tick_spacing

            if a_to_b:
                search_index = next_array.start_tick_index - 1
            else:
                search_index = next_array.start_tick_index + ticks_in_array - 1
            array_index += 1
