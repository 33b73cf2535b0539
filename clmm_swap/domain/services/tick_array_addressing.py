from __future__ import annotations

from clmm_swap.domain.entities.tick import MAX_TICK_INDEX, TICK_ARRAY_SIZE, min_tick_array_start_index
from clmm_swap.domain.exceptions import InvalidTickSpacingError
from clmm_swap.domain.services.tick_array_sequence import MAX_TICK_ARRAYS_PER_SWAP


def get_start_tick_index(tick_index: int, tick_spacing: int, offset: int = 0) -> int:
    """Start tick of the array holding `tick_index`, moved by `offset` arrays."""
    if tick_spacing <= 0:
        raise InvalidTickSpacingError("tick_spacing must be positive.")
    ticks_in_array = TICK_ARRAY_SIZE * tick_spacing
    return (tick_index // ticks_in_array + offset) * ticks_in_array


def is_start_tick_in_range(start_tick_index: int, tick_spacing: int) -> bool:
    return min_tick_array_start_index(tick_spacing) <= start_tick_index <= MAX_TICK_INDEX


def get_tick_array_start_indices(
    tick_current_index: int,
    tick_spacing: int,
    a_to_b: bool,
    count: int = MAX_TICK_ARRAYS_PER_SWAP,
) -> list[int]:
    """Start ticks of the arrays a swap from `tick_current_index` walks through, in order."""
    if count < 1 or count > MAX_TICK_ARRAYS_PER_SWAP:
        raise ValueError(f"count must be between 1 and {MAX_TICK_ARRAYS_PER_SWAP}.")

    # b_to_a searches start one spacing to the right, see TickArray.in_search_range
    shift = 0 if a_to_b else tick_spacing
    step = -1 if a_to_b else 1

    start_indices: list[int] = []
    for offset in range(count):
        start_tick_index = get_start_tick_index(tick_current_index + shift, tick_spacing, offset * step)
        if not is_start_tick_in_range(start_tick_index, tick_spacing):
            break
        start_indices.append(start_tick_index)
    return start_indices
