from __future__ import annotations

from clmm_swap.application.dto.swap import QuoteSwapInput, SwapOutput
from clmm_swap.application.ports.swap_state_port import SwapStatePort
from clmm_swap.application.use_cases.swap_common import build_swap_output, load_whirlpool, run_swap
from clmm_swap.domain.services.tick_array_sequence import MAX_TICK_ARRAYS_PER_SWAP


class QuoteSwapUseCase:
    def __init__(self, *, swap_state_port: SwapStatePort, tick_arrays_per_swap: int = MAX_TICK_ARRAYS_PER_SWAP):
        self._swap_state_port = swap_state_port
        self._tick_arrays_per_swap = tick_arrays_per_swap

    def execute(self, command: QuoteSwapInput) -> SwapOutput:
        whirlpool = load_whirlpool(swap_state_port=self._swap_state_port, address=command.whirlpool_address)
        update = run_swap(
            swap_state_port=self._swap_state_port,
            whirlpool=whirlpool,
            amount=command.amount,
            sqrt_price_limit=command.sqrt_price_limit,
            amount_specified_is_input=command.amount_specified_is_input,
            a_to_b=command.a_to_b,
            tick_arrays_per_swap=self._tick_arrays_per_swap,
        )
        return build_swap_output(whirlpool=whirlpool, update=update, a_to_b=command.a_to_b)
