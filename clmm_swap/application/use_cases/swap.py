from __future__ import annotations

import logging

from clmm_swap.application.dto.swap import SwapCommit, SwapInput, SwapOutput
from clmm_swap.application.ports.swap_state_port import SwapStatePort
from clmm_swap.application.use_cases.swap_common import (
    build_swap_output,
    build_transfers,
    check_other_amount_threshold,
    load_whirlpool,
    run_swap,
)
from clmm_swap.domain.services.tick_array_sequence import MAX_TICK_ARRAYS_PER_SWAP


logger = logging.getLogger(__name__)


class SwapUseCase:
    def __init__(self, *, swap_state_port: SwapStatePort, tick_arrays_per_swap: int = MAX_TICK_ARRAYS_PER_SWAP):
        self._swap_state_port = swap_state_port
        self._tick_arrays_per_swap = tick_arrays_per_swap

    def execute(self, command: SwapInput) -> SwapOutput:
        whirlpool = load_whirlpool(swap_state_port=self._swap_state_port, address=command.whirlpool_address)

        update = run_swap(
            swap_state_port=self._swap_state_port,
            whirlpool=whirlpool,
            amount=command.amount,
            sqrt_price_limit=command.sqrt_price_limit,
            amount_specified_is_input=command.amount_specified_is_input,
            a_to_b=command.a_to_b,
            timestamp=command.timestamp,
            tick_arrays_per_swap=self._tick_arrays_per_swap,
        )

        check_other_amount_threshold(
            amount_in=update.amount_in(a_to_b=command.a_to_b),
            amount_out=update.amount_out(a_to_b=command.a_to_b),
            other_amount_threshold=command.other_amount_threshold,
            amount_specified_is_input=command.amount_specified_is_input,
        )

        transfers = build_transfers(
            whirlpool=whirlpool,
            update=update,
            a_to_b=command.a_to_b,
            token_owner_account_a=command.token_owner_account_a,
            token_owner_account_b=command.token_owner_account_b,
        )
        self._swap_state_port.commit_swaps(
            commits=[SwapCommit(whirlpool=whirlpool, update=update, transfers=transfers)]
        )
        logger.info(
            "swap_use_case: committed whirlpool=%s a_to_b=%s amount_a=%s amount_b=%s tick=%s",
            whirlpool.address,
            command.a_to_b,
            update.amount_a,
            update.amount_b,
            update.next_tick_index,
        )
        return build_swap_output(whirlpool=whirlpool, update=update, a_to_b=command.a_to_b, transfers=transfers)
