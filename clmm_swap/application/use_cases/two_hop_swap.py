from __future__ import annotations

import logging

from clmm_swap.application.dto.swap import SwapCommit
from clmm_swap.application.dto.two_hop_swap import TwoHopSwapInput, TwoHopSwapOutput
from clmm_swap.application.ports.swap_state_port import SwapStatePort
from clmm_swap.application.use_cases.swap_common import (
    build_swap_output,
    build_transfers,
    check_other_amount_threshold,
    load_whirlpool,
    now_timestamp,
    run_swap,
)
from clmm_swap.domain.entities.swap import PostSwapUpdate
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import DuplicateTwoHopPoolError, InvalidIntermediaryMintError
from clmm_swap.domain.services.tick_array_sequence import MAX_TICK_ARRAYS_PER_SWAP


logger = logging.getLogger(__name__)


class TwoHopSwapUseCase:
    """Route one trade through two pools sharing an intermediary mint.

    Input-denominated trades run hop one first and feed its output into
    hop two. Output-denominated trades run hop two first and ask hop one
    for exactly the amount hop two needs.
    """

    def __init__(self, *, swap_state_port: SwapStatePort, tick_arrays_per_swap: int = MAX_TICK_ARRAYS_PER_SWAP):
        self._swap_state_port = swap_state_port
        self._tick_arrays_per_swap = tick_arrays_per_swap

    def execute(self, command: TwoHopSwapInput) -> TwoHopSwapOutput:
        if command.whirlpool_one == command.whirlpool_two:
            raise DuplicateTwoHopPoolError(
                "Two-hop swap requires two distinct whirlpools.",
                context={"whirlpool": command.whirlpool_one},
            )

        whirlpool_one = load_whirlpool(swap_state_port=self._swap_state_port, address=command.whirlpool_one)
        whirlpool_two = load_whirlpool(swap_state_port=self._swap_state_port, address=command.whirlpool_two)

        intermediary_out = whirlpool_one.output_mint(a_to_b=command.a_to_b_one)
        intermediary_in = whirlpool_two.input_mint(a_to_b=command.a_to_b_two)
        if intermediary_out != intermediary_in:
            raise InvalidIntermediaryMintError(
                "Hop one output mint does not match hop two input mint.",
                context={"hop_one_output_mint": intermediary_out, "hop_two_input_mint": intermediary_in},
            )

        timestamp = command.timestamp if command.timestamp is not None else now_timestamp()

        if command.amount_specified_is_input:
            update_one = self._run_hop(whirlpool_one, command.amount, command, hop=1, timestamp=timestamp)
            update_two = self._run_hop(
                whirlpool_two,
                update_one.amount_out(a_to_b=command.a_to_b_one),
                command,
                hop=2,
                timestamp=timestamp,
            )
        else:
            update_two = self._run_hop(whirlpool_two, command.amount, command, hop=2, timestamp=timestamp)
            update_one = self._run_hop(
                whirlpool_one,
                update_two.amount_in(a_to_b=command.a_to_b_two),
                command,
                hop=1,
                timestamp=timestamp,
            )

        amount_in = update_one.amount_in(a_to_b=command.a_to_b_one)
        amount_out = update_two.amount_out(a_to_b=command.a_to_b_two)
        check_other_amount_threshold(
            amount_in=amount_in,
            amount_out=amount_out,
            other_amount_threshold=command.other_amount_threshold,
            amount_specified_is_input=command.amount_specified_is_input,
        )

        transfers_one = build_transfers(
            whirlpool=whirlpool_one,
            update=update_one,
            a_to_b=command.a_to_b_one,
            token_owner_account_a=command.token_owner_account_one_a,
            token_owner_account_b=command.token_owner_account_one_b,
        )
        transfers_two = build_transfers(
            whirlpool=whirlpool_two,
            update=update_two,
            a_to_b=command.a_to_b_two,
            token_owner_account_a=command.token_owner_account_two_a,
            token_owner_account_b=command.token_owner_account_two_b,
        )
        self._swap_state_port.commit_swaps(
            commits=[
                SwapCommit(whirlpool=whirlpool_one, update=update_one, transfers=transfers_one),
                SwapCommit(whirlpool=whirlpool_two, update=update_two, transfers=transfers_two),
            ]
        )
        logger.info(
            "two_hop_swap_use_case: committed whirlpool_one=%s whirlpool_two=%s amount_in=%s amount_out=%s",
            whirlpool_one.address,
            whirlpool_two.address,
            amount_in,
            amount_out,
        )

        return TwoHopSwapOutput(
            hop_one=build_swap_output(
                whirlpool=whirlpool_one, update=update_one, a_to_b=command.a_to_b_one, transfers=transfers_one
            ),
            hop_two=build_swap_output(
                whirlpool=whirlpool_two, update=update_two, a_to_b=command.a_to_b_two, transfers=transfers_two
            ),
            amount_in=amount_in,
            amount_out=amount_out,
        )

    def _run_hop(
        self, whirlpool: Whirlpool, amount: int, command: TwoHopSwapInput, *, hop: int, timestamp: int
    ) -> PostSwapUpdate:
        a_to_b = command.a_to_b_one if hop == 1 else command.a_to_b_two
        sqrt_price_limit = command.sqrt_price_limit_one if hop == 1 else command.sqrt_price_limit_two
        return run_swap(
            swap_state_port=self._swap_state_port,
            whirlpool=whirlpool,
            amount=amount,
            sqrt_price_limit=sqrt_price_limit,
            amount_specified_is_input=command.amount_specified_is_input,
            a_to_b=a_to_b,
            timestamp=timestamp,
            tick_arrays_per_swap=self._tick_arrays_per_swap,
        )
