from __future__ import annotations

import time

from clmm_swap.application.dto.swap import SwapOutput
from clmm_swap.application.ports.swap_state_port import SwapStatePort
from clmm_swap.domain.entities.swap import PostSwapUpdate, TokenTransfer
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import (
    AmountInAboveMaximumError,
    AmountOutBelowMinimumError,
    TickArrayNotFoundError,
    WhirlpoolNotFoundError,
)
from clmm_swap.domain.services.swap_manager import swap
from clmm_swap.domain.services.tick_array_addressing import get_tick_array_start_indices
from clmm_swap.domain.services.tick_array_sequence import MAX_TICK_ARRAYS_PER_SWAP, SwapTickSequence
from clmm_swap.domain.services.tick_math import MAX_SQRT_PRICE_X64, MIN_SQRT_PRICE_X64


def now_timestamp() -> int:
    return int(time.time())


def resolve_sqrt_price_limit(sqrt_price_limit: int | None, *, a_to_b: bool) -> int:
    if sqrt_price_limit is not None:
        return sqrt_price_limit
    return MIN_SQRT_PRICE_X64 if a_to_b else MAX_SQRT_PRICE_X64


def load_whirlpool(*, swap_state_port: SwapStatePort, address: str) -> Whirlpool:
    whirlpool = swap_state_port.get_whirlpool(address=address)
    if whirlpool is None:
        raise WhirlpoolNotFoundError("Whirlpool not found.", context={"whirlpool": address})
    return whirlpool


def load_swap_tick_sequence(
    *,
    swap_state_port: SwapStatePort,
    whirlpool: Whirlpool,
    a_to_b: bool,
    tick_arrays_per_swap: int = MAX_TICK_ARRAYS_PER_SWAP,
) -> SwapTickSequence:
    start_indices = get_tick_array_start_indices(
        whirlpool.tick_current_index,
        whirlpool.tick_spacing,
        a_to_b,
        count=tick_arrays_per_swap,
    )
    loaded = swap_state_port.get_tick_arrays(whirlpool=whirlpool.address, start_tick_indices=start_indices)

    # only the leading run of existing arrays is contiguous
    tick_arrays = []
    for tick_array in loaded:
        if tick_array is None:
            break
        tick_arrays.append(tick_array)

    if not tick_arrays:
        raise TickArrayNotFoundError(
            "Tick array for the current tick not found.",
            context={"whirlpool": whirlpool.address, "start_tick_indices": start_indices},
        )
    return SwapTickSequence(tick_arrays)


def run_swap(
    *,
    swap_state_port: SwapStatePort,
    whirlpool: Whirlpool,
    amount: int,
    sqrt_price_limit: int | None,
    amount_specified_is_input: bool,
    a_to_b: bool,
    timestamp: int | None = None,
    tick_arrays_per_swap: int = MAX_TICK_ARRAYS_PER_SWAP,
) -> PostSwapUpdate:
    swap_tick_sequence = load_swap_tick_sequence(
        swap_state_port=swap_state_port,
        whirlpool=whirlpool,
        a_to_b=a_to_b,
        tick_arrays_per_swap=tick_arrays_per_swap,
    )
    return swap(
        whirlpool=whirlpool,
        swap_tick_sequence=swap_tick_sequence,
        amount=amount,
        sqrt_price_limit=resolve_sqrt_price_limit(sqrt_price_limit, a_to_b=a_to_b),
        amount_specified_is_input=amount_specified_is_input,
        a_to_b=a_to_b,
        timestamp=timestamp if timestamp is not None else now_timestamp(),
    )


def check_other_amount_threshold(
    *,
    amount_in: int,
    amount_out: int,
    other_amount_threshold: int,
    amount_specified_is_input: bool,
) -> None:
    if amount_specified_is_input:
        if amount_out < other_amount_threshold:
            raise AmountOutBelowMinimumError(
                "Output amount is below other_amount_threshold.",
                context={"amount_out": amount_out, "other_amount_threshold": other_amount_threshold},
            )
    elif amount_in > other_amount_threshold:
        raise AmountInAboveMaximumError(
            "Input amount is above other_amount_threshold.",
            context={"amount_in": amount_in, "other_amount_threshold": other_amount_threshold},
        )


def build_transfers(
    *,
    whirlpool: Whirlpool,
    update: PostSwapUpdate,
    a_to_b: bool,
    token_owner_account_a: str,
    token_owner_account_b: str,
) -> list[TokenTransfer]:
    """Input leg (owner -> vault) first, output leg (vault -> owner) second."""
    leg_a = (token_owner_account_a, whirlpool.token_vault_a)
    leg_b = (whirlpool.token_vault_b, token_owner_account_b)
    if not a_to_b:
        leg_a = leg_a[::-1]
        leg_b = leg_b[::-1]

    transfer_a = TokenTransfer(
        whirlpool=whirlpool.address,
        mint=whirlpool.token_mint_a,
        source=leg_a[0],
        destination=leg_a[1],
        amount=update.amount_a,
    )
    transfer_b = TokenTransfer(
        whirlpool=whirlpool.address,
        mint=whirlpool.token_mint_b,
        source=leg_b[0],
        destination=leg_b[1],
        amount=update.amount_b,
    )
    return [transfer_a, transfer_b] if a_to_b else [transfer_b, transfer_a]


def build_swap_output(
    *,
    whirlpool: Whirlpool,
    update: PostSwapUpdate,
    a_to_b: bool,
    transfers: list[TokenTransfer] | None = None,
) -> SwapOutput:
    return SwapOutput(
        whirlpool_address=whirlpool.address,
        a_to_b=a_to_b,
        amount_a=update.amount_a,
        amount_b=update.amount_b,
        amount_in=update.amount_in(a_to_b=a_to_b),
        amount_out=update.amount_out(a_to_b=a_to_b),
        sqrt_price=update.next_sqrt_price,
        tick_current_index=update.next_tick_index,
        liquidity=update.next_liquidity,
        transfers=list(transfers or []),
    )
