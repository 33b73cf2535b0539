from __future__ import annotations

import logging
from collections.abc import Callable

from clmm_swap.domain.entities.swap import PostSwapUpdate, SwapStepComputation
from clmm_swap.domain.entities.tick import TICK_ARRAY_SIZE, Tick
from clmm_swap.domain.entities.whirlpool import Whirlpool
from clmm_swap.domain.exceptions import (
    AmountCalcOverflowError,
    AmountRemainingOverflowError,
    DomainError,
    InvalidSqrtPriceLimitDirectionError,
    SqrtPriceOutOfBoundsError,
    ZeroTradableAmountError,
)
from clmm_swap.domain.services.liquidity_math import add_liquidity_delta
from clmm_swap.domain.services.swap_math import compute_swap
from clmm_swap.domain.services.tick_array_sequence import SwapTickSequence
from clmm_swap.domain.services.tick_math import (
    MAX_SQRT_PRICE_X64,
    MIN_SQRT_PRICE_X64,
    sqrt_price_from_tick_index,
    tick_index_from_sqrt_price,
)
from clmm_swap.domain.services.token_math import U64_MAX


ComputeSwapStep = Callable[[int, int, int, int, int, bool, bool], SwapStepComputation]

logger = logging.getLogger(__name__)


def swap(
    *,
    whirlpool: Whirlpool,
    swap_tick_sequence: SwapTickSequence,
    amount: int,
    sqrt_price_limit: int,
    amount_specified_is_input: bool,
    a_to_b: bool,
    timestamp: int,
    compute_swap_step: ComputeSwapStep = compute_swap,
) -> PostSwapUpdate:
    """Walk the price curve of `whirlpool` until `amount` is filled or the limit is hit.

    `timestamp` is accepted for the caller's bookkeeping and is not read here.
    Nothing is persisted; the caller applies the returned update.
    """
    _ = timestamp

    if sqrt_price_limit < MIN_SQRT_PRICE_X64 or sqrt_price_limit > MAX_SQRT_PRICE_X64:
        raise SqrtPriceOutOfBoundsError(
            "sqrt_price_limit is outside the supported range.",
            context={"sqrt_price_limit": sqrt_price_limit},
        )

    if (a_to_b and sqrt_price_limit > whirlpool.sqrt_price) or (
        not a_to_b and sqrt_price_limit < whirlpool.sqrt_price
    ):
        raise InvalidSqrtPriceLimitDirectionError(
            "sqrt_price_limit is on the wrong side of the current price.",
            context={"sqrt_price_limit": sqrt_price_limit, "sqrt_price": whirlpool.sqrt_price, "a_to_b": a_to_b},
        )

    if amount == 0:
        raise ZeroTradableAmountError("amount must be greater than zero.")

    tick_spacing = whirlpool.tick_spacing
    fee_rate = whirlpool.fee_rate

    amount_remaining = amount
    amount_calculated = 0
    curr_sqrt_price = whirlpool.sqrt_price
    curr_tick_index = whirlpool.tick_current_index
    curr_liquidity = whirlpool.liquidity
    curr_array_index = 0

    while amount_remaining > 0 and sqrt_price_limit != curr_sqrt_price:
        next_array_index, next_tick_index = swap_tick_sequence.get_next_initialized_tick_index(
            curr_tick_index,
            tick_spacing,
            a_to_b,
            curr_array_index,
        )

        next_tick_sqrt_price, sqrt_price_target = _get_next_sqrt_prices(
            next_tick_index,
            sqrt_price_limit,
            a_to_b,
        )

        step = compute_swap_step(
            amount_remaining,
            fee_rate,
            curr_liquidity,
            curr_sqrt_price,
            sqrt_price_target,
            amount_specified_is_input,
            a_to_b,
        )

        if amount_specified_is_input:
            amount_remaining = _checked_sub(amount_remaining, step.amount_in)
            amount_remaining = _checked_sub(amount_remaining, step.fee_amount)
            amount_calculated = _checked_add(amount_calculated, step.amount_out)
        else:
            amount_remaining = _checked_sub(amount_remaining, step.amount_out)
            amount_calculated = _checked_add(amount_calculated, step.amount_in)
            amount_calculated = _checked_add(amount_calculated, step.fee_amount)

        if step.next_price == next_tick_sqrt_price:
            next_tick = _get_tick_or_none(swap_tick_sequence, next_array_index, next_tick_index, tick_spacing)
            if next_tick is not None and next_tick.initialized:
                curr_liquidity = _calculate_update(next_tick, a_to_b, curr_liquidity)
                logger.debug(
                    "swap_manager: crossed tick=%s liquidity=%s a_to_b=%s",
                    next_tick_index,
                    curr_liquidity,
                    a_to_b,
                )

            tick_offset = swap_tick_sequence.get_tick_offset(next_array_index, next_tick_index, tick_spacing)

            # move to the next array when the crossed tick is its leading edge
            if (a_to_b and tick_offset == 0) or (not a_to_b and tick_offset == TICK_ARRAY_SIZE - 1):
                curr_array_index = next_array_index + 1
            else:
                curr_array_index = next_array_index

            # a_to_b searches are inclusive of the start tick
            curr_tick_index = next_tick_index - 1 if a_to_b else next_tick_index
        elif step.next_price != curr_sqrt_price:
            curr_tick_index = tick_index_from_sqrt_price(step.next_price)

        curr_sqrt_price = step.next_price

    if a_to_b == amount_specified_is_input:
        amount_a, amount_b = amount - amount_remaining, amount_calculated
    else:
        amount_a, amount_b = amount_calculated, amount - amount_remaining

    return PostSwapUpdate(
        amount_a=amount_a,
        amount_b=amount_b,
        next_liquidity=curr_liquidity,
        next_tick_index=curr_tick_index,
        next_sqrt_price=curr_sqrt_price,
    )


def _get_tick_or_none(
    swap_tick_sequence: SwapTickSequence,
    array_index: int,
    tick_index: int,
    tick_spacing: int,
) -> Tick | None:
    try:
        return swap_tick_sequence.get_tick(array_index, tick_index, tick_spacing)
    except DomainError:
        # edge ticks that are not stored anywhere carry no liquidity
        return None


def _calculate_update(tick: Tick, a_to_b: bool, liquidity: int) -> int:
    signed_liquidity_net = -tick.liquidity_net if a_to_b else tick.liquidity_net
    return add_liquidity_delta(liquidity, signed_liquidity_net)


def _get_next_sqrt_prices(next_tick_index: int, sqrt_price_limit: int, a_to_b: bool) -> tuple[int, int]:
    next_tick_price = sqrt_price_from_tick_index(next_tick_index)
    if a_to_b:
        next_sqrt_price_limit = max(sqrt_price_limit, next_tick_price)
    else:
        next_sqrt_price_limit = min(sqrt_price_limit, next_tick_price)
    return next_tick_price, next_sqrt_price_limit


def _checked_sub(amount_remaining: int, value: int) -> int:
    result = amount_remaining - value
    if result < 0:
        raise AmountRemainingOverflowError(
            "amount remaining underflowed.",
            context={"amount_remaining": amount_remaining, "value": value},
        )
    return result


def _checked_add(amount_calculated: int, value: int) -> int:
    result = amount_calculated + value
    if result > U64_MAX:
        raise AmountCalcOverflowError(
            "amount calculated overflowed 64 bits.",
            context={"amount_calculated": amount_calculated, "value": value},
        )
    return result
