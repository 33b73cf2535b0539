from __future__ import annotations

from clmm_swap.domain.entities.swap import SwapStepComputation
from clmm_swap.domain.exceptions import NumberDownCastError
from clmm_swap.domain.services.token_math import (
    U64_MAX,
    checked_mul_div,
    get_amount_delta_a,
    get_amount_delta_b,
    get_next_sqrt_price,
)


FEE_RATE_MUL_VALUE = 1_000_000


def compute_swap(
    amount_remaining: int,
    fee_rate: int,
    liquidity: int,
    sqrt_price_current: int,
    sqrt_price_target: int,
    amount_specified_is_input: bool,
    a_to_b: bool,
) -> SwapStepComputation:
    """Compute one swap step from the current price towards the target price.

    The step either reaches `sqrt_price_target` or exhausts `amount_remaining`
    somewhere before it.
    """
    amount_fixed_delta = _get_amount_fixed_delta(
        sqrt_price_current,
        sqrt_price_target,
        liquidity,
        amount_specified_is_input,
        a_to_b,
    )

    amount_calc = amount_remaining
    if amount_specified_is_input:
        amount_calc = checked_mul_div(
            amount_remaining,
            FEE_RATE_MUL_VALUE - fee_rate,
            FEE_RATE_MUL_VALUE,
        )
        if amount_calc > U64_MAX:
            raise NumberDownCastError("amount less fee does not fit in 64 bits.")

    if amount_calc >= amount_fixed_delta:
        next_sqrt_price = sqrt_price_target
    else:
        next_sqrt_price = get_next_sqrt_price(
            sqrt_price_current,
            liquidity,
            amount_calc,
            amount_specified_is_input,
            a_to_b,
        )

    is_max_swap = next_sqrt_price == sqrt_price_target

    amount_unfixed_delta = _get_amount_unfixed_delta(
        sqrt_price_current,
        next_sqrt_price,
        liquidity,
        amount_specified_is_input,
        a_to_b,
    )

    # the fixed side was sized against the target; resize it for a partial step
    if not is_max_swap:
        amount_fixed_delta = _get_amount_fixed_delta(
            sqrt_price_current,
            next_sqrt_price,
            liquidity,
            amount_specified_is_input,
            a_to_b,
        )

    if amount_specified_is_input:
        amount_in, amount_out = amount_fixed_delta, amount_unfixed_delta
    else:
        amount_in, amount_out = amount_unfixed_delta, amount_fixed_delta

    if not amount_specified_is_input and amount_out > amount_remaining:
        amount_out = amount_remaining

    if amount_specified_is_input and not is_max_swap:
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = checked_mul_div(
            amount_in,
            fee_rate,
            FEE_RATE_MUL_VALUE - fee_rate,
            round_up=True,
        )
        if fee_amount > U64_MAX:
            raise NumberDownCastError("fee amount does not fit in 64 bits.")

    return SwapStepComputation(
        amount_in=amount_in,
        amount_out=amount_out,
        next_price=next_sqrt_price,
        fee_amount=fee_amount,
    )


def _get_amount_fixed_delta(
    sqrt_price_current: int,
    sqrt_price_target: int,
    liquidity: int,
    amount_specified_is_input: bool,
    a_to_b: bool,
) -> int:
    if a_to_b == amount_specified_is_input:
        return get_amount_delta_a(sqrt_price_current, sqrt_price_target, liquidity, amount_specified_is_input)
    return get_amount_delta_b(sqrt_price_current, sqrt_price_target, liquidity, amount_specified_is_input)


def _get_amount_unfixed_delta(
    sqrt_price_current: int,
    sqrt_price_target: int,
    liquidity: int,
    amount_specified_is_input: bool,
    a_to_b: bool,
) -> int:
    if a_to_b == amount_specified_is_input:
        return get_amount_delta_b(sqrt_price_current, sqrt_price_target, liquidity, not amount_specified_is_input)
    return get_amount_delta_a(sqrt_price_current, sqrt_price_target, liquidity, not amount_specified_is_input)
