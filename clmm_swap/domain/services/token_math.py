from __future__ import annotations

from clmm_swap.domain.exceptions import (
    DivideByZeroError,
    MultiplicationOverflowError,
    MultiplicationShiftRightOverflowError,
    NumberDownCastError,
    SqrtPriceOutOfBoundsError,
    TokenMaxExceededError,
    TokenMinSubceededError,
)
from clmm_swap.domain.services.tick_math import MAX_SQRT_PRICE_X64, MIN_SQRT_PRICE_X64


U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1
Q64_RESOLUTION = 64


def _div_round_up_if(numerator: int, denominator: int, round_up: bool) -> int:
    if denominator == 0:
        raise DivideByZeroError("Division by zero.")
    quotient, remainder = divmod(numerator, denominator)
    if round_up and remainder != 0:
        return quotient + 1
    return quotient


def checked_mul_div(a: int, b: int, denominator: int, *, round_up: bool = False) -> int:
    product = a * b
    if product > U128_MAX:
        raise MultiplicationOverflowError("mul_div product exceeds 128 bits.")
    return _div_round_up_if(product, denominator, round_up)


def increasing_price_order(sqrt_price_0: int, sqrt_price_1: int) -> tuple[int, int]:
    if sqrt_price_0 > sqrt_price_1:
        return sqrt_price_1, sqrt_price_0
    return sqrt_price_0, sqrt_price_1


def get_amount_delta_a(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    """Amount of token A between two prices: L * (upper - lower) / (upper * lower)."""
    sqrt_price_lower, sqrt_price_upper = increasing_price_order(sqrt_price_0, sqrt_price_1)
    sqrt_price_diff = sqrt_price_upper - sqrt_price_lower

    numerator = (liquidity * sqrt_price_diff) << Q64_RESOLUTION
    if numerator > U256_MAX:
        raise MultiplicationOverflowError("amount delta a numerator exceeds 256 bits.")
    denominator = sqrt_price_upper * sqrt_price_lower

    result = _div_round_up_if(numerator, denominator, round_up)
    if result > U128_MAX:
        raise NumberDownCastError("amount delta a does not fit in 128 bits.")
    if result > U64_MAX:
        raise TokenMaxExceededError("amount delta a exceeds 64 bits.")
    return result


def get_amount_delta_b(sqrt_price_0: int, sqrt_price_1: int, liquidity: int, round_up: bool) -> int:
    """Amount of token B between two prices: L * (upper - lower)."""
    sqrt_price_lower, sqrt_price_upper = increasing_price_order(sqrt_price_0, sqrt_price_1)
    n0 = liquidity
    n1 = sqrt_price_upper - sqrt_price_lower
    if n0 == 0 or n1 == 0:
        return 0

    product = n0 * n1
    if product > U128_MAX:
        raise MultiplicationShiftRightOverflowError("amount delta b product exceeds 128 bits.")

    result = product >> Q64_RESOLUTION
    should_round = round_up and (product & U64_MAX) > 0
    if should_round and result == U64_MAX:
        raise MultiplicationOverflowError("amount delta b exceeds 64 bits after rounding.")
    return result + 1 if should_round else result


def get_next_sqrt_price(
    sqrt_price: int,
    liquidity: int,
    amount: int,
    amount_specified_is_input: bool,
    a_to_b: bool,
) -> int:
    if amount_specified_is_input == a_to_b:
        return get_next_sqrt_price_from_a_round_up(sqrt_price, liquidity, amount, amount_specified_is_input)
    return get_next_sqrt_price_from_b_round_down(sqrt_price, liquidity, amount, amount_specified_is_input)


def get_next_sqrt_price_from_a_round_up(
    sqrt_price: int,
    liquidity: int,
    amount: int,
    amount_specified_is_input: bool,
) -> int:
    # p' = L * p / (L +- amount * p), rounded up
    if amount == 0:
        return sqrt_price

    product = sqrt_price * amount
    numerator = (liquidity * sqrt_price) << Q64_RESOLUTION
    if numerator > U256_MAX:
        raise MultiplicationOverflowError("next sqrt price numerator exceeds 256 bits.")

    liquidity_shift_left = liquidity << Q64_RESOLUTION
    if amount_specified_is_input:
        denominator = liquidity_shift_left + product
    else:
        denominator = liquidity_shift_left - product
    if denominator <= 0:
        raise DivideByZeroError("next sqrt price denominator is not positive.")

    price = _div_round_up_if(numerator, denominator, True)
    if price < MIN_SQRT_PRICE_X64:
        raise TokenMinSubceededError("next sqrt price is below the minimum.")
    if price > MAX_SQRT_PRICE_X64:
        raise TokenMaxExceededError("next sqrt price is above the maximum.")
    return price


def get_next_sqrt_price_from_b_round_down(
    sqrt_price: int,
    liquidity: int,
    amount: int,
    amount_specified_is_input: bool,
) -> int:
    # p' = p +- amount / L, rounded down
    amount_x64 = amount << Q64_RESOLUTION
    delta = _div_round_up_if(amount_x64, liquidity, not amount_specified_is_input)

    if amount_specified_is_input:
        price = sqrt_price + delta
    else:
        price = sqrt_price - delta
    if price < MIN_SQRT_PRICE_X64 or price > MAX_SQRT_PRICE_X64:
        raise SqrtPriceOutOfBoundsError("next sqrt price is outside the supported range.")
    return price
